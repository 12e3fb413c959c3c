from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_OUTPUT_MIME_TYPE = "image/jpeg"


class GatewayMode(str, Enum):
    """Kind of round trip performed by the Gemini gateway."""

    TEXT = "text"
    GENERATE = "generate"
    EDIT = "edit"


class ReferenceImage(BaseModel):
    """Single reference image sent along with an edit prompt."""

    model_config = ConfigDict(frozen=True)

    data: Union[bytes, str] = Field(
        ..., description="Raw bytes, bare base64 text or a data URI"
    )
    mime_type: str = Field(default="image/jpeg", description="MIME type of the image")


class GatewayRequest(BaseModel):
    """One call to the external model. Carries no retry or queue state."""

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(default="", description="Prompt text sent to the model")
    mode: GatewayMode = Field(default=GatewayMode.TEXT, description="Requested round trip")
    image: Optional[ReferenceImage] = Field(default=None, description="Reference image for edits")
    negative_prompt: Optional[str] = Field(
        default=None, description="Things the generated image should avoid"
    )


class GeneratedArtifact(BaseModel):
    """A generated image, kept as base64 so it can be inlined as a data URI."""

    model_config = ConfigDict(frozen=True)

    base64_data: str = Field(..., description="Base64 encoded image payload")
    mime_type: str = Field(default=DEFAULT_OUTPUT_MIME_TYPE, description="MIME type of the payload")

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"


class TextResult(BaseModel):
    """Textual first artifact of a text-model call."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Generated text")
