import base64
import binascii
import re
from typing import Optional, Tuple, Union

_DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w=.+-]+)*;base64,", re.IGNORECASE)


def strip_data_uri_prefix(payload: str) -> Tuple[Optional[str], str]:
    """
    Split a data URI into its MIME type and base64 payload.

    Args:
        payload: Data URI or bare base64 text

    Returns:
        Tuple of (mime type or None, base64 text without the prefix)
    """
    match = _DATA_URI_PATTERN.match(payload)
    if not match:
        return None, payload
    return match.group("mime"), payload[match.end():]


def decode_image_payload(data: Union[bytes, str], mime_type: str) -> Tuple[bytes, str]:
    """
    Turn an image payload into raw bytes ready to forward to the model.

    Args:
        data: Raw bytes, bare base64 text or a data URI
        mime_type: MIME type to use when the payload does not carry one

    Returns:
        Tuple of (raw bytes, MIME type)

    Raises:
        ValueError: If a text payload is not valid base64
    """
    if isinstance(data, bytes):
        return data, mime_type

    uri_mime, encoded = strip_data_uri_prefix(data.strip())
    try:
        raw = base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Image payload is not valid base64: {str(e)}")

    return raw, uri_mime or mime_type
