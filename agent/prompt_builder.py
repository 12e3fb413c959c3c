import json
from typing import Optional

from src.models.weather.weather_card import AUTO_LANGUAGE, WeatherFacts

DEFAULT_ASPECT_RATIO = "9:16"
SUPPORTED_ASPECT_RATIOS = ("9:16", "1:1", "16:9", "4:5")

# Record shown to the model as the expected output shape
EXAMPLE_WEATHER_FACTS = WeatherFacts(
    native_city_name="Tokyo",
    native_date_formatted="January 1, 2024",
    weather_condition="Sunny",
    temp_range="5°C - 10°C",
)


def is_auto_language(language: Optional[str]) -> bool:
    return not language or not language.strip() or language.strip() == AUTO_LANGUAGE


def language_instruction(language: Optional[str]) -> str:
    """
    Describe the target language for the localized weather fields.

    Args:
        language: Explicit language name, or the local-language sentinel

    Returns:
        "the city's local native language" for the sentinel, otherwise the quoted language name
    """
    if is_auto_language(language):
        return "the city's local native language"
    return f'"{language.strip()}"'


def image_language_instruction(language: Optional[str]) -> str:
    """Language phrase for the on-image text, worded like the image template."""
    if is_auto_language(language):
        return "該城市的當地母語語言"
    return f'"{language.strip()}"'


def resolve_aspect_ratio(aspect_ratio: Optional[str], default: str = DEFAULT_ASPECT_RATIO) -> str:
    """Return a supported aspect ratio, falling back to the default."""
    if aspect_ratio and aspect_ratio.strip() in SUPPORTED_ASPECT_RATIOS:
        return aspect_ratio.strip()
    return default if default in SUPPORTED_ASPECT_RATIOS else DEFAULT_ASPECT_RATIO


def build_reasoning_prompt(city: str, current_utc_timestamp: str, language: Optional[str] = AUTO_LANGUAGE) -> str:
    """
    Build the prompt asking the text model for localized weather facts as JSON.

    Args:
        city: City name exactly as submitted by the user
        current_utc_timestamp: Current UTC time, captured by the caller
        language: Explicit language name, or the local-language sentinel

    Returns:
        Prompt text
    """
    lang = language_instruction(language)
    example = json.dumps(EXAMPLE_WEATHER_FACTS.model_dump(), ensure_ascii=False)

    return f"""
You are a weather data assistant.
The user wants a weather card for the city: "{city}".

Current System UTC Time: {current_utc_timestamp}
Target Language: {lang}

Task:
1. Identify the city's location and timezone.
2. Calculate the CURRENT local date and time for that city based on the UTC time provided above.
3. Determine the likely current weather condition (e.g. based on season/latitude) or use "Sunny" as a default if unsure, but try to be realistic for the season.
4. Provide the following fields strictly in JSON format:
    - "native_city_name": The name of the city translated into {lang}.
    - "native_date_formatted": The current local date formatted in {lang}.
    - "weather_condition": The weather condition translated into {lang}.
    - "temp_range": A realistic temperature range for today in the local unit (e.g. "15°C - 20°C").

Example of the expected shape: {example}
If "{city}" is not a real city, return {{"error": "<short reason>"}} instead.

Output JSON only. No markdown.
""".strip()


def build_image_prompt(
    facts: WeatherFacts,
    aspect_ratio: Optional[str] = DEFAULT_ASPECT_RATIO,
    language: Optional[str] = AUTO_LANGUAGE,
) -> str:
    """
    Build the fixed weather-card visual template for the image model.

    Args:
        facts: Parsed weather facts for the city
        aspect_ratio: Requested aspect ratio, unknown values fall back to the default
        language: Language all on-image text has to be written in

    Returns:
        Prompt text
    """
    ratio = resolve_aspect_ratio(aspect_ratio)
    lang = image_language_instruction(language)

    return f"""
[畫面設定]
呈現一個清晰的、45° 俯視角度的豎向（{ratio}）等距縮小 3D 卡通場景。
畫面中心以「{facts.native_city_name}」的代表性地標為主體，展現精準細緻的建模。

[風格與材質]
場景使用柔和、細膩的質感，採用逼真的 PBR 材質，並搭配自然柔和的光影效果。
整體視覺風格清新、舒心、簡約。背景為柔和的純色，以凸顯主要內容。

[天氣氛圍整合]
當前天氣為「{facts.weather_condition}」。請將天氣元素以創意方式融入城市建築，使城市景觀與大氣條件產生動態互動（例如：雨天時街道有積水倒影、晴天時有明亮光斑、多雲時有柔和漫射光、下雪時有積雪），打造沉浸式的天氣氛圍。

[文字與 UI 版面]
在畫面上方中央展示明顯的「{facts.weather_condition}」圖示（3D Icon）。
* **城市名稱**：位於圖示正上方，顯示「{facts.native_city_name}」（大字）。
* **日期**：位於圖示下方，顯示「{facts.native_date_formatted}」（小字）。
* **氣溫**：位於日期下方，顯示「{facts.temp_range}」（中字）。
* **重要：確保畫面上的所有文字都嚴格使用 {lang} 書寫。** 文字與圖示不需背景框，可與建築輕微重疊，保持畫面通透。
""".strip()
