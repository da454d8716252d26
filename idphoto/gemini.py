import logging
from dataclasses import dataclass
from typing import Any

import httpx

from idphoto.config import Settings

logger = logging.getLogger(__name__)

SAFETY_FINISH_REASONS = {"SAFETY", "IMAGE_SAFETY", "PROHIBITED_CONTENT"}

SAFETY_BLOCKED_MESSAGE = (
    "Generation was blocked by the safety policy. The photo may contain inappropriate content."
)
EMPTY_RESPONSE_MESSAGE = "The AI returned an empty response. Please wait a moment and try again."
NO_IMAGE_MESSAGE = (
    "The AI could not generate an image. Try a different photo or change the settings."
)


class GeminiError(Exception):
    """Gemini answered with a non-2xx status."""


@dataclass(frozen=True)
class ImagePart:
    data: str
    mime_type: str


@dataclass(frozen=True)
class TextPart:
    text: str


Part = ImagePart | TextPart


@dataclass(frozen=True)
class GenerationResult:
    status_code: int
    image: str | None = None
    error: str | None = None


def _provider_error(response: httpx.Response) -> GeminiError:
    try:
        payload = response.json()
    except ValueError:
        return GeminiError(f"Google returned an unexpected error ({response.status_code}).")

    error_obj = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error_obj, dict):
        message = error_obj.get("message", "")
        if "safety" in message.lower():
            return GeminiError(f"Google: {SAFETY_BLOCKED_MESSAGE}")
        if message:
            return GeminiError(f"Google: {message}")

    return GeminiError(f"Google error ({response.status_code}). Please try again.")


async def generate_content(
    settings: Settings,
    base64_image: str,
    mime_type: str,
    prompt: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Send the photo and instruction to Gemini and return the raw JSON payload."""
    parts: list[dict[str, Any]] = [
        {"inlineData": {"mimeType": mime_type, "data": base64_image}},
        {"text": prompt},
    ]

    logger.info(f"Requesting ID photo edit from {settings.model}")
    async with httpx.AsyncClient(timeout=settings.timeout, transport=transport) as client:
        response = await client.post(
            f"{settings.base_url}/models/{settings.model}:generateContent",
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": settings.api_key.get_secret_value(),
            },
            json={
                "contents": [{"parts": parts}],
                "generationConfig": {
                    "responseModalities": ["IMAGE", "TEXT"],
                },
            },
        )

    if response.status_code >= 400:
        raise _provider_error(response)

    return response.json()


def parse_parts(candidate: dict[str, Any]) -> list[Part]:
    """Map a candidate's content segments to ImagePart/TextPart, skipping anything else."""
    parsed: list[Part] = []
    for part in ((candidate.get("content") or {}).get("parts")) or []:
        inline_data = part.get("inline_data") or part.get("inlineData")
        if inline_data and inline_data.get("data"):
            mime = inline_data.get("mime_type") or inline_data.get("mimeType") or "image/png"
            parsed.append(ImagePart(data=inline_data["data"], mime_type=mime))
        elif part.get("text"):
            parsed.append(TextPart(text=part["text"]))
    return parsed


def _is_safety_blocked(payload: dict[str, Any], candidate: dict[str, Any] | None) -> bool:
    if candidate and candidate.get("finishReason") in SAFETY_FINISH_REASONS:
        return True
    return bool((payload.get("promptFeedback") or {}).get("blockReason"))


def interpret_response(payload: dict[str, Any]) -> GenerationResult:
    candidates = payload.get("candidates") or []
    candidate = candidates[0] if candidates else None

    if _is_safety_blocked(payload, candidate):
        logger.warning("Gemini blocked the request on safety grounds")
        return GenerationResult(status_code=400, error=SAFETY_BLOCKED_MESSAGE)

    raw_parts = ((candidate or {}).get("content") or {}).get("parts") or []
    if not raw_parts:
        return GenerationResult(status_code=500, error=EMPTY_RESPONSE_MESSAGE)

    parts = parse_parts(candidate)
    images = [part for part in parts if isinstance(part, ImagePart)]
    if images:
        return GenerationResult(status_code=200, image=images[0].data)

    texts = [part for part in parts if isinstance(part, TextPart)]
    if texts:
        logger.warning(f"Gemini answered with text only: {texts[0].text}")
        return GenerationResult(status_code=500, error=f"Message from the AI: {texts[0].text}")

    return GenerationResult(status_code=500, error=NO_IMAGE_MESSAGE)
