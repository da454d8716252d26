"""Async client for the /api/generate endpoint.

Every failure surfaces as an IdPhotoError carrying a message that can be shown
to the user as-is.
"""
import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
ERROR_TEXT_LIMIT = 200
NO_IMAGE_MESSAGE = "The server returned no image data."
UNKNOWN_FAILURE_MESSAGE = "Photo generation failed because of an unknown error."


class IdPhotoError(Exception):
    pass


def _error_message(response: httpx.Response) -> str:
    message = f"A server error occurred (status: {response.status_code})."
    try:
        payload = response.json()
    except ValueError:
        # Not JSON, e.g. an HTML timeout page from the hosting platform.
        text = response.text
        if text:
            suffix = "..." if len(text) > ERROR_TEXT_LIMIT else ""
            return text[:ERROR_TEXT_LIMIT] + suffix
        return message

    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return message


async def generate_id_photo(
    base64_image: str,
    mime_type: str,
    background_color: str,
    outfit: str,
    enable_beautification: bool,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 120.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """POST the photo and options, returning the edited image as base64."""
    try:
        async with httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport) as client:
            response = await client.post(
                "/api/generate",
                json={
                    "base64Image": base64_image,
                    "mimeType": mime_type,
                    "backgroundColor": background_color,
                    "outfit": outfit,
                    "enableBeautification": enable_beautification,
                },
            )

        if response.is_error:
            raise IdPhotoError(_error_message(response))

        try:
            data = response.json()
        except ValueError:
            raise IdPhotoError(NO_IMAGE_MESSAGE)
        image = data.get("base64Image") if isinstance(data, dict) else None
        if not image:
            raise IdPhotoError(NO_IMAGE_MESSAGE)
        return image

    except IdPhotoError as e:
        logger.error(f"ID photo request failed: {e}")
        raise
    except Exception as e:
        logger.error(f"ID photo request failed: {e!r}")
        raise IdPhotoError(str(e) or UNKNOWN_FAILURE_MESSAGE) from e
