"""
Tests for the async ID photo client.
"""

import json

import httpx
import pytest

from idphoto.client import NO_IMAGE_MESSAGE, UNKNOWN_FAILURE_MESSAGE, IdPhotoError, generate_id_photo


async def call(handler, **kwargs):
    return await generate_id_photo(
        "aW1hZ2U=",
        "image/png",
        "gray",
        "female-suit",
        False,
        base_url="http://idphoto.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_returns_image_and_sends_all_fields():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"base64Image": "ZWRpdGVk"})

    assert await call(handler) == "ZWRpdGVk"
    assert seen["method"] == "POST"
    assert seen["path"] == "/api/generate"
    assert seen["body"] == {
        "base64Image": "aW1hZ2U=",
        "mimeType": "image/png",
        "backgroundColor": "gray",
        "outfit": "female-suit",
        "enableBeautification": False,
    }


@pytest.mark.asyncio
async def test_json_error_body_is_used():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "Generation was blocked by the safety policy."})

    with pytest.raises(IdPhotoError, match="blocked by the safety policy"):
        await call(handler)


@pytest.mark.asyncio
async def test_json_error_without_error_field():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, json={"detail": "bad gateway"})

    with pytest.raises(IdPhotoError, match="status: 502"):
        await call(handler)


@pytest.mark.asyncio
async def test_plain_text_error_is_truncated():
    body = "x" * 250

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(504, text=body)

    with pytest.raises(IdPhotoError) as exc_info:
        await call(handler)

    assert str(exc_info.value) == "x" * 200 + "..."


@pytest.mark.asyncio
async def test_short_text_error_is_not_truncated():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="An error occurred with your deployment")

    with pytest.raises(IdPhotoError) as exc_info:
        await call(handler)

    assert str(exc_info.value) == "An error occurred with your deployment"


@pytest.mark.asyncio
async def test_missing_image_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    with pytest.raises(IdPhotoError) as exc_info:
        await call(handler)

    assert str(exc_info.value) == NO_IMAGE_MESSAGE


@pytest.mark.asyncio
async def test_network_failure_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(IdPhotoError, match="Connection refused") as exc_info:
        await call(handler)

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_failure_without_message_gets_generic_message():
    def handler(request: httpx.Request) -> httpx.Response:
        raise RuntimeError()

    with pytest.raises(IdPhotoError) as exc_info:
        await call(handler)

    assert str(exc_info.value) == UNKNOWN_FAILURE_MESSAGE
