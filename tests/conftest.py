import pytest


@pytest.fixture
def request_body():
    return {
        "base64Image": "aW1hZ2UtYnl0ZXM=",
        "mimeType": "image/jpeg",
        "backgroundColor": "blue",
        "outfit": "male-suit",
        "enableBeautification": True,
    }
