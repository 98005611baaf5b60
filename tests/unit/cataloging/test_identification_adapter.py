import json

import pytest

from contracts.d1_cataloging_dto import IdentificationResult, ImageAsset
from src.cataloging.domain.exceptions import IdentificationError, IdentificationResponseError
from src.cataloging.infrastructure.adapters.gemini_identification_adapter import (
    GeminiIdentificationAdapter,
)


@pytest.fixture
def image():
    return ImageAsset(data=b"\xff\xd8\xff fake", filename="380.jpg")


def make_adapter(fake_client, vocabulary, **reply):
    client = fake_client(**reply)
    return GeminiIdentificationAdapter(client, vocabulary), client


def test_valid_response(fake_client, vocabulary, image):
    """Тест: корректный JSON превращается в IdentificationResult."""
    reply = json.dumps({
        "title": "the hobbit",
        "author": "J.R.R. Tolkien",
        "box_2d": [10, 20, 900, 800],
        "categories": ["Fiction", "Classics and Poetry"],
    })
    adapter, client = make_adapter(fake_client, vocabulary, json_reply=reply)

    result = adapter.identify(image)

    assert isinstance(result, IdentificationResult)
    assert result.title == "the hobbit"
    assert result.box_2d == [10, 20, 900, 800]
    assert result.categories == ["Fiction", "Classics and Poetry"]
    assert "Fiction, Classics and Poetry, Science, Nature" in client.prompts[0]


def test_categories_outside_vocabulary_dropped(fake_client, vocabulary, image):
    reply = json.dumps({"title": "T", "author": "A", "box_2d": [], "categories": ["Astrology", "Nature"]})
    adapter, _ = make_adapter(fake_client, vocabulary, json_reply=reply)

    assert adapter.identify(image).categories == ["Nature"]


def test_missing_fields_are_optional(fake_client, vocabulary, image):
    """Тест: модель может пропустить любое поле."""
    adapter, _ = make_adapter(fake_client, vocabulary, json_reply='{"categories": null}')

    result = adapter.identify(image)

    assert result.title is None
    assert result.author is None
    assert result.box_2d is None
    assert result.categories == []


@pytest.mark.parametrize("reply", [None, "", "   "])
def test_empty_response(fake_client, vocabulary, image, reply):
    adapter, _ = make_adapter(fake_client, vocabulary, json_reply=reply)

    with pytest.raises(IdentificationResponseError):
        adapter.identify(image)


@pytest.mark.parametrize("reply", ["not json at all", '{"box_2d": "wide"}', "[1, 2, 3]"])
def test_malformed_response(fake_client, vocabulary, image, reply):
    adapter, _ = make_adapter(fake_client, vocabulary, json_reply=reply)

    with pytest.raises(IdentificationResponseError):
        adapter.identify(image)


def test_service_failure(fake_client, vocabulary, image):
    """Тест: ошибка сервиса оборачивается в IdentificationError."""
    adapter, _ = make_adapter(fake_client, vocabulary, error=ConnectionError("network down"))

    with pytest.raises(IdentificationError) as exc_info:
        adapter.identify(image)

    assert exc_info.value.message == "Failed to identify book from image."
    assert isinstance(exc_info.value.original_error, ConnectionError)
