from types import SimpleNamespace

import pytest
from google.genai import types

from src.cataloging.infrastructure.gemini import gemini_client
from src.cataloging.infrastructure.gemini.gemini_client import GeminiClient
from src.cataloging.infrastructure.gemini.prompts import (
    build_identification_prompt,
    build_identification_schema,
    build_synopsis_prompt,
)


def test_missing_api_key(monkeypatch):
    """Тест: без ключа клиент не создаётся."""
    monkeypatch.setattr(gemini_client, "GEMINI_API_KEY", "")

    with pytest.raises(ValueError):
        GeminiClient()


def test_grounded_when_chunks_present():
    chunk = SimpleNamespace(web=SimpleNamespace(uri="https://example.com"))
    response = SimpleNamespace(candidates=[
        SimpleNamespace(grounding_metadata=SimpleNamespace(grounding_chunks=[chunk])),
    ])

    assert GeminiClient._is_grounded(response) is True


@pytest.mark.parametrize("candidates", [
    None,
    [],
    [SimpleNamespace(grounding_metadata=None)],
    [SimpleNamespace(grounding_metadata=SimpleNamespace(grounding_chunks=None))],
    [SimpleNamespace(grounding_metadata=SimpleNamespace(grounding_chunks=[]))],
])
def test_not_grounded(candidates):
    assert GeminiClient._is_grounded(SimpleNamespace(candidates=candidates)) is False


def test_identification_schema_restricts_categories():
    """Тест: категории в схеме ответа ограничены enum словаря."""
    schema = build_identification_schema(["Fiction", "Science"], 1000)

    assert schema.type == types.Type.OBJECT
    assert schema.properties["categories"].items.enum == ["Fiction", "Science"]
    assert set(schema.required) == {"title", "author", "box_2d", "categories"}


def test_prompts_carry_parameters():
    identification = build_identification_prompt(["Fiction", "Science"], 1000)
    synopsis = build_synopsis_prompt("The Hobbit", "J.r.r. Tolkien", 100)

    assert "Fiction, Science" in identification
    assert "0 to 1000" in identification
    assert '"The Hobbit"' in synopsis
    assert '"J.r.r. Tolkien"' in synopsis
    assert "less than 100 words" in synopsis
