"""Общие fixtures: тестовые изображения, фейковый клиент Gemini и фейковый пайплайн."""

import io
from typing import Callable, List, Optional, Tuple

import cv2
import numpy as np
import pytest
from PIL import Image

from contracts.d1_cataloging_dto import (
    CatalogingResult,
    ImageAsset,
    PipelineStep,
    SynopsisResult,
    SynopsisStatus,
)
from src.cataloging.domain.exceptions import IdentificationError
from src.cataloging.infrastructure.gemini.gemini_client import GroundedText
from src.cataloging.vocabulary import CategoryVocabulary


def encode_image(width: int, height: int, ext: str = ".jpg") -> bytes:
    """Кодирует градиентное BGR изображение заданного размера."""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, :, 0] = np.linspace(0, 255, width, dtype=np.uint8)
    image[:, :, 2] = 200
    success, buffer = cv2.imencode(ext, image)
    assert success
    return buffer.tobytes()


@pytest.fixture
def make_jpeg() -> Callable[..., bytes]:
    """Fixture: фабрика JPEG байтов (width, height)."""
    return encode_image


def encode_mpo(width: int = 40, height: int = 30) -> bytes:
    """Двухкадровый MPO (JPEG с маркером MPF), как у фотографий с телефона."""
    first = Image.new("RGB", (width, height), (200, 30, 30))
    second = Image.new("RGB", (width, height), (30, 200, 30))
    buffer = io.BytesIO()
    first.save(buffer, format="MPO", save_all=True, append_images=[second])
    return buffer.getvalue()


@pytest.fixture
def mpo_bytes() -> bytes:
    """Fixture: фотография камеры в формате MPO."""
    return encode_mpo()


@pytest.fixture
def make_asset() -> Callable[..., ImageAsset]:
    """Fixture: фабрика ImageAsset с JPEG байтами."""
    def _make(filename: Optional[str] = "380.jpg", width: int = 80, height: int = 60) -> ImageAsset:
        return ImageAsset(data=encode_image(width, height), mime_type="image/jpeg", filename=filename)
    return _make


@pytest.fixture
def vocabulary() -> CategoryVocabulary:
    """Fixture: небольшой словарь категорий."""
    return CategoryVocabulary.model_validate({
        "groups": [
            {"name": "Literature", "categories": ["Fiction", "Classics and Poetry"]},
            {"name": "Science", "categories": ["Science", "Nature"]},
        ]
    })


class FakeGeminiClient:
    """Фейковый GeminiClient: заранее заданные ответы, без сети."""

    def __init__(
        self,
        json_reply: Optional[str] = None,
        text_reply: Optional[str] = None,
        grounded: bool = False,
        error: Optional[Exception] = None
    ):
        self.json_reply = json_reply
        self.text_reply = text_reply
        self.grounded = grounded
        self.error = error
        self.prompts: List[str] = []
        self.schemas: list = []

    def generate_json(self, image, prompt, schema):
        self.prompts.append(prompt)
        self.schemas.append(schema)
        if self.error:
            raise self.error
        return self.json_reply

    def generate_grounded_text(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return GroundedText(text=self.text_reply, grounded=self.grounded)


@pytest.fixture
def fake_client() -> type:
    """Fixture: класс фейкового клиента Gemini."""
    return FakeGeminiClient


class FakePipeline:
    """
    Фейковый пайплайн каталогизации.

    Файлы из fail_on завершаются IdentificationError, остальные дают
    запись "Title <имя>" и "обрезанное" изображение.
    """

    def __init__(
        self,
        fail_on: Tuple[str, ...] = (),
        synopsis: Optional[SynopsisResult] = None
    ):
        self.fail_on = set(fail_on)
        self.synopsis = synopsis or SynopsisResult("A fresh synopsis.", SynopsisStatus.GROUNDED)
        self.calls: List[Optional[str]] = []
        self.auto_crop_flags: List[bool] = []
        self.regenerated: List[Tuple[str, str]] = []
        self.before_call: Optional[Callable[[ImageAsset], None]] = None

    def process(self, image, auto_crop=True, on_step=None):
        self.calls.append(image.filename)
        self.auto_crop_flags.append(auto_crop)
        if self.before_call:
            self.before_call(image)
        if on_step:
            on_step(PipelineStep.ANALYZING)
        if image.filename in self.fail_on:
            raise IdentificationError(
                message="Failed to identify book from image.",
                component="FakePipeline"
            )
        if on_step:
            on_step(PipelineStep.SYNOPSIS)

        stem = (image.filename or "book").rsplit(".", 1)[0]
        return CatalogingResult(
            title=f"Title {stem}",
            author="Some Author",
            category="Fiction",
            synopsis="A synopsis.",
            processed_asset=ImageAsset(data=b"cropped-" + image.data, filename=image.filename),
        )

    def regenerate_synopsis(self, title, author):
        self.regenerated.append((title, author))
        return self.synopsis


@pytest.fixture
def fake_pipeline() -> FakePipeline:
    """Fixture: фейковый пайплайн без ошибок."""
    return FakePipeline()


@pytest.fixture
def failing_pipeline_factory() -> Callable[..., FakePipeline]:
    """Fixture: фабрика фейкового пайплайна с ошибками для заданных файлов."""
    return lambda *names, **kwargs: FakePipeline(fail_on=names, **kwargs)
