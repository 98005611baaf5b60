"""
DTO контракт: D1 (Cataloging) -> D2 (Catalog)

Результат обработки фотографии книги:
- ImageAsset — бинарное изображение (исходное или обрезанное)
- BoundingBox — рамка книги на шкале 0-1000
- IdentificationResult — ответ модели распознавания (все поля опциональны)
- SynopsisResult — синопсис (всегда есть текст, даже при ошибке)
- CatalogingResult — итог пайплайна для одной фотографии

ВАЖНО: Ответ модели НЕ гарантирует ymin <= ymax и xmin <= xmax.
Нормализацию рамки выполняет ImageCropper.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class ImageAsset:
    """
    Бинарное изображение.

    Используется и для исходной фотографии, и для обрезанной обложки.
    """
    data: bytes                          # Байты изображения
    mime_type: str = "image/jpeg"        # MIME тип (image/jpeg, image/png, ...)
    filename: Optional[str] = None       # Исходное имя файла (для цены)

    @property
    def extension(self) -> str:
        """Расширение файла по MIME типу: image/jpeg -> jpeg."""
        return self.mime_type.split("/", 1)[-1].split(";", 1)[0]


@dataclass(frozen=True)
class BoundingBox:
    """
    Рамка книги на изображении, нормализованная к шкале 0-1000.

    Порядок координат как у модели: (ymin, xmin, ymax, xmax).
    """
    ymin: float
    xmin: float
    ymax: float
    xmax: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "BoundingBox":
        """Создаёт рамку из списка [ymin, xmin, ymax, xmax]."""
        if len(values) != 4:
            raise ValueError(f"Bounding box must have 4 components, got {len(values)}")
        ymin, xmin, ymax, xmax = (float(v) for v in values)
        return cls(ymin=ymin, xmin=xmin, ymax=ymax, xmax=xmax)

    def ordered(self) -> "BoundingBox":
        """Возвращает рамку с переставленными перевёрнутыми координатами."""
        return BoundingBox(
            ymin=min(self.ymin, self.ymax),
            xmin=min(self.xmin, self.xmax),
            ymax=max(self.ymin, self.ymax),
            xmax=max(self.xmin, self.xmax),
        )


class IdentificationResult(BaseModel):
    """
    Структурированный ответ модели распознавания обложки.

    Все поля опциональны: модель может пропустить любое из них.
    Значения по умолчанию подставляет CatalogingPipeline.
    """

    title: Optional[str] = Field(None, description="Название книги")
    author: Optional[str] = Field(None, description="Автор книги")
    box_2d: Optional[List[float]] = Field(
        None, description="Рамка книги [ymin, xmin, ymax, xmax] на шкале 0-1000"
    )
    categories: List[str] = Field(
        default_factory=list, description="Категории из контролируемого словаря"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("categories", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []


class SynopsisStatus(str, Enum):
    """Откуда взят текст синопсиса."""
    GROUNDED = "grounded"        # Найден через поиск (есть grounding metadata)
    GENERATED = "generated"      # Сгенерирован моделью без источников
    PLACEHOLDER = "placeholder"  # Заглушка (пустой ответ или ошибка сервиса)


@dataclass(frozen=True)
class SynopsisResult:
    """
    Результат поиска синопсиса.

    Тотальный тип: text есть ВСЕГДА, ошибки сервиса превращаются в заглушку.
    """
    text: str
    status: SynopsisStatus = SynopsisStatus.GENERATED


class PipelineStep(str, Enum):
    """Этапы пайплайна, о которых сообщает on_step callback."""
    ANALYZING = "analyzing"
    SYNOPSIS = "synopsis"


@dataclass(frozen=True)
class CatalogingResult:
    """
    Итог CatalogingPipeline для одной фотографии.

    processed_asset — обрезанная обложка или исходное изображение.
    """
    title: str
    author: str
    category: str
    synopsis: str
    processed_asset: ImageAsset
