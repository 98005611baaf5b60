"""
Интерфейсы (абстрактные классы) для домена Cataloging.

Домен Cataloging отвечает за:
1. Распознавание книги на фотографии (название, автор, рамка, категории)
2. Обрезку обложки по рамке
3. Поиск или генерацию синопсиса
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from contracts.d1_cataloging_dto import (
    BoundingBox,
    CatalogingResult,
    IdentificationResult,
    ImageAsset,
    PipelineStep,
    SynopsisResult,
)


class IIdentificationProvider(ABC):
    """Интерфейс для провайдеров распознавания книги (домен Cataloging)."""

    @abstractmethod
    def identify(self, image: ImageAsset) -> IdentificationResult:
        """
        Распознаёт книгу на изображении.

        Args:
            image: Фотография книги

        Returns:
            IdentificationResult (все поля опциональны)

        Raises:
            IdentificationError: Если сервис не вернул пригодный ответ
        """
        pass


class ISynopsisProvider(ABC):
    """Интерфейс для провайдеров синопсиса (домен Cataloging)."""

    @abstractmethod
    def find_synopsis(self, title: str, author: str) -> SynopsisResult:
        """
        Находит или генерирует синопсис книги.

        НИКОГДА не выбрасывает исключения: ошибки превращаются в заглушку.
        """
        pass


class IImageCropper(ABC):
    """Интерфейс для обрезки изображения по рамке (домен Cataloging)."""

    @abstractmethod
    def crop(self, image: ImageAsset, box: BoundingBox) -> ImageAsset:
        """
        Вырезает область рамки.

        При вырожденной рамке или ошибке декодирования возвращает исходное изображение.
        """
        pass


class ICatalogingPipeline(ABC):
    """Интерфейс для пайплайна каталогизации одной фотографии."""

    @abstractmethod
    def process(
        self,
        image: ImageAsset,
        auto_crop: bool = True,
        on_step: Optional[Callable[[PipelineStep], None]] = None,
    ) -> CatalogingResult:
        """
        Обрабатывает фотографию: распознавание -> обрезка -> синопсис.

        Raises:
            IdentificationError: единственный жёсткий отказ пайплайна
        """
        pass

    @abstractmethod
    def regenerate_synopsis(self, title: str, author: str) -> SynopsisResult:
        """Повторный поиск синопсиса без повторного распознавания."""
        pass
