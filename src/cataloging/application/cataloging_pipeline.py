"""
Пайплайн для домена Cataloging.

Обрабатывает фотографию книги строго по порядку:
1. Распознавание (название, автор, рамка, категории)
2. Title Case + значения по умолчанию
3. Склейка категорий в одну строку
4. Обрезка по рамке (если включена и рамка из 4 чисел)
5. Синопсис

ЦКП: CatalogingResult — готовые поля книги и обработанное изображение.

ВАЖНО: Единственный жёсткий отказ — IdentificationError на шаге 1.
Все остальные шаги деградируют до безопасных значений.
"""

from typing import Callable, Optional

from loguru import logger

from config.settings import CATEGORY_DELIMITER, UNKNOWN_AUTHOR, UNKNOWN_TITLE
from contracts.d1_cataloging_dto import (
    BoundingBox,
    CatalogingResult,
    IdentificationResult,
    ImageAsset,
    PipelineStep,
    SynopsisResult,
)
from ..domain.interfaces import (
    ICatalogingPipeline,
    IIdentificationProvider,
    IImageCropper,
    ISynopsisProvider,
)
from ..text.title_caser import to_title_case


class CatalogingPipeline(ICatalogingPipeline):
    """
    Пайплайн домена Cataloging.

    Координирует:
    1. IIdentificationProvider
    2. IImageCropper
    3. ISynopsisProvider
    """

    def __init__(
        self,
        identification_provider: IIdentificationProvider,
        synopsis_provider: ISynopsisProvider,
        image_cropper: IImageCropper
    ):
        """
        Инициализация пайплайна.

        Args:
            identification_provider: Распознавание книги (Gemini Vision)
            synopsis_provider: Поиск синопсиса (Gemini + Google Search)
            image_cropper: Обрезка обложки
        """
        self.identification_provider = identification_provider
        self.synopsis_provider = synopsis_provider
        self.image_cropper = image_cropper

        logger.info("[Cataloging] Pipeline инициализирован")

    def process(
        self,
        image: ImageAsset,
        auto_crop: bool = True,
        on_step: Optional[Callable[[PipelineStep], None]] = None,
    ) -> CatalogingResult:
        """
        Обрабатывает фотографию книги.

        Args:
            image: Исходная фотография
            auto_crop: Обрезать ли обложку по рамке модели
            on_step: Callback о начале этапов (ANALYZING, SYNOPSIS)

        Returns:
            CatalogingResult

        Raises:
            IdentificationError: Если распознавание не удалось (частичной записи нет)
        """
        logger.info(f"[Cataloging] Обработка: {image.filename or '<image>'}")

        # 1. Распознавание: ошибка пробрасывается без изменений
        self._notify(on_step, PipelineStep.ANALYZING)
        identity = self.identification_provider.identify(image)

        # 2. Title Case + значения по умолчанию
        title = to_title_case(identity.title or UNKNOWN_TITLE)
        author = to_title_case(identity.author or UNKNOWN_AUTHOR)

        # 3. Категории одной строкой
        category = CATEGORY_DELIMITER.join(identity.categories) if identity.categories else ""

        # 4. Обрезка
        processed_asset = self._crop_if_requested(image, identity, auto_crop)

        # 5. Синопсис (заглушка при ошибке проходит как обычный результат)
        self._notify(on_step, PipelineStep.SYNOPSIS)
        synopsis = self.synopsis_provider.find_synopsis(title, author)

        logger.info(
            f"[Cataloging] Готово: '{title}' / '{author}' "
            f"(синопсис: {synopsis.status.value}, обрезка: {processed_asset is not image})"
        )

        return CatalogingResult(
            title=title,
            author=author,
            category=category,
            synopsis=synopsis.text,
            processed_asset=processed_asset,
        )

    def regenerate_synopsis(self, title: str, author: str) -> SynopsisResult:
        """Повторный поиск синопсиса для уже отредактированных названия и автора."""
        return self.synopsis_provider.find_synopsis(title, author)

    def _crop_if_requested(
        self,
        image: ImageAsset,
        identity: IdentificationResult,
        auto_crop: bool
    ) -> ImageAsset:
        """Обрезает изображение, только если включено и рамка из 4 чисел."""
        if not auto_crop:
            logger.debug("[Cataloging] Обрезка отключена")
            return image

        if not identity.box_2d or len(identity.box_2d) != 4:
            logger.debug(f"[Cataloging] Рамки нет или она некорректна: {identity.box_2d}")
            return image

        return self.image_cropper.crop(image, BoundingBox.from_sequence(identity.box_2d))

    @staticmethod
    def _notify(on_step: Optional[Callable[[PipelineStep], None]], step: PipelineStep) -> None:
        if on_step:
            on_step(step)
