"""
Фабрика для создания компонентов домена Cataloging.

Предоставляет удобные методы для создания и конфигурации
всех компонентов домена Cataloging через единый интерфейс.
"""

from typing import Callable, Optional

from loguru import logger

from contracts.d2_catalog_dto import BatchItem
from src.catalog.store import CatalogStore
from ..domain.exceptions import CatalogingConfigurationError
from ..domain.interfaces import (
    ICatalogingPipeline,
    IIdentificationProvider,
    IImageCropper,
    ISynopsisProvider,
)
from ..imaging.image_cropper import ImageCropper
from ..infrastructure.adapters.gemini_identification_adapter import GeminiIdentificationAdapter
from ..infrastructure.adapters.gemini_synopsis_adapter import GeminiSynopsisAdapter
from ..infrastructure.gemini.gemini_client import GeminiClient
from ..vocabulary import CategoryVocabulary
from .batch_orchestrator import BatchOrchestrator
from .cataloging_pipeline import CatalogingPipeline
from .scanner_session import ScannerSession


class CatalogingComponentFactory:
    """
    Фабрика для создания компонентов домена Cataloging.

    Домен Cataloging отвечает за:
    - Распознавание книги на фотографии
    - Обрезку обложки
    - Поиск синопсиса
    - Одиночный и пакетный режимы обработки
    """

    @staticmethod
    def create_gemini_client(api_key: Optional[str] = None) -> GeminiClient:
        """
        Создает клиент Gemini.

        Raises:
            CatalogingConfigurationError: Если ключ API не задан
        """
        logger.debug("[Cataloging] Создание клиента Gemini")
        try:
            return GeminiClient(api_key)
        except ValueError as e:
            raise CatalogingConfigurationError(
                message="Не удалось инициализировать клиент Gemini",
                component="CatalogingComponentFactory",
                original_error=e
            )

    @staticmethod
    def create_identification_provider(
        client: GeminiClient,
        vocabulary: Optional[CategoryVocabulary] = None
    ) -> IIdentificationProvider:
        logger.debug("[Cataloging] Создание провайдера распознавания")
        return GeminiIdentificationAdapter(client, vocabulary)

    @staticmethod
    def create_synopsis_provider(client: GeminiClient) -> ISynopsisProvider:
        logger.debug("[Cataloging] Создание провайдера синопсиса")
        return GeminiSynopsisAdapter(client)

    @staticmethod
    def create_image_cropper() -> IImageCropper:
        logger.debug("[Cataloging] Создание ImageCropper")
        return ImageCropper()

    @staticmethod
    def create_cataloging_pipeline(
        identification_provider: Optional[IIdentificationProvider] = None,
        synopsis_provider: Optional[ISynopsisProvider] = None,
        image_cropper: Optional[IImageCropper] = None,
        client: Optional[GeminiClient] = None
    ) -> ICatalogingPipeline:
        """
        Создает пайплайн каталогизации.

        Недостающие компоненты создаются по умолчанию (один общий клиент Gemini).
        """
        logger.debug("[Cataloging] Создание пайплайна каталогизации")

        if identification_provider is None or synopsis_provider is None:
            client = client or CatalogingComponentFactory.create_gemini_client()

        if identification_provider is None:
            identification_provider = CatalogingComponentFactory.create_identification_provider(client)

        if synopsis_provider is None:
            synopsis_provider = CatalogingComponentFactory.create_synopsis_provider(client)

        if image_cropper is None:
            image_cropper = CatalogingComponentFactory.create_image_cropper()

        return CatalogingPipeline(
            identification_provider=identification_provider,
            synopsis_provider=synopsis_provider,
            image_cropper=image_cropper
        )

    @staticmethod
    def create_batch_orchestrator(
        pipeline: Optional[ICatalogingPipeline] = None,
        auto_crop: bool = True,
        on_update: Optional[Callable[[BatchItem], None]] = None
    ) -> BatchOrchestrator:
        logger.debug("[Cataloging] Создание оркестратора пакета")
        pipeline = pipeline or CatalogingComponentFactory.create_cataloging_pipeline()
        return BatchOrchestrator(pipeline, auto_crop=auto_crop, on_update=on_update)

    @staticmethod
    def create_scanner_session(
        store: CatalogStore,
        pipeline: Optional[ICatalogingPipeline] = None,
        auto_crop: bool = True
    ) -> ScannerSession:
        logger.debug("[Cataloging] Создание сессии сканера")
        pipeline = pipeline or CatalogingComponentFactory.create_cataloging_pipeline()
        return ScannerSession(pipeline, store, auto_crop=auto_crop)
