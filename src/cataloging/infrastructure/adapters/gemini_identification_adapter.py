"""
Адаптер для Gemini Vision, реализующий интерфейс IIdentificationProvider (домен Cataloging).

Запрос: изображение + контролируемый словарь категорий + рамка на шкале 0-1000.
Ответ валидируется через Pydantic (IdentificationResult).

ВАЖНО: Пустой или некорректный ответ — жёсткий отказ (IdentificationError).
Автоматических повторов нет, решение о повторе принимает вызывающий код.
"""

from typing import Optional

from loguru import logger
from pydantic import ValidationError

from config.settings import BOX_SCALE
from contracts.d1_cataloging_dto import IdentificationResult, ImageAsset
from ...domain.exceptions import IdentificationError, IdentificationResponseError
from ...domain.interfaces import IIdentificationProvider
from ...vocabulary import CategoryVocabulary, default_vocabulary
from ..gemini.gemini_client import GeminiClient
from ..gemini.prompts import build_identification_prompt, build_identification_schema


class GeminiIdentificationAdapter(IIdentificationProvider):
    """
    Адаптер распознавания книги через Gemini (домен Cataloging).

    Категории ответа ограничены словарём: метки вне словаря отбрасываются.
    """

    def __init__(
        self,
        client: GeminiClient,
        vocabulary: Optional[CategoryVocabulary] = None,
        scale: int = BOX_SCALE
    ):
        """
        Инициализация адаптера.

        Args:
            client: Клиент Gemini
            vocabulary: Словарь категорий (по умолчанию config/categories.yaml)
            scale: Шкала рамки
        """
        self._client = client
        self.vocabulary = vocabulary or default_vocabulary()
        self._prompt = build_identification_prompt(self.vocabulary.labels, scale)
        self._schema = build_identification_schema(self.vocabulary.labels, scale)
        logger.debug(
            f"[Cataloging] GeminiIdentificationAdapter инициализирован "
            f"({len(self.vocabulary)} категорий)"
        )

    def identify(self, image: ImageAsset) -> IdentificationResult:
        """
        Распознаёт книгу на изображении.

        Args:
            image: Фотография книги

        Returns:
            IdentificationResult с категориями только из словаря

        Raises:
            IdentificationResponseError: Пустой или некорректный ответ
            IdentificationError: Ошибка вызова сервиса
        """
        try:
            logger.debug("[Cataloging] Вызов Gemini Vision")
            raw = self._client.generate_json(image, self._prompt, self._schema)
        except Exception as e:
            logger.error(f"[Cataloging] Ошибка распознавания книги: {e}")
            raise IdentificationError(
                message="Failed to identify book from image.",
                component="GeminiIdentificationAdapter",
                original_error=e
            )

        if not raw or not raw.strip():
            raise IdentificationResponseError(
                message="No data returned from Gemini Vision.",
                component="GeminiIdentificationAdapter"
            )

        try:
            result = IdentificationResult.model_validate_json(raw)
        except ValidationError as e:
            raise IdentificationResponseError(
                message="Malformed identification response.",
                component="GeminiIdentificationAdapter",
                original_error=e
            )

        categories = self.vocabulary.select(result.categories)
        rejected = [label for label in result.categories if label.strip() not in categories]
        if rejected:
            logger.warning(f"[Cataloging] Категории вне словаря отброшены: {rejected}")

        logger.info(
            f"[Cataloging] Распознано: '{result.title}' / '{result.author}', "
            f"категорий: {len(categories)}"
        )

        return result.model_copy(update={"categories": categories})
