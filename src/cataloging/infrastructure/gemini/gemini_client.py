"""
Gemini API интеграция.

Тонкая обёртка над google-genai:
- generate_json: изображение + промпт + схема ответа -> JSON текст
- generate_grounded_text: промпт + Google Search tool -> текст и флаг grounding

Разбор и валидацию ответа выполняют адаптеры (infrastructure/adapters).
"""

from dataclasses import dataclass
from typing import Optional

from google import genai
from google.genai import types
from loguru import logger

from config.settings import GEMINI_API_KEY, GEMINI_MODEL
from contracts.d1_cataloging_dto import ImageAsset


@dataclass(frozen=True)
class GroundedText:
    """Текстовый ответ модели и признак того, что он опирается на найденные источники."""
    text: Optional[str]
    grounded: bool = False


class GeminiClient:
    """
    Обёртка над google.genai.Client.

    Один клиент используется и для распознавания обложки, и для синопсиса.
    """

    def __init__(self, api_key: Optional[str] = None, model: str = GEMINI_MODEL):
        """
        Инициализация клиента.

        Args:
            api_key: Ключ Gemini API. Если не указан, берётся из settings.
            model: Имя модели (gemini-2.5-flash по умолчанию)
        """
        key = api_key or GEMINI_API_KEY

        if not key:
            raise ValueError(
                "Gemini API key не указан!\n"
                "Экспортируйте GEMINI_API_KEY или передайте ключ в конструктор."
            )

        self.client = genai.Client(api_key=key)
        self.model = model

        logger.info(f"[GeminiClient] Клиент инициализирован (model={model})")

    def generate_json(self, image: ImageAsset, prompt: str, schema: types.Schema) -> Optional[str]:
        """
        Отправляет изображение с промптом и требует JSON по схеме.

        Args:
            image: Фотография книги
            prompt: Инструкция модели
            schema: Схема ответа (response_schema)

        Returns:
            JSON текст ответа или None, если модель ничего не вернула
        """
        logger.debug(f"[GeminiClient] generate_json: {len(image.data)} байт, {image.mime_type}")

        response = self.client.models.generate_content(
            model=self.model,
            contents=[
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                prompt,
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        return response.text

    def generate_grounded_text(self, prompt: str) -> GroundedText:
        """
        Текстовый запрос с включённым Google Search.

        Returns:
            GroundedText: текст и признак наличия источников поиска
        """
        logger.debug("[GeminiClient] generate_grounded_text с Google Search")

        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                tools=[types.Tool(google_search=types.GoogleSearch())],
            ),
        )
        return GroundedText(text=response.text, grounded=self._is_grounded(response))

    @staticmethod
    def _is_grounded(response) -> bool:
        """Есть ли у кандидатов ответа ссылки на найденные источники."""
        for candidate in response.candidates or []:
            metadata = candidate.grounding_metadata
            if metadata and metadata.grounding_chunks:
                return True
        return False
