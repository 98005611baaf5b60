"""
Адаптер для синопсиса через Gemini + Google Search (домен Cataloging).

Двухуровневая политика в одном запросе:
1. Найти реальный текст издателя / рецензию через поиск
2. Если ничего не найдено — сгенерировать продающий синопсис

ВАЖНО: Адаптер НИКОГДА не выбрасывает исключения.
Сбой сети превращается в заглушку, чтобы не остановить пакетную обработку.
"""

from loguru import logger

from config.settings import (
    SYNOPSIS_EMPTY_PLACEHOLDER,
    SYNOPSIS_ERROR_PLACEHOLDER,
    SYNOPSIS_MAX_WORDS,
)
from contracts.d1_cataloging_dto import SynopsisResult, SynopsisStatus
from ...domain.interfaces import ISynopsisProvider
from ..gemini.gemini_client import GeminiClient
from ..gemini.prompts import build_synopsis_prompt


class GeminiSynopsisAdapter(ISynopsisProvider):
    """
    Адаптер поиска синопсиса (домен Cataloging).

    Лимит слов задаётся инструкцией модели, локально текст не обрезается.
    """

    def __init__(self, client: GeminiClient, max_words: int = SYNOPSIS_MAX_WORDS):
        self._client = client
        self.max_words = max_words
        logger.debug("[Cataloging] GeminiSynopsisAdapter инициализирован")

    def find_synopsis(self, title: str, author: str) -> SynopsisResult:
        """
        Находит или генерирует синопсис.

        Args:
            title: Название книги (уже в Title Case)
            author: Автор книги

        Returns:
            SynopsisResult: всегда с текстом
        """
        prompt = build_synopsis_prompt(title, author, self.max_words)

        try:
            logger.debug(f"[Cataloging] Поиск синопсиса: '{title}' / '{author}'")
            reply = self._client.generate_grounded_text(prompt)
        except Exception as e:
            logger.error(f"[Cataloging] Ошибка получения синопсиса: {e}")
            return SynopsisResult(text=SYNOPSIS_ERROR_PLACEHOLDER, status=SynopsisStatus.PLACEHOLDER)

        text = (reply.text or "").strip()
        if not text:
            logger.warning(f"[Cataloging] Пустой синопсис для '{title}'")
            return SynopsisResult(text=SYNOPSIS_EMPTY_PLACEHOLDER, status=SynopsisStatus.PLACEHOLDER)

        status = SynopsisStatus.GROUNDED if reply.grounded else SynopsisStatus.GENERATED
        logger.debug(f"[Cataloging] Синопсис получен ({status.value}, {len(text.split())} слов)")

        return SynopsisResult(text=text, status=status)
