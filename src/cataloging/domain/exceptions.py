"""
Исключения для домена Cataloging.

Жёсткий отказ во всём пайплайне один: IdentificationError.
Ошибки синопсиса и обрезки сюда не попадают — они обрабатываются на месте.
"""

from typing import Optional


class CatalogingError(Exception):
    """Базовое исключение для ошибок домена Cataloging."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Cataloging Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class IdentificationError(CatalogingError):
    """Сервис распознавания не вернул пригодный результат."""
    pass


class IdentificationResponseError(IdentificationError):
    """Пустой или структурно некорректный ответ модели распознавания."""
    pass


class ImageProcessingError(CatalogingError):
    """Ошибка обработки изображения."""
    pass


class ImageDecodingError(ImageProcessingError):
    """Ошибка декодирования изображения."""
    pass


class CatalogingConfigurationError(CatalogingError):
    """Ошибка конфигурации домена Cataloging."""
    pass
