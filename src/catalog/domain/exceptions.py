"""
Исключения для домена Catalog.

Операции хранилища тотальны (неизвестный id — no-op), поэтому
исключения здесь только для экспорта.
"""

from typing import Optional


class CatalogError(Exception):
    """Базовое исключение для ошибок домена Catalog."""

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
        msg = f"Catalog Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class CatalogExportError(CatalogError):
    """Не удалось записать архив экспорта."""
    pass
