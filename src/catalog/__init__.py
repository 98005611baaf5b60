"""
Домен Catalog: хранилище сессии и экспорт.

1. CatalogStore — working / history / archive
2. ExportSerializer — архив для импорта WooCommerce
"""

from .store import CatalogStore
from .export.export_serializer import ExportSerializer

__all__ = [
    "CatalogStore",
    "ExportSerializer",
]
