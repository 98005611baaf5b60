"""Domain слой домена Catalog: исключения."""

from .exceptions import CatalogError, CatalogExportError

__all__ = [
    "CatalogError",
    "CatalogExportError",
]
