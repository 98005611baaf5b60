"""
Domain слой домена Cataloging.

Содержит интерфейсы (абстрактные классы) и исключения для Cataloging домена.
"""

from .interfaces import (
    IIdentificationProvider,
    ISynopsisProvider,
    IImageCropper,
    ICatalogingPipeline,
)

from .exceptions import (
    CatalogingError,
    IdentificationError,
    IdentificationResponseError,
    ImageProcessingError,
    ImageDecodingError,
    CatalogingConfigurationError,
)

__all__ = [
    # Интерфейсы
    "IIdentificationProvider",
    "ISynopsisProvider",
    "IImageCropper",
    "ICatalogingPipeline",

    # Исключения
    "CatalogingError",
    "IdentificationError",
    "IdentificationResponseError",
    "ImageProcessingError",
    "ImageDecodingError",
    "CatalogingConfigurationError",
]
