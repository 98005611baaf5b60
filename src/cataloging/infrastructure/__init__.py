"""
Infrastructure слой домена Cataloging.

Содержит адаптеры внешних сервисов и загрузчик изображений.
"""

from .image_loader import ImageLoader

__all__ = [
    "ImageLoader",
]
