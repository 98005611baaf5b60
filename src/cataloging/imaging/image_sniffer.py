"""
Image Sniffer - определение формата изображения по сигнатуре.

Используется на границе ввода (отбросить не-изображения) и при экспорте
(в архив попадают только байты с валидной сигнатурой изображения).
"""

import io
from typing import Optional

from PIL import Image, UnidentifiedImageError

# MPO: JPEG камеры с маркером MPF, для Gemini и магазина это обычный JPEG
_FORMAT_MIME_TYPES = {
    "JPEG": "image/jpeg",
    "MPO": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "GIF": "image/gif",
}


class ImageSniffer:
    """Определяет MIME тип изображения по содержимому, а не по имени файла."""

    @staticmethod
    def detect_mime_type(data: Optional[bytes]) -> Optional[str]:
        """
        Возвращает MIME тип ("image/jpeg", "image/png", ...) или None.

        Pillow читает только заголовок, полное декодирование не выполняется.
        """
        if not data:
            return None
        try:
            with Image.open(io.BytesIO(data)) as img:
                image_format = img.format
        except (UnidentifiedImageError, OSError, ValueError):
            return None
        if not image_format:
            return None
        if image_format in _FORMAT_MIME_TYPES:
            return _FORMAT_MIME_TYPES[image_format]
        return Image.MIME.get(image_format, f"image/{image_format.lower()}")

    @classmethod
    def is_image(cls, data: Optional[bytes]) -> bool:
        return cls.detect_mime_type(data) is not None
