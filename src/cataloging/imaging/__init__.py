"""
Работа с изображениями домена Cataloging.

- ImageDecoder: байты -> numpy array
- ImageSniffer: MIME тип по сигнатуре
- ImageCropper: обрезка по рамке 0-1000 и кодирование в JPEG
"""

from .image_decoder import ImageDecoder
from .image_sniffer import ImageSniffer
from .image_cropper import ImageCropper

__all__ = [
    "ImageDecoder",
    "ImageSniffer",
    "ImageCropper",
]
