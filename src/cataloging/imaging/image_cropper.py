"""
Image Cropper - обрезка обложки по рамке модели.

Рамка приходит на шкале 0-1000: (ymin, xmin, ymax, xmax).
Алгоритм:
1. Декодируем изображение, получаем размеры в пикселях
2. Переставляем перевёрнутые координаты (min/max)
3. Масштабируем координаты на dimension/1000
4. Ограничиваем: x,y >= 0; width <= W - x; height <= H - y
5. Если width или height <= 0 — возвращаем ИСХОДНОЕ изображение

КРИТИЧЕСКОЕ: Плохая рамка никогда не должна уничтожить фотографию пользователя.
Любой сбой (декодирование, кодирование, вырожденная рамка) = исходное изображение.
"""

import math
from typing import Optional, Tuple

import cv2
from loguru import logger

from config.settings import BOX_SCALE, CROP_JPEG_QUALITY
from contracts.d1_cataloging_dto import BoundingBox, ImageAsset
from ..domain.exceptions import ImageDecodingError
from ..domain.interfaces import IImageCropper
from .image_decoder import ImageDecoder


class ImageCropper(IImageCropper):
    """
    Вырезает область рамки и кодирует её в JPEG.

    ЦКП: обрезанная обложка или исходное изображение (без исключений).
    """

    MIME_TYPE = "image/jpeg"

    def __init__(self, quality: int = CROP_JPEG_QUALITY, scale: int = BOX_SCALE):
        self.quality = quality
        self.scale = scale
        logger.debug(f"[ImageCropper] Инициализирован (quality={quality}, scale={scale})")

    def crop(self, image: ImageAsset, box: BoundingBox) -> ImageAsset:
        """
        Вырезает область рамки.

        Args:
            image: Исходное изображение
            box: Рамка на шкале 0-scale

        Returns:
            Новое JPEG изображение или исходное при вырожденной рамке/ошибке
        """
        try:
            pixels = ImageDecoder.decode(image.data)
        except ImageDecodingError as e:
            logger.warning(f"[ImageCropper] Декодирование не удалось, оставляем оригинал: {e}")
            return image

        height, width = pixels.shape[:2]
        region = self.compute_region(box, width, height)

        if region is None:
            logger.debug(
                f"[ImageCropper] Вырожденная рамка {box} для {width}x{height}, оставляем оригинал"
            )
            return image

        x, y, w, h = region
        cropped = pixels[y:y + h, x:x + w]

        try:
            data = self._encode(cropped)
        except cv2.error as e:
            logger.warning(f"[ImageCropper] Кодирование не удалось, оставляем оригинал: {e}")
            return image

        if data is None:
            logger.warning("[ImageCropper] OpenCV не закодировал область, оставляем оригинал")
            return image

        logger.debug(f"[ImageCropper] Обрезано: {width}x{height} -> {w}x{h} (x={x}, y={y})")

        return ImageAsset(data=data, mime_type=self.MIME_TYPE, filename=image.filename)

    def compute_region(
        self,
        box: BoundingBox,
        width: int,
        height: int
    ) -> Optional[Tuple[int, int, int, int]]:
        """
        Переводит рамку в пиксельную область (x, y, w, h).

        Returns:
            (x, y, w, h) внутри изображения или None если область вырождена
        """
        box = box.ordered()

        x = box.xmin / self.scale * width
        y = box.ymin / self.scale * height
        w = (box.xmax - box.xmin) / self.scale * width
        h = (box.ymax - box.ymin) / self.scale * height

        if not all(math.isfinite(v) for v in (x, y, w, h)):
            return None

        x = max(0.0, x)
        y = max(0.0, y)
        w = min(width - x, w)
        h = min(height - y, h)

        left = int(round(x))
        top = int(round(y))
        w = min(int(round(w)), width - left)
        h = min(int(round(h)), height - top)

        if w <= 0 or h <= 0:
            return None

        return left, top, w, h

    def _encode(self, pixels) -> Optional[bytes]:
        """JPEG байты области или None, если OpenCV не смог закодировать."""
        success, buffer = cv2.imencode(".jpg", pixels, [cv2.IMWRITE_JPEG_QUALITY, self.quality])
        return buffer.tobytes() if success else None
