"""
Image Decoder для домена Cataloging.

Декодирование байтов изображения в numpy array.
Операция отвечает только за декодирование, без чтения файлов.
"""

import cv2
import numpy as np
from loguru import logger

from ..domain.exceptions import ImageDecodingError


class ImageDecoder:
    """
    Декодирует байты изображения в numpy array.

    ЦКП: декодированное изображение (numpy.ndarray, BGR).
    """

    @staticmethod
    def decode(data: bytes) -> np.ndarray:
        """
        Декодирует байты изображения.

        Args:
            data: Байты изображения (JPEG, PNG, WEBP, ...)

        Returns:
            numpy.ndarray (BGR формат)

        Raises:
            ImageDecodingError: Если байты пустые или не являются изображением
        """
        if not data:
            raise ImageDecodingError(
                message="Пустые данные изображения",
                component="ImageDecoder"
            )

        nparr = np.frombuffer(data, np.uint8)
        try:
            image = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
        except cv2.error as e:
            raise ImageDecodingError(
                message="OpenCV не смог декодировать изображение",
                component="ImageDecoder",
                original_error=e
            )

        if image is None:
            raise ImageDecodingError(
                message=f"Не удалось декодировать изображение ({len(data)} байт)",
                component="ImageDecoder"
            )

        logger.debug(f"[ImageDecoder] Изображение декодировано, размер: {image.shape}")

        return image
