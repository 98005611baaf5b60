"""
Загрузчик изображений — граница ввода домена Cataloging.

Превращает файлы или сырые байты в ImageAsset.
Не-изображения (по сигнатуре, а не по расширению) молча отбрасываются.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from loguru import logger

from config.settings import SUPPORTED_IMAGE_FORMATS
from contracts.d1_cataloging_dto import ImageAsset
from ..imaging.image_sniffer import ImageSniffer


class ImageLoader:
    """
    Загружает изображения для сканера (один файл) и пакета (много файлов).

    ЦКП: список ImageAsset только с валидными изображениями.
    """

    def __init__(self, supported_formats: Optional[Iterable[str]] = None):
        formats = supported_formats or SUPPORTED_IMAGE_FORMATS
        self.supported_formats = {fmt.lower() for fmt in formats}

    def from_bytes(self, data: bytes, filename: Optional[str] = None) -> Optional[ImageAsset]:
        """
        Оборачивает байты в ImageAsset.

        Returns:
            ImageAsset или None, если байты не являются изображением
        """
        mime_type = ImageSniffer.detect_mime_type(data)
        if mime_type is None:
            logger.debug(f"[ImageLoader] Не изображение, пропускаем: {filename or '<bytes>'}")
            return None
        return ImageAsset(data=data, mime_type=mime_type, filename=filename)

    def load_file(self, image_path: Path) -> Optional[ImageAsset]:
        """Читает файл; отсутствующий файл или не-изображение -> None."""
        image_path = Path(image_path)
        if not image_path.is_file():
            logger.debug(f"[ImageLoader] Файл не найден, пропускаем: {image_path}")
            return None

        with open(image_path, "rb") as f:
            data = f.read()

        return self.from_bytes(data, filename=image_path.name)

    def load(self, paths: Iterable[Path], multiple: bool = True) -> List[ImageAsset]:
        """
        Загружает изображения из списка путей.

        Args:
            paths: Пути к файлам
            multiple: False — режим сканера, берётся только первое изображение

        Returns:
            Список ImageAsset в порядке путей
        """
        assets: List[ImageAsset] = []
        for path in paths:
            asset = self.load_file(path)
            if asset is None:
                continue
            assets.append(asset)
            if not multiple:
                break

        logger.info(f"[ImageLoader] Загружено изображений: {len(assets)}")
        return assets

    def scan_directory(self, directory: Path) -> List[Path]:
        """Файлы поддерживаемых форматов в директории, отсортированные по имени."""
        directory = Path(directory)
        if not directory.is_dir():
            return []
        return sorted(
            path for path in directory.iterdir()
            if path.is_file() and path.suffix.lower() in self.supported_formats
        )
