"""
Экспорт каталога в архив для импорта WooCommerce.

Архив (zip):
- products.csv — фид (см. woocommerce_feed.py)
- <slug>_<id>.<ext> — изображение для каждой записи с валидной сигнатурой

После записи архива ВСЯ history переносится в начало archive.

КРИТИЧЕСКОЕ: Одинаковый вход + одинаковая дата экспорта = одинаковые байты архива
(фиксированные метки времени внутри zip).
"""

import io
import zipfile
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from config.settings import (
    EXPORT_ARCHIVE_PREFIX,
    EXPORT_BASE_URL,
    EXPORT_CSV_NAME,
    OUTPUT_DIR,
)
from contracts.d2_catalog_dto import CatalogEntry
from src.cataloging.imaging.image_sniffer import ImageSniffer
from ..domain.exceptions import CatalogExportError
from ..store import CatalogStore
from .image_naming import image_filename, upload_url
from .woocommerce_feed import build_row, render_csv


class ExportSerializer:
    """
    Сериализует history в архив экспорта.

    ЦКП: zip архив с CSV и изображениями, history перенесена в archive.
    """

    def __init__(
        self,
        base_url: str = EXPORT_BASE_URL,
        csv_name: str = EXPORT_CSV_NAME,
        archive_prefix: str = EXPORT_ARCHIVE_PREFIX
    ):
        self.base_url = base_url
        self.csv_name = csv_name
        self.archive_prefix = archive_prefix

    def archive_name(self, export_date: date) -> str:
        return f"{self.archive_prefix}_{export_date.isoformat()}.zip"

    def build_rows(
        self,
        entries: Sequence[CatalogEntry],
        export_date: date
    ) -> Tuple[List[List[str]], List[Tuple[str, bytes]]]:
        """
        Строит строки фида и список файлов изображений.

        Returns:
            (rows, images): images — пары (имя файла, байты)
        """
        rows: List[List[str]] = []
        images: List[Tuple[str, bytes]] = []

        for entry in entries:
            image_url = ""
            extension = self._image_extension(entry)
            if extension:
                name = image_filename(entry.title, entry.id, extension)
                images.append((name, entry.image.data))
                image_url = upload_url(self.base_url, export_date, name)
            else:
                logger.debug(f"[Export] Нет валидного изображения: '{entry.title}' ({entry.id[:8]})")

            rows.append(build_row(entry, image_url))

        return rows, images

    def build_archive(self, entries: Sequence[CatalogEntry], export_date: date) -> bytes:
        """Собирает zip архив в памяти."""
        rows, images = self.build_rows(entries, export_date)
        timestamp = (export_date.year, export_date.month, export_date.day, 0, 0, 0)

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
            self._write_member(archive, self.csv_name, render_csv(rows).encode("utf-8"), timestamp)
            for name, data in images:
                self._write_member(archive, name, data, timestamp)

        logger.debug(f"[Export] Архив собран: {len(rows)} строк, {len(images)} изображений")
        return buffer.getvalue()

    def export(
        self,
        store: CatalogStore,
        output_dir: Optional[Path] = None,
        export_date: Optional[date] = None
    ) -> Optional[Path]:
        """
        Экспортирует history в архив и переносит её в archive.

        Args:
            store: Хранилище каталога
            output_dir: Куда записать архив (по умолчанию OUTPUT_DIR)
            export_date: Дата экспорта (по умолчанию сегодня)

        Returns:
            Путь к архиву или None, если history пуста

        Raises:
            CatalogExportError: Если архив не удалось записать (history не меняется)
        """
        entries = list(store.history)
        if not entries:
            logger.info("[Export] History пуста, экспорт пропущен")
            return None

        export_date = export_date or date.today()
        output_dir = Path(output_dir) if output_dir else OUTPUT_DIR
        archive_path = output_dir / self.archive_name(export_date)

        data = self.build_archive(entries, export_date)

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            with open(archive_path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise CatalogExportError(
                message=f"Не удалось записать архив: {archive_path}",
                component="ExportSerializer",
                original_error=e
            )

        store.archive_all()

        logger.info(f"[Export] Экспортировано {len(entries)} записей: {archive_path}")
        return archive_path

    @staticmethod
    def _image_extension(entry: CatalogEntry) -> Optional[str]:
        """Расширение для файла изображения или None, если байты не изображение."""
        image = entry.image
        if image is None:
            return None
        sniffed = ImageSniffer.detect_mime_type(image.data)
        if sniffed is None:
            return None
        if image.mime_type.startswith("image/"):
            return image.extension
        return sniffed.split("/", 1)[-1]

    @staticmethod
    def _write_member(archive: zipfile.ZipFile, name: str, data: bytes, timestamp: tuple) -> None:
        info = zipfile.ZipInfo(name, date_time=timestamp)
        info.compress_type = zipfile.ZIP_DEFLATED
        info.external_attr = 0o644 << 16
        archive.writestr(info, data)
