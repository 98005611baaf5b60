#!/usr/bin/env python3
"""
Пакетная каталогизация фотографий книг и экспорт для WooCommerce.

Использование:
    # Обработать все изображения из data/input/
    python scripts/catalog_books.py

    # Обработать конкретные файлы или директорию
    python scripts/catalog_books.py photos/380.jpg photos/120.1.jpg
    python scripts/catalog_books.py photos/

    # Без обрезки обложек, архив в другую директорию
    python scripts/catalog_books.py --no-crop --output exports/

    # Режим сканера: только первое изображение
    python scripts/catalog_books.py --single photos/
"""

import sys
import argparse
from pathlib import Path
from typing import List

from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import validate_config, INPUT_DIR, OUTPUT_DIR
from contracts.d2_catalog_dto import BatchItem
from src.catalog import CatalogStore, ExportSerializer
from src.catalog.domain.exceptions import CatalogError
from src.cataloging import CatalogingComponentFactory, ImageLoader
from src.cataloging.domain.exceptions import CatalogingError


def collect_paths(loader: ImageLoader, raw_paths: List[str]) -> List[Path]:
    """Разворачивает аргументы (файлы и директории) в список файлов."""
    if not raw_paths:
        return loader.scan_directory(INPUT_DIR)

    paths: List[Path] = []
    for raw in raw_paths:
        path = Path(raw)
        if path.is_dir():
            paths.extend(loader.scan_directory(path))
        else:
            paths.append(path)
    return paths


def log_item(item: BatchItem) -> None:
    """Наблюдатель пакета: печатает смену статуса элемента."""
    name = item.source_asset.filename or item.id[:8]
    if item.error_note:
        logger.info(f"  {name}: {item.status.value} ({item.error_note})")
    else:
        logger.info(f"  {name}: {item.status.value}")


def main():
    """Главная функция пакетной каталогизации."""
    parser = argparse.ArgumentParser(description="Book Scout batch cataloging")
    parser.add_argument("paths", nargs="*", help="Файлы или директории (по умолчанию data/input/)")
    parser.add_argument("--no-crop", action="store_true", help="Не обрезать обложки")
    parser.add_argument("--single", action="store_true", help="Обработать только первое изображение")
    parser.add_argument("--output", type=Path, default=OUTPUT_DIR, help="Директория для архива экспорта")
    args = parser.parse_args()

    try:
        validate_config()
    except ValueError as e:
        logger.error(f"[Config] {e}")
        sys.exit(1)

    loader = ImageLoader()
    assets = loader.load(collect_paths(loader, args.paths), multiple=not args.single)
    if not assets:
        logger.warning("Изображения не найдены")
        sys.exit(0)

    try:
        orchestrator = CatalogingComponentFactory.create_batch_orchestrator(
            auto_crop=not args.no_crop,
            on_update=log_item
        )
    except CatalogingError as e:
        logger.error(str(e))
        sys.exit(1)

    orchestrator.add_assets(assets)
    summary = orchestrator.run()

    store = CatalogStore()
    store.accept_batch(orchestrator)

    try:
        archive_path = ExportSerializer().export(store, args.output)
    except CatalogError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info("=" * 60)
    logger.info(f"ИТОГИ: {summary.done}/{summary.processed} успешно, ошибок: {summary.failed}")
    if archive_path:
        logger.info(f"Архив: {archive_path}")
    logger.info("=" * 60)


if __name__ == "__main__":
    logger.remove()
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="INFO"
    )

    main()
