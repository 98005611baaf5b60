"""
Пакетная обработка фотографий для домена Cataloging.

Машина состояний элемента: PENDING -> PROCESSING -> DONE | FAILED

КРИТИЧЕСКОЕ:
- Элементы обрабатываются СТРОГО последовательно, по одному
- PROCESSING выставляется (и видно наблюдателю) ДО вызова пайплайна
- Ошибка одного элемента не останавливает пакет
- Цена элемента (из имени файла) не перезаписывается результатом AI
- Повторный запуск во время активного прогона отклоняется, отмены нет
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from loguru import logger

from config.settings import BATCH_FAILURE_NOTE
from contracts.d1_cataloging_dto import ImageAsset
from contracts.d2_catalog_dto import BatchItem, BatchStatus, BookRecord
from ..domain.interfaces import ICatalogingPipeline
from ..text.price_extractor import PriceExtractor


@dataclass(frozen=True)
class BatchRunSummary:
    """Статистика одного прогона пакета."""
    processed: int = 0
    done: int = 0
    failed: int = 0


class BatchOrchestrator:
    """
    Оркестратор пакетной обработки.

    Владеет коллекцией элементов пакета; изменяется только через методы класса.
    """

    def __init__(
        self,
        pipeline: ICatalogingPipeline,
        auto_crop: bool = True,
        on_update: Optional[Callable[[BatchItem], None]] = None
    ):
        """
        Args:
            pipeline: Пайплайн каталогизации одной фотографии
            auto_crop: Обрезать ли обложки по рамке
            on_update: Наблюдатель, вызывается после каждой смены статуса элемента
        """
        self.pipeline = pipeline
        self.auto_crop = auto_crop
        self.on_update = on_update
        self._items: List[BatchItem] = []
        self._running = False

    @property
    def items(self) -> Tuple[BatchItem, ...]:
        return tuple(self._items)

    @property
    def is_running(self) -> bool:
        """Идёт ли сейчас прогон (для блокировки повторного запуска)."""
        return self._running

    def get(self, item_id: str) -> Optional[BatchItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def add_assets(self, assets: Iterable[ImageAsset]) -> List[BatchItem]:
        """
        Добавляет фотографии в пакет в статусе PENDING.

        Цена берётся из имени файла ("380.1.jpg" -> "380").
        """
        new_items = [
            BatchItem(
                source_asset=asset,
                preview_asset=asset,
                record=BookRecord(price=PriceExtractor.extract(asset.filename or "")),
            )
            for asset in assets
        ]
        self._items.extend(new_items)
        logger.info(f"[Batch] Добавлено элементов: {len(new_items)} (всего {len(self._items)})")
        return new_items

    def remove(self, item_id: str) -> None:
        self._items = [item for item in self._items if item.id != item_id]

    def update_field(self, item_id: str, field_name: str, value: str) -> None:
        """Ручная правка поля записи (допустима при любом статусе)."""
        if field_name not in BookRecord.field_names():
            raise ValueError(f"Unknown book field: {field_name}")
        item = self.get(item_id)
        if item is not None:
            setattr(item.record, field_name, value)

    def replace_image(self, item_id: str, image: ImageAsset) -> None:
        """Ручная замена обработанного изображения элемента."""
        item = self.get(item_id)
        if item is not None:
            item.processed_asset = image
            item.preview_asset = image

    def reset(self, item_id: str) -> None:
        """Возвращает FAILED элемент в PENDING для повторного прогона."""
        item = self.get(item_id)
        if item is not None and item.status == BatchStatus.FAILED:
            item.status = BatchStatus.PENDING
            item.error_note = None
            self._notify(item)

    def take_completed(self) -> List[BatchItem]:
        """Извлекает из пакета все DONE элементы (в порядке пакета)."""
        completed = [item for item in self._items if item.status == BatchStatus.DONE]
        self._items = [item for item in self._items if item.status != BatchStatus.DONE]
        return completed

    def run(self) -> Optional[BatchRunSummary]:
        """
        Обрабатывает все PENDING элементы на момент вызова.

        Returns:
            BatchRunSummary или None, если прогон уже идёт
        """
        if self._running:
            logger.warning("[Batch] Прогон уже идёт, повторный запуск отклонён")
            return None

        self._running = True
        try:
            return self._run_pending()
        finally:
            self._running = False

    def _run_pending(self) -> BatchRunSummary:
        pending = [item for item in self._items if item.status == BatchStatus.PENDING]
        logger.info(f"[Batch] Старт прогона: {len(pending)} элементов")

        processed = done = failed = 0

        for item in pending:
            # Элемент могли удалить наблюдатели во время прогона
            if not any(current is item for current in self._items):
                continue

            item.status = BatchStatus.PROCESSING

            # Ошибка наблюдателя завершает элемент как FAILED
            try:
                self._notify(item)
                result = self.pipeline.process(item.source_asset, auto_crop=self.auto_crop)
            except Exception as e:
                logger.error(f"[Batch] Элемент {item.id[:8]} не обработан: {e}")
                item.status = BatchStatus.FAILED
                item.error_note = BATCH_FAILURE_NOTE
                failed += 1
            else:
                # Цена остаётся прежней: она из имени файла или от оператора
                item.record.title = result.title
                item.record.author = result.author
                item.record.category = result.category
                item.record.synopsis = result.synopsis
                item.processed_asset = result.processed_asset
                item.preview_asset = result.processed_asset
                item.error_note = None
                item.status = BatchStatus.DONE
                done += 1

            processed += 1
            self._notify(item)

        summary = BatchRunSummary(processed=processed, done=done, failed=failed)
        logger.info(f"[Batch] Прогон завершён: {done}/{processed} успешно, ошибок: {failed}")
        return summary

    def _notify(self, item: BatchItem) -> None:
        if self.on_update:
            self.on_update(item)
