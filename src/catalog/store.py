"""
Хранилище каталога сессии.

Три непересекающиеся коллекции:
- working: 0 или 1 фотография в сканере
- history: принятые записи, новые первыми (готовы к экспорту)
- archive: экспортированные записи, новые первыми

ВАЖНО: Запись принадлежит ровно одной коллекции, id уникальны в history + archive.
Все операции тотальны: неизвестный id — no-op.
"""

from typing import TYPE_CHECKING, List, Optional, Tuple

from loguru import logger

from contracts.d1_cataloging_dto import ImageAsset
from contracts.d2_catalog_dto import BookRecord, CatalogEntry, WorkingItem, new_identity

if TYPE_CHECKING:
    from src.cataloging.application.batch_orchestrator import BatchOrchestrator


class CatalogStore:
    """
    Единственный владелец коллекций каталога.

    Потребители получают копии списков (tuple) и меняют данные только через методы.
    """

    def __init__(self) -> None:
        self._working: Optional[WorkingItem] = None
        self._history: List[CatalogEntry] = []
        self._archive: List[CatalogEntry] = []

    # ------------------------------------------------------------------
    # Чтение
    # ------------------------------------------------------------------

    @property
    def working(self) -> Optional[WorkingItem]:
        return self._working

    @property
    def history(self) -> Tuple[CatalogEntry, ...]:
        return tuple(self._history)

    @property
    def archive(self) -> Tuple[CatalogEntry, ...]:
        return tuple(self._archive)

    def find(self, entry_id: str) -> Optional[CatalogEntry]:
        """Ищет запись в history, затем в archive."""
        for entry in self._history + self._archive:
            if entry.id == entry_id:
                return entry
        return None

    # ------------------------------------------------------------------
    # Сканер
    # ------------------------------------------------------------------

    def set_working(self, image: ImageAsset, record: Optional[BookRecord] = None) -> WorkingItem:
        self._working = WorkingItem(image=image, record=record)
        return self._working

    def clear_working(self) -> None:
        self._working = None

    def accept_working(self) -> Optional[CatalogEntry]:
        """Принимает готовую запись сканера в history и очищает сканер."""
        working = self._working
        if working is None or working.record is None:
            return None
        entry = self.accept(working.record, working.image)
        self._working = None
        return entry

    # ------------------------------------------------------------------
    # История
    # ------------------------------------------------------------------

    def accept(self, record: BookRecord, image: Optional[ImageAsset]) -> CatalogEntry:
        """Добавляет новую запись в начало history."""
        entry = CatalogEntry.from_record(record, image)
        self._ensure_unique_id(entry)
        self._history.insert(0, entry)
        logger.info(f"[CatalogStore] Принято: '{entry.title}' ({entry.id[:8]})")
        return entry

    def accept_batch(self, batch: "BatchOrchestrator") -> List[CatalogEntry]:
        """
        Переносит все DONE элементы пакета в начало history (в порядке пакета).

        Элементы удаляются из пакета.
        """
        entries = []
        for item in batch.take_completed():
            entry = CatalogEntry.from_record(
                item.record,
                item.processed_asset or item.source_asset,
                entry_id=item.id,
            )
            self._ensure_unique_id(entry)
            entries.append(entry)

        self._history[:0] = entries
        logger.info(f"[CatalogStore] Принято из пакета: {len(entries)}")
        return entries

    def edit_field(self, entry_id: str, field_name: str, value: str) -> None:
        """Правка поля записи в history."""
        if field_name not in BookRecord.field_names():
            raise ValueError(f"Unknown book field: {field_name}")
        entry = self._find_in(self._history, entry_id)
        if entry is not None:
            setattr(entry, field_name, value)

    def replace_image(self, entry_id: str, image: ImageAsset) -> None:
        """Замена изображения записи в history."""
        entry = self._find_in(self._history, entry_id)
        if entry is not None:
            entry.image = image

    def delete_entry(self, entry_id: str) -> None:
        """Удаляет запись из history или archive."""
        self._history = [entry for entry in self._history if entry.id != entry_id]
        self._archive = [entry for entry in self._archive if entry.id != entry_id]

    # ------------------------------------------------------------------
    # Архив
    # ------------------------------------------------------------------

    def archive_all(self) -> List[CatalogEntry]:
        """
        Переносит всю history (в текущем порядке) в начало archive.

        Returns:
            Перенесённые записи
        """
        moved = self._history
        self._archive = moved + self._archive
        self._history = []
        logger.info(f"[CatalogStore] В архив перенесено: {len(moved)}")
        return list(moved)

    def restore(self, entry_id: str) -> Optional[CatalogEntry]:
        """Возвращает запись из archive в начало history без изменений."""
        entry = self._find_in(self._archive, entry_id)
        if entry is None:
            return None
        self._archive = [item for item in self._archive if item is not entry]
        self._history.insert(0, entry)
        logger.info(f"[CatalogStore] Восстановлено из архива: '{entry.title}'")
        return entry

    # ------------------------------------------------------------------

    @staticmethod
    def _find_in(entries: List[CatalogEntry], entry_id: str) -> Optional[CatalogEntry]:
        for entry in entries:
            if entry.id == entry_id:
                return entry
        return None

    def _ensure_unique_id(self, entry: CatalogEntry) -> None:
        if self.find(entry.id) is not None:
            logger.warning(f"[CatalogStore] Повтор id {entry.id}, назначен новый")
            entry.id = new_identity()
