"""
Сканер: одиночный режим каталогизации.

Статусы: IDLE -> ANALYZING_IMAGE -> SEARCHING_SYNOPSIS -> COMPLETED | ERROR

- Ошибка распознавания показывается оператору, доступен retry()
- Синопсис можно перезапросить для отредактированных названия/автора
- save() переносит запись в history хранилища
"""

from enum import Enum
from typing import Callable, Optional

from loguru import logger

from contracts.d1_cataloging_dto import ImageAsset, PipelineStep, SynopsisStatus
from contracts.d2_catalog_dto import BookRecord, CatalogEntry
from src.catalog.store import CatalogStore
from ..domain.exceptions import CatalogingError
from ..domain.interfaces import ICatalogingPipeline
from ..text.price_extractor import PriceExtractor


class ScanStatus(str, Enum):
    IDLE = "IDLE"
    ANALYZING_IMAGE = "ANALYZING_IMAGE"
    SEARCHING_SYNOPSIS = "SEARCHING_SYNOPSIS"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


_STEP_STATUS = {
    PipelineStep.ANALYZING: ScanStatus.ANALYZING_IMAGE,
    PipelineStep.SYNOPSIS: ScanStatus.SEARCHING_SYNOPSIS,
}


class ScannerSession:
    """
    Сессия сканера поверх CatalogStore.working.

    Текущая фотография и запись живут в хранилище, сессия управляет только статусом.
    """

    def __init__(
        self,
        pipeline: ICatalogingPipeline,
        store: CatalogStore,
        auto_crop: bool = True,
        on_status: Optional[Callable[[ScanStatus], None]] = None
    ):
        self.pipeline = pipeline
        self.store = store
        self.auto_crop = auto_crop
        self.on_status = on_status
        self.status = ScanStatus.IDLE
        self.error: Optional[str] = None
        self._price = ""

    @property
    def record(self) -> Optional[BookRecord]:
        working = self.store.working
        return working.record if working else None

    def scan(self, image: ImageAsset) -> ScanStatus:
        """
        Каталогизирует одну фотографию.

        Цена берётся из имени файла, остальные поля — из пайплайна.
        """
        self._price = PriceExtractor.extract(image.filename or "")
        self.store.set_working(image)
        return self._analyze()

    def retry(self) -> ScanStatus:
        """Повтор после ошибки для той же фотографии."""
        if self.status != ScanStatus.ERROR or self.store.working is None:
            return self.status
        return self._analyze()

    def update_field(self, field_name: str, value: str) -> None:
        """Ручная правка поля текущей записи."""
        if field_name not in BookRecord.field_names():
            raise ValueError(f"Unknown book field: {field_name}")
        record = self.record
        if record is not None:
            setattr(record, field_name, value)

    def regenerate_synopsis(self) -> ScanStatus:
        """
        Перезапрашивает синопсис для текущих названия и автора.

        Если сервис вернул заглушку, прежний синопсис сохраняется.
        """
        record = self.record
        if self.status != ScanStatus.COMPLETED or record is None:
            return self.status

        self._set_status(ScanStatus.SEARCHING_SYNOPSIS)
        result = self.pipeline.regenerate_synopsis(record.title, record.author)

        if result.status == SynopsisStatus.PLACEHOLDER:
            logger.warning("[Scanner] Новый синопсис не получен, оставляем прежний")
        else:
            record.synopsis = result.text

        self._set_status(ScanStatus.COMPLETED)
        return self.status

    def save(self) -> Optional[CatalogEntry]:
        """Переносит готовую запись в history и сбрасывает сканер."""
        if self.status != ScanStatus.COMPLETED:
            return None
        entry = self.store.accept_working()
        self._set_status(ScanStatus.IDLE)
        return entry

    def reset(self) -> None:
        self.store.clear_working()
        self.error = None
        self._set_status(ScanStatus.IDLE)

    def _analyze(self) -> ScanStatus:
        working = self.store.working
        self.error = None
        self._set_status(ScanStatus.ANALYZING_IMAGE)

        try:
            result = self.pipeline.process(
                working.image,
                auto_crop=self.auto_crop,
                on_step=lambda step: self._set_status(_STEP_STATUS[step]),
            )
        except CatalogingError as e:
            logger.error(f"[Scanner] Ошибка обработки: {e}")
            self.error = e.message or "An unexpected error occurred."
            self._set_status(ScanStatus.ERROR)
            return self.status

        record = BookRecord(
            title=result.title,
            author=result.author,
            synopsis=result.synopsis,
            price=self._price,
            category=result.category,
        )
        # Сканер показывает уже обрезанную обложку
        self.store.set_working(result.processed_asset, record)
        self._set_status(ScanStatus.COMPLETED)
        return self.status

    def _set_status(self, status: ScanStatus) -> None:
        if status == self.status:
            return
        self.status = status
        logger.debug(f"[Scanner] Статус: {status.value}")
        if self.on_status:
            self.on_status(status)
