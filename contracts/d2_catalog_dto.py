"""
DTO контракт: D2 (Catalog)

Записи каталога в памяти сессии:
- BookRecord — редактируемые поля книги
- BatchItem — элемент пакетной обработки со статусом
- CatalogEntry — принятая запись (история или архив)
- WorkingItem — текущая фотография сканера

ВАЖНО: Все текстовые поля по умолчанию "" и никогда не отсутствуют.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple
from uuid import uuid4

from .d1_cataloging_dto import ImageAsset


def new_identity() -> str:
    """Уникальный идентификатор записи в пределах сессии."""
    return str(uuid4())


@dataclass
class BookRecord:
    """
    Поля книги, которые видит и редактирует оператор.

    category может содержать несколько меток через ", ".
    """
    title: str = ""
    author: str = ""
    synopsis: str = ""
    price: str = ""
    category: str = ""

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(BookRecord))

    def to_record(self) -> "BookRecord":
        """Копия только полей книги."""
        return BookRecord(**{name: getattr(self, name) for name in BookRecord.field_names()})


class BatchStatus(str, Enum):
    """Жизненный цикл элемента пакета: PENDING -> PROCESSING -> DONE | FAILED."""
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BatchItem:
    """
    Элемент пакетной обработки.

    record.price заполняется из имени файла при создании и НЕ перезаписывается AI.
    """
    source_asset: ImageAsset
    preview_asset: ImageAsset
    id: str = field(default_factory=new_identity)
    status: BatchStatus = BatchStatus.PENDING
    record: BookRecord = field(default_factory=BookRecord)
    processed_asset: Optional[ImageAsset] = None
    error_note: Optional[str] = None


@dataclass
class CatalogEntry(BookRecord):
    """
    Принятая запись каталога: BookRecord + идентификатор, изображение, время.
    """
    id: str = field(default_factory=new_identity)
    image: Optional[ImageAsset] = None
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_record(
        cls,
        record: BookRecord,
        image: Optional[ImageAsset],
        entry_id: Optional[str] = None,
    ) -> "CatalogEntry":
        entry = cls(**{name: getattr(record, name) for name in BookRecord.field_names()})
        entry.image = image
        if entry_id:
            entry.id = entry_id
        return entry


@dataclass
class WorkingItem:
    """
    Текущая фотография в сканере (одиночный режим).

    record = None, пока пайплайн не завершился.
    """
    image: ImageAsset
    record: Optional[BookRecord] = None
