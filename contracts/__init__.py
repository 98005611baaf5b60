"""
Контракты DTO между доменами проекта Book Scout.

Контракты:
- D1 -> D2: CatalogingResult, ImageAsset, BoundingBox (d1_cataloging_dto.py)
- D2: BookRecord, BatchItem, CatalogEntry (d2_catalog_dto.py)

Ответ модели распознавания валидируется через Pydantic v2 (IdentificationResult),
редактируемые записи каталога — обычные dataclass.
"""

# D1 -> D2 (Cataloging -> Catalog)
from .d1_cataloging_dto import (
    ImageAsset,
    BoundingBox,
    IdentificationResult,
    SynopsisStatus,
    SynopsisResult,
    PipelineStep,
    CatalogingResult,
)

# D2 (Catalog)
from .d2_catalog_dto import (
    BookRecord,
    BatchStatus,
    BatchItem,
    CatalogEntry,
    WorkingItem,
    new_identity,
)

__all__ = [
    # D1 -> D2
    "ImageAsset",
    "BoundingBox",
    "IdentificationResult",
    "SynopsisStatus",
    "SynopsisResult",
    "PipelineStep",
    "CatalogingResult",
    # D2
    "BookRecord",
    "BatchStatus",
    "BatchItem",
    "CatalogEntry",
    "WorkingItem",
    "new_identity",
]
