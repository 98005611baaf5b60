"""
Application слой домена Cataloging.

Содержит пайплайн, оркестратор пакета, сессию сканера и фабрику.
"""

from .cataloging_pipeline import CatalogingPipeline
from .batch_orchestrator import BatchOrchestrator, BatchRunSummary
from .scanner_session import ScannerSession, ScanStatus
from .factory import CatalogingComponentFactory

__all__ = [
    "CatalogingPipeline",
    "BatchOrchestrator",
    "BatchRunSummary",
    "ScannerSession",
    "ScanStatus",
    "CatalogingComponentFactory",
]
