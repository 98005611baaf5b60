"""
Домен Cataloging: фотография книги -> поля каталога.

Этот домен отвечает за:
1. Распознавание книги через Gemini Vision (название, автор, рамка, категории)
2. Обрезку обложки по рамке
3. Поиск или генерацию синопсиса
4. Одиночный (сканер) и пакетный режимы

Граница домена: contracts.CatalogingResult
"""

# Экспортируем application слой
from .application.cataloging_pipeline import CatalogingPipeline
from .application.batch_orchestrator import BatchOrchestrator
from .application.scanner_session import ScannerSession
from .application.factory import CatalogingComponentFactory
from .infrastructure.image_loader import ImageLoader

__all__ = [
    "CatalogingPipeline",
    "BatchOrchestrator",
    "ScannerSession",
    "CatalogingComponentFactory",
    "ImageLoader",
]
