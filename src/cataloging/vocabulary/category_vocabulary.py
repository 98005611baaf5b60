"""
Контролируемый словарь категорий магазина.

Загружается из config/categories.yaml и валидируется через Pydantic:
- у каждой группы есть имя и хотя бы одна категория
- метки не повторяются между группами

Модель распознавания получает этот список как enum в схеме ответа,
свободный текст категорий не принимается.
"""

from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from config.settings import CATEGORIES_FILE
from ..domain.exceptions import CatalogingConfigurationError


class CategoryGroup(BaseModel):
    """Группа категорий (Africana & SA, Arts & Culture, ...)."""

    name: str = Field(..., min_length=1, description="Название группы")
    categories: List[str] = Field(..., min_length=1, description="Метки категорий группы")

    model_config = ConfigDict(frozen=True)

    @field_validator("categories")
    @classmethod
    def strip_labels(cls, v: List[str]) -> List[str]:
        labels = [label.strip() for label in v]
        if any(not label for label in labels):
            raise ValueError("Пустая метка категории")
        return labels


class CategoryVocabulary(BaseModel):
    """Полный словарь категорий."""

    groups: List[CategoryGroup] = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def labels_unique(self) -> "CategoryVocabulary":
        seen = set()
        for label in self.all_labels():
            if label in seen:
                raise ValueError(f"Категория повторяется: {label}")
            seen.add(label)
        return self

    def all_labels(self) -> List[str]:
        return [label for group in self.groups for label in group.categories]

    @property
    def labels(self) -> Tuple[str, ...]:
        """Все метки в порядке файла."""
        return tuple(self.all_labels())

    def __contains__(self, label: object) -> bool:
        return label in self.labels

    def __len__(self) -> int:
        return len(self.labels)

    def select(self, candidates: Iterable[str]) -> List[str]:
        """
        Оставляет только метки из словаря, без повторов, в исходном порядке.

        Args:
            candidates: Метки от модели

        Returns:
            Отфильтрованный список
        """
        allowed = set(self.labels)
        selected: List[str] = []
        for label in candidates:
            label = label.strip()
            if label in allowed and label not in selected:
                selected.append(label)
        return selected


class CategoryVocabularyLoader:
    """Загружает словарь категорий из YAML файла с валидацией через Pydantic."""

    def __init__(self, categories_file: Optional[Path] = None):
        """
        Args:
            categories_file: YAML файл (по умолчанию config/categories.yaml)
        """
        self.categories_file = Path(categories_file) if categories_file else CATEGORIES_FILE

    def load(self) -> CategoryVocabulary:
        """
        Загружает и валидирует словарь.

        Raises:
            CatalogingConfigurationError: Если файл не найден или невалиден
        """
        if not self.categories_file.exists():
            raise CatalogingConfigurationError(
                message=f"Файл категорий не найден: {self.categories_file}",
                component="CategoryVocabularyLoader"
            )

        logger.debug(f"[CategoryVocabularyLoader] Загрузка словаря: {self.categories_file}")

        with open(self.categories_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        try:
            vocabulary = CategoryVocabulary.model_validate(data)
        except ValidationError as e:
            logger.error(f"[CategoryVocabularyLoader] Ошибки Pydantic:\n{e}")
            raise CatalogingConfigurationError(
                message=f"Словарь категорий невалиден: {self.categories_file}",
                component="CategoryVocabularyLoader",
                original_error=e
            ) from e

        logger.info(
            f"[CategoryVocabularyLoader] Загружено {len(vocabulary)} категорий "
            f"в {len(vocabulary.groups)} группах"
        )
        return vocabulary


@lru_cache(maxsize=1)
def default_vocabulary() -> CategoryVocabulary:
    """Словарь из config/categories.yaml (загружается один раз)."""
    return CategoryVocabularyLoader().load()
