"""Контролируемый словарь категорий (config/categories.yaml)."""

from .category_vocabulary import (
    CategoryGroup,
    CategoryVocabulary,
    CategoryVocabularyLoader,
    default_vocabulary,
)

__all__ = [
    "CategoryGroup",
    "CategoryVocabulary",
    "CategoryVocabularyLoader",
    "default_vocabulary",
]
