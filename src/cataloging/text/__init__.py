"""Текстовые утилиты домена Cataloging: цена из имени файла и Title Case."""

from .price_extractor import PriceExtractor
from .title_caser import to_title_case

__all__ = ["PriceExtractor", "to_title_case"]
