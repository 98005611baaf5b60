"""
CSV фид для массового импорта товаров WooCommerce.

Порядок колонок фиксирован и совпадает с образцом импорта магазина.
Экранирование стандартное (csv.QUOTE_MINIMAL): поле с запятой, кавычкой
или переводом строки берётся в кавычки, внутренние кавычки удваиваются.
"""

import csv
import io
from typing import Iterable, List, Sequence

from config.settings import EXPORT_SKU_LENGTH
from contracts.d2_catalog_dto import CatalogEntry

FEED_HEADER = (
    "parent_sku",
    "sku",
    "post_title",
    "post_excerpt",
    "post_content",
    "post_status",
    "regular_price",
    "sale_price",
    "stock_status",
    "stock",
    "manage_stock",
    "weight",
    "Images",
    "tax:product_type",
    "tax:product_cat",
    "tax:product_tag",
)


def build_row(entry: CatalogEntry, image_url: str) -> List[str]:
    """Строка фида для одной записи, в порядке FEED_HEADER."""
    return [
        "",                                         # parent_sku
        entry.id[:EXPORT_SKU_LENGTH],               # sku
        f"{entry.title} – {entry.author}",          # post_title
        entry.synopsis,                             # post_excerpt
        entry.synopsis,                             # post_content
        "publish",                                  # post_status
        entry.price,                                # regular_price
        "",                                         # sale_price
        "instock",                                  # stock_status
        "1",                                        # stock
        "yes",                                      # manage_stock
        "",                                         # weight
        image_url,                                  # Images
        "simple",                                   # tax:product_type
        entry.category.replace("/", ","),           # tax:product_cat
        entry.author,                               # tax:product_tag
    ]


def render_csv(rows: Iterable[Sequence[str]]) -> str:
    """Заголовок + строки в CSV текст."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(FEED_HEADER)
    writer.writerows(rows)
    return buffer.getvalue()
