"""Экспорт каталога: CSV фид WooCommerce + изображения в zip."""

from .export_serializer import ExportSerializer
from .image_naming import image_filename, slugify_title, upload_url
from .woocommerce_feed import FEED_HEADER, build_row, render_csv

__all__ = [
    "ExportSerializer",
    "image_filename",
    "slugify_title",
    "upload_url",
    "FEED_HEADER",
    "build_row",
    "render_csv",
]
