"""
Имена и URL изображений для экспорта.

"Drake and Saint Helena" + id -> drake_and_saint_helena_<id>.jpeg
URL повторяет структуру загрузок WordPress: <base>/YYYY/MM/<имя>
"""

import re
from datetime import date

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify_title(title: str) -> str:
    """Нижний регистр, небуквенно-цифровые последовательности -> "_", без "_" по краям."""
    return _NON_ALNUM.sub("_", (title or "").strip().lower()).strip("_")


def image_filename(title: str, entry_id: str, extension: str) -> str:
    return f"{slugify_title(title)}_{entry_id}.{extension}"


def upload_url(base_url: str, export_date: date, filename: str) -> str:
    """URL изображения в директории загрузок месяца экспорта."""
    base = base_url if base_url.endswith("/") else base_url + "/"
    return f"{base}{export_date.year}/{export_date.month:02d}/{filename}"
