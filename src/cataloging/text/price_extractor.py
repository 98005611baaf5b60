"""
Price Extractor - Извлечение цены из имени файла.

Оператор кодирует цену в имени фотографии: "380.1.jpg" -> "380".
Берётся ведущая последовательность цифр до любого разделителя.
"""

import re
from pathlib import PurePath


class PriceExtractor:
    """
    Извлечение цены из имени файла.

    ЦКП: ведущие цифры имени файла или "" (без исключений).
    """

    # Ведущие ASCII цифры в начале имени
    LEADING_DIGITS_PATTERN = re.compile(r"^([0-9]+)")

    @classmethod
    def extract(cls, filename: str) -> str:
        """
        Извлекает цену из имени файла.

        Args:
            filename: Имя файла (может быть пустым)

        Returns:
            Строка цифр ("380") или "" если имя не начинается с цифры
        """
        if not filename:
            return ""
        match = cls.LEADING_DIGITS_PATTERN.match(filename)
        return match.group(1) if match else ""

    @classmethod
    def extract_from_path(cls, path: str) -> str:
        """То же, что extract, но для полного пути: учитывается только имя файла."""
        if not path:
            return ""
        return cls.extract(PurePath(path).name)
