"""
Title Caser - приведение названий и имён к Title Case.

"the LORD of the RINGS" -> "The Lord Of The Rings"
"""

import re

# Разделитель слов сохраняется при split (пробелы не схлопываются)
_WHITESPACE = re.compile(r"(\s+)")


def to_title_case(text: str) -> str:
    """
    Каждое слово: первая буква заглавная, остальные строчные.

    Количество слов, пробелы и небуквенные символы не меняются.
    """
    if not text:
        return ""
    parts = _WHITESPACE.split(text.lower())
    return "".join(
        part if not part or part.isspace() else _capitalize_first_letter(part)
        for part in parts
    )


def _capitalize_first_letter(word: str) -> str:
    for index, char in enumerate(word):
        if char.isalpha():
            return word[:index] + char.upper() + word[index + 1:]
    return word
