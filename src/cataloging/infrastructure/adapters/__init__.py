"""
Адаптеры инфраструктуры домена Cataloging.

Реализуют интерфейсы домена поверх Gemini.
"""

from .gemini_identification_adapter import GeminiIdentificationAdapter
from .gemini_synopsis_adapter import GeminiSynopsisAdapter

__all__ = [
    "GeminiIdentificationAdapter",
    "GeminiSynopsisAdapter",
]
