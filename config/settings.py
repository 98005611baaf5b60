"""
Настройки проекта Book Scout.

ВАЖНО: Перед запуском укажите ключ Gemini API (переменная окружения GEMINI_API_KEY)!
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
INPUT_DIR = DATA_DIR / "input"
OUTPUT_DIR = DATA_DIR / "output"

# Контролируемый словарь категорий магазина
CATEGORIES_FILE = Path(__file__).parent / "categories.yaml"

# =============================================================================
# GEMINI API
# =============================================================================
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", "")).strip()

# Модель для распознавания обложки и для поиска синопсиса
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# =============================================================================
# НАСТРОЙКИ ОБРАБОТКИ
# =============================================================================
# Поддерживаемые форматы изображений
SUPPORTED_IMAGE_FORMATS = [".jpg", ".jpeg", ".png", ".webp"]

# Качество JPEG для обрезанной обложки (0-100)
CROP_JPEG_QUALITY = 95

# Шкала нормализованного bounding box от модели
BOX_SCALE = 1000

# Значения по умолчанию, если модель не вернула название/автора
UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"

# Разделитель нескольких категорий в одной строке
CATEGORY_DELIMITER = ", "

# =============================================================================
# НАСТРОЙКИ СИНОПСИСА
# =============================================================================
# Синопсис должен быть короче этого количества слов
SYNOPSIS_MAX_WORDS = 100

SYNOPSIS_EMPTY_PLACEHOLDER = "Synopsis could not be generated."
SYNOPSIS_ERROR_PLACEHOLDER = "Could not retrieve synopsis due to an error."

# =============================================================================
# НАСТРОЙКИ ПАКЕТНОЙ ОБРАБОТКИ
# =============================================================================
# Маркер ошибки для строки пакета
BATCH_FAILURE_NOTE = "Failed"

# =============================================================================
# НАСТРОЙКИ ЭКСПОРТА (WooCommerce)
# =============================================================================
# Базовый URL загрузок WordPress; к нему добавляется YYYY/MM/
EXPORT_BASE_URL = os.getenv(
    "EXPORT_BASE_URL",
    "https://hemingwaysbooks.co.za/wp-content/uploads/"
)

EXPORT_CSV_NAME = "products.csv"
EXPORT_ARCHIVE_PREFIX = "bookscout_export"

# Длина SKU (префикс идентификатора записи)
EXPORT_SKU_LENGTH = 8


# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if not GEMINI_API_KEY:
        errors.append(
            "GEMINI_API_KEY не указан!\n"
            "Экспортируйте ключ через переменную окружения GEMINI_API_KEY."
        )

    if not CATEGORIES_FILE.exists():
        errors.append(f"Файл категорий не найден: {CATEGORIES_FILE}")

    if errors:
        raise ValueError("\n".join(errors))

    # Создаём директории если не существуют
    INPUT_DIR.mkdir(parents=True, exist_ok=True)
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    return True
