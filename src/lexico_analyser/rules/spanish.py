"""
Правила для испанского языка (язык по умолчанию).

Эвристики частей речи намеренно грубые: окончание слова,
а не морфологический разбор.
"""

from .base import COMMON_ENTITY_PATTERNS, Language

LANGUAGE = Language.SPANISH

_UPPER = "A-ZÁÉÍÓÚÜÑ"
_LOWER = "a-záéíóúüñ"

PATTERNS = {
    # Слово: буквы (в т.ч. с диакритикой после NFC), минимум 2 символа
    "word": r"\b[^\W\d_]{2,}\b",
    "pronoun": (
        r"\b(?:yo|tú|vos|usted|él|ella|nosotros|nosotras|vosotros|ustedes|"
        r"ellos|ellas|mí|conmigo|ti|contigo|sí|consigo)\b"
    ),
    # Инфинитив, причастия и герундии
    "verb": r"\b[^\W\d_]+(?:ar|er|ir|ando|iendo|ado|ido)\b",
    "noun": (
        r"\b[^\W\d_]+(?:ción|sión|dad|tud|aje|ura|ista|ismo|ez|eza|or|ora|o|a|e|s)\b"
    ),
    **COMMON_ENTITY_PATTERNS,
    "money": r"(?:\bUSD|\bQ|\bL|\bC|\$)\s?\d{1,3}(?:[.,]\d{3})*(?:[.,]\d{2})?\b",
    # Титул (необязательно) + 1-3 слова с заглавной буквы
    "person_name": (
        rf"\b(?:(?:Sr\.|Sra\.|Srta\.|Dr\.|Dra\.|Ing\.|Lic\.)\s+)?"
        rf"[{_UPPER}][{_LOWER}]+(?:\s+[{_UPPER}][{_LOWER}]+){{0,2}}\b"
    ),
}
