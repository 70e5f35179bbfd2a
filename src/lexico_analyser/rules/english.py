"""Правила для английского языка."""

from .base import COMMON_ENTITY_PATTERNS, Language

LANGUAGE = Language.ENGLISH

PATTERNS = {
    "word": r"\b[^\W\d_]{2,}\b",
    "pronoun": r"\b(?:i|you|he|she|it|we|they|me|him|her|us|them|mine|yours|his|hers|ours|theirs)\b",
    "verb": r"\b[^\W\d_]+(?:ing|ed|s)\b",
    "noun": (
        r"\b[^\W\d_]+(?:tion|ness|ment|ity|ship|er|or|ist|ism|ance|ence|al|ure|age|ry|"
        r"dom|hood|ty|ling)\b"
    ),
    **COMMON_ENTITY_PATTERNS,
    "money": r"(?:\bUSD|\$|£|€)\s?\d{1,3}(?:[.,]\d{3})*(?:[.,]\d{2})?\b",
    "person_name": r"\b(?:(?:Mr\.|Mrs\.|Ms\.|Dr\.|Prof\.)\s+)?[A-Z][a-z]+(?:\s+[A-Z][a-z]+){0,2}\b",
}
