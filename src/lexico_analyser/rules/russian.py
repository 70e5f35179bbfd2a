"""Правила для русского языка."""

from .base import COMMON_ENTITY_PATTERNS, Language

LANGUAGE = Language.RUSSIAN

PATTERNS = {
    "word": r"\b[А-Яа-яЁё]{2,}\b",
    "pronoun": r"\b(?:я|ты|он|она|оно|мы|вы|они|меня|тебя|его|её|нас|вас|их|мне|тебе|ему|ей|нам|вам|им)\b",
    # Инфинитив и частые формы времени
    "verb": r"\b[А-Яа-яЁё]+(?:ть|л|ла|ло|ли|ешь|ем|ете|ют|у)\b",
    "noun": r"\b[А-Яа-яЁё]+(?:ие|ия|ость|тель|ник|ка|ть|ца|ок|ец|ёнок|ушка|ение)\b",
    **COMMON_ENTITY_PATTERNS,
    # Даты допускают точку в качестве разделителя: 01.02.2024
    "date": r"\b(?:\d{1,2}[./-]\d{1,2}[./-]\d{2,4}|\d{4}[./-]\d{2}[./-]\d{2})\b",
    "money": r"(?:₽|\bруб\.?)\s?\d{1,3}(?:[.,]\d{3})*(?:[.,]\d{2})?\b",
    "code": r"\b[A-ZА-Я]{2,4}-\d{3,6}\b",
    "person_name": r"\b[А-ЯЁ][а-яё]+(?:\s+[А-ЯЁ][а-яё]+){0,2}\b",
}
