"""
Базовые типы языковых правил.

RuleSet - неизменяемый набор скомпилированных регулярных выражений
для одного языка: граница слова, эвристики частей речи и шаблоны
структурированных сущностей (email, URL, телефоны и т.д.).
"""

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Pattern, Tuple


class Language(str, Enum):
    """Поддерживаемые языки (закрытый набор с языком по умолчанию)."""

    SPANISH = "es"
    ENGLISH = "en"
    RUSSIAN = "ru"

    @classmethod
    def default(cls) -> "Language":
        """Язык, на который откатываются неизвестные коды."""
        return cls.SPANISH

    @classmethod
    def lookup(cls, code: Optional[str]) -> Optional["Language"]:
        """Строгий поиск языка по коду; для неизвестного кода возвращает None."""
        if not code or not isinstance(code, str):
            return None
        normalized = code.strip().lower().replace("_", "-").split("-")[0]
        for language in cls:
            if language.value == normalized:
                return language
        return None

    @classmethod
    def from_code(cls, code: Optional[str], default: Optional["Language"] = None) -> "Language":
        """
        Преобразует код языка в Language. Никогда не бросает исключений.

        Принимаются коды с регионом ('es-MX', 'en_US') и любой регистр.

        Args:
            code: Код языка (ISO 639-1) или None
            default: Язык для неизвестных кодов (по умолчанию испанский)

        Returns:
            Найденный язык или язык по умолчанию
        """
        return cls.lookup(code) or default or cls.default()


class EntityType(str, Enum):
    """Типы структурированных сущностей, порядок = порядок обхода детектором."""

    EMAIL = "email"
    URL = "url"
    PHONE = "phone"
    DATE = "date"
    MONEY = "money"
    HASHTAG = "hashtag"
    MENTION = "mention"
    CODE = "code"
    PERSON_NAME = "person_name"


# Ключи шаблонов частей речи / токенов
WORD_KEY = "word"
CATEGORY_KEYS = ("pronoun", "verb", "noun")
ENTITY_KEYS = tuple(entity.value for entity in EntityType)
PATTERN_KEYS = (WORD_KEY,) + CATEGORY_KEYS + ENTITY_KEYS

# Альтернативные написания ключей (camelCase из внешней конфигурации,
# суффикс "Regex" отбрасывается: "PronounsRegex" -> "pronouns" -> "pronoun")
KEY_SUFFIX = "regex"
KEY_ALIASES = {
    "personname": EntityType.PERSON_NAME.value,
    "person-name": EntityType.PERSON_NAME.value,
    "pronouns": "pronoun",
    "verbs": "verb",
    "nouns": "noun",
}

# Токены и категории сравниваются без учёта регистра, сущности - с учётом
# (имена людей определяются по заглавной букве).
WORD_FLAGS = re.IGNORECASE | re.MULTILINE
CATEGORY_FLAGS = re.IGNORECASE
ENTITY_FLAGS = 0

# Общие для всех языков шаблоны сущностей
COMMON_ENTITY_PATTERNS: Dict[str, str] = {
    "email": r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[A-Za-z]{2,}",
    "url": r"https?://[^\s]+",
    "phone": r"\+?\d[\d\s\-]{7,}\d",
    "date": r"\b(?:\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}|\d{4}[-/]\d{2}[-/]\d{2})\b",
    "hashtag": r"#\w+",
    "mention": r"@\w+",
    "code": r"\b[A-Z]{2,4}-\d{3,6}\b",
}


def normalize_pattern_key(key: str) -> Optional[str]:
    """Приводит ключ шаблона к каноническому виду или возвращает None."""
    if not isinstance(key, str):
        return None
    normalized = key.strip().lower()
    if normalized.endswith(KEY_SUFFIX) and len(normalized) > len(KEY_SUFFIX):
        normalized = normalized[:-len(KEY_SUFFIX)].rstrip("_-")
    normalized = KEY_ALIASES.get(normalized, normalized)
    return normalized if normalized in PATTERN_KEYS else None


def compile_pattern(key: str, source: str) -> Pattern:
    """
    Компилирует шаблон с флагами, подходящими для его назначения.

    Raises:
        re.error: если шаблон некорректен
    """
    if key == WORD_KEY:
        flags = WORD_FLAGS
    elif key in CATEGORY_KEYS:
        flags = CATEGORY_FLAGS
    else:
        flags = ENTITY_FLAGS
    return re.compile(source, flags)


@dataclass(frozen=True)
class RuleSet:
    """
    Неизменяемый набор правил для одного языка.

    Attributes:
        language: Язык набора
        word_pattern: Шаблон слова (минимальная длина, алфавит языка)
        pronoun_pattern: Личные местоимения
        verb_pattern: Эвристика глагольных окончаний
        noun_pattern: Эвристика именных окончаний
        entity_patterns: Шаблоны сущностей в порядке EntityType
    """

    language: Language
    word_pattern: Pattern
    pronoun_pattern: Pattern
    verb_pattern: Pattern
    noun_pattern: Pattern
    entity_patterns: Mapping[EntityType, Pattern]

    @property
    def language_code(self) -> str:
        return self.language.value

    @classmethod
    def from_sources(cls, language: Language, sources: Mapping[str, str]) -> "RuleSet":
        """
        Собирает RuleSet из строковых шаблонов.

        Args:
            language: Язык набора
            sources: Словарь {ключ: регулярное выражение}, ключи из PATTERN_KEYS

        Returns:
            Скомпилированный набор правил

        Raises:
            KeyError: если не хватает обязательного шаблона
            re.error: если шаблон некорректен
        """
        compiled = {key: compile_pattern(key, sources[key]) for key in PATTERN_KEYS}
        entities = MappingProxyType(
            {entity: compiled[entity.value] for entity in EntityType}
        )
        return cls(
            language=language,
            word_pattern=compiled[WORD_KEY],
            pronoun_pattern=compiled["pronoun"],
            verb_pattern=compiled["verb"],
            noun_pattern=compiled["noun"],
            entity_patterns=entities,
        )

    def sources(self) -> Dict[str, str]:
        """Возвращает исходные строки всех шаблонов."""
        result = {
            WORD_KEY: self.word_pattern.pattern,
            "pronoun": self.pronoun_pattern.pattern,
            "verb": self.verb_pattern.pattern,
            "noun": self.noun_pattern.pattern,
        }
        for entity, pattern in self.entity_patterns.items():
            result[entity.value] = pattern.pattern
        return result

    def iter_entity_patterns(self) -> Iterator[Tuple[EntityType, Pattern]]:
        """Итерирует шаблоны сущностей в фиксированном порядке EntityType."""
        for entity in EntityType:
            pattern = self.entity_patterns.get(entity)
            if pattern is not None:
                yield entity, pattern
