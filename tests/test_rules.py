"""
Тесты для языковых наборов правил (RuleSet, Language, EntityType).
"""

import dataclasses
import re

import pytest

from lexico_analyser.rules import english, russian, spanish
from lexico_analyser.rules.base import (
    ENTITY_FLAGS,
    PATTERN_KEYS,
    EntityType,
    Language,
    RuleSet,
    compile_pattern,
    normalize_pattern_key,
)


class TestLanguage:
    """Тесты для Language."""

    def test_default_is_spanish(self):
        """Язык по умолчанию - испанский."""
        assert Language.default() is Language.SPANISH

    @pytest.mark.parametrize("code,expected", [
        ("es", Language.SPANISH),
        ("EN", Language.ENGLISH),
        (" ru ", Language.RUSSIAN),
        ("es-MX", Language.SPANISH),
        ("en_US", Language.ENGLISH),
    ])
    def test_lookup_known_codes(self, code, expected):
        """Известные коды (в т.ч. с регионом и в любом регистре) находятся."""
        assert Language.lookup(code) is expected

    @pytest.mark.parametrize("code", [None, "", "   ", "fr", "xx-YY", 42])
    def test_lookup_unknown_returns_none(self, code):
        """Строгий поиск возвращает None для неизвестных кодов."""
        assert Language.lookup(code) is None

    @pytest.mark.parametrize("code", [None, "", "de", "zz"])
    def test_from_code_falls_back_to_default(self, code):
        """from_code никогда не бросает исключений и откатывается на испанский."""
        assert Language.from_code(code) is Language.SPANISH

    def test_from_code_with_explicit_default(self):
        """Можно указать другой язык для отката."""
        assert Language.from_code("de", default=Language.ENGLISH) is Language.ENGLISH
        assert Language.from_code("ru", default=Language.ENGLISH) is Language.RUSSIAN


class TestPatternKeys:
    """Тесты для ключей шаблонов."""

    def test_entity_types_order(self):
        """Девять типов сущностей в фиксированном порядке."""
        assert [e.value for e in EntityType] == [
            "email", "url", "phone", "date", "money",
            "hashtag", "mention", "code", "person_name",
        ]

    @pytest.mark.parametrize("raw,expected", [
        ("word", "word"),
        ("Verb", "verb"),
        ("nouns", "noun"),
        ("personName", "person_name"),
        ("person-name", "person_name"),
        ("EMAIL", "email"),
    ])
    def test_normalize_known_keys(self, raw, expected):
        """Ключи и их альтернативные написания приводятся к каноническому виду."""
        assert normalize_pattern_key(raw) == expected

    @pytest.mark.parametrize("raw", ["adjective", "", None, 5])
    def test_normalize_unknown_keys(self, raw):
        """Неизвестные ключи дают None."""
        assert normalize_pattern_key(raw) is None

    def test_compile_flags(self):
        """Слова и категории без учёта регистра, сущности с учётом."""
        assert compile_pattern("word", r"\w+").flags & re.IGNORECASE
        assert compile_pattern("word", r"\w+").flags & re.MULTILINE
        assert compile_pattern("verb", r"\w+ar\b").flags & re.IGNORECASE
        assert not compile_pattern("person_name", r"[A-Z]\w+").flags & re.IGNORECASE
        assert ENTITY_FLAGS == 0

    def test_compile_invalid_pattern_raises(self):
        """Некорректный шаблон даёт re.error."""
        with pytest.raises(re.error):
            compile_pattern("noun", "([unclosed")


class TestBuiltinPatterns:
    """Тесты встроенных наборов шаблонов."""

    @pytest.mark.parametrize("module", [spanish, english, russian])
    def test_all_keys_present(self, module):
        """Каждый язык задаёт все ключи шаблонов."""
        assert set(PATTERN_KEYS) <= set(module.PATTERNS)

    @pytest.mark.parametrize("module", [spanish, english, russian])
    def test_patterns_compile(self, module):
        """Все встроенные шаблоны компилируются."""
        rule_set = RuleSet.from_sources(module.LANGUAGE, module.PATTERNS)
        assert rule_set.language is module.LANGUAGE
        assert len(rule_set.entity_patterns) == len(EntityType)


class TestRuleSet:
    """Тесты для RuleSet."""

    @pytest.fixture
    def rule_set(self):
        return RuleSet.from_sources(Language.SPANISH, spanish.PATTERNS)

    def test_language_code(self, rule_set):
        assert rule_set.language_code == "es"

    def test_is_immutable(self, rule_set):
        """Набор правил нельзя изменить после создания."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            rule_set.word_pattern = re.compile("x")
        with pytest.raises(TypeError):
            rule_set.entity_patterns[EntityType.EMAIL] = re.compile("x")

    def test_sources_round_trip(self, rule_set):
        """sources() возвращает исходные строки всех шаблонов."""
        sources = rule_set.sources()
        assert set(sources) == set(PATTERN_KEYS)
        assert sources["verb"] == spanish.PATTERNS["verb"]
        assert sources["person_name"] == spanish.PATTERNS["person_name"]

    def test_iter_entity_patterns_order(self, rule_set):
        """Шаблоны сущностей перечисляются в порядке EntityType."""
        assert [entity for entity, _ in rule_set.iter_entity_patterns()] == list(EntityType)

    def test_missing_key_raises(self):
        """Без обязательного шаблона RuleSet не собирается."""
        sources = dict(spanish.PATTERNS)
        del sources["noun"]
        with pytest.raises(KeyError):
            RuleSet.from_sources(Language.SPANISH, sources)

    def test_spanish_word_pattern_requires_two_letters(self, rule_set):
        """Однобуквенные слова и числа не считаются словами."""
        words = rule_set.word_pattern.findall("y a 42 casa él")
        assert words == ["casa", "él"]

    def test_russian_word_pattern_is_cyrillic(self):
        """Русский шаблон слова пропускает латиницу."""
        rule_set = RuleSet.from_sources(Language.RUSSIAN, russian.PATTERNS)
        assert rule_set.word_pattern.findall("Привет hello мир") == ["Привет", "мир"]
