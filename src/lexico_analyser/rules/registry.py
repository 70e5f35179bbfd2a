"""
Реестр языковых правил.

Реестр строится один раз при старте процесса и дальше только читается:
resolve() никогда не бросает исключений и для неизвестного кода
возвращает набор правил языка по умолчанию.
"""

import logging
import re
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from . import english, russian, spanish
from .base import Language, RuleSet, compile_pattern, normalize_pattern_key

logger = logging.getLogger(__name__)

# Встроенные шаблоны по языкам
BUILTIN_PATTERNS: Mapping[Language, Mapping[str, str]] = MappingProxyType({
    spanish.LANGUAGE: spanish.PATTERNS,
    english.LANGUAGE: english.PATTERNS,
    russian.LANGUAGE: russian.PATTERNS,
})


def apply_overrides(rule_set: RuleSet, overrides: Optional[Mapping[str, str]]) -> Tuple[RuleSet, List[str]]:
    """
    Применяет переопределения шаблонов к набору правил.

    Некорректные ключи и шаблоны, которые не компилируются, пропускаются
    с предупреждением - остаётся встроенный шаблон.

    Args:
        rule_set: Исходный набор правил
        overrides: Плоский словарь {ключ: регулярное выражение}

    Returns:
        Кортеж (новый RuleSet, список применённых ключей)
    """
    if not overrides:
        return rule_set, []

    sources = rule_set.sources()
    applied: List[str] = []
    for raw_key, source in overrides.items():
        key = normalize_pattern_key(raw_key)
        if key is None:
            logger.warning(f"[{rule_set.language_code}] Неизвестный ключ шаблона '{raw_key}' пропущен")
            continue
        if not isinstance(source, str) or not source.strip():
            logger.warning(f"[{rule_set.language_code}] Пустой шаблон для '{key}' пропущен")
            continue
        try:
            compile_pattern(key, source)
        except re.error as e:
            logger.warning(
                f"[{rule_set.language_code}] Шаблон '{key}' не компилируется ({e}), "
                f"используется встроенный"
            )
            continue
        sources[key] = source
        applied.append(key)

    if not applied:
        return rule_set, []
    return RuleSet.from_sources(rule_set.language, sources), applied


class RuleSetRegistry:
    """Неизменяемая таблица язык → RuleSet с языком по умолчанию."""

    def __init__(self, rule_sets: Mapping[Language, RuleSet], default: Optional[Language] = None):
        """
        Инициализирует реестр.

        Args:
            rule_sets: Наборы правил по языкам
            default: Язык по умолчанию (должен присутствовать в rule_sets)

        Raises:
            ValueError: если для языка по умолчанию нет набора правил
        """
        self._default = default or Language.default()
        if self._default not in rule_sets:
            raise ValueError(f"Нет набора правил для языка по умолчанию: {self._default.value}")
        self._rule_sets: Mapping[Language, RuleSet] = MappingProxyType(dict(rule_sets))

    @classmethod
    def builtin(cls, default: Optional[Language] = None) -> "RuleSetRegistry":
        """Реестр со встроенными правилами всех поддерживаемых языков."""
        rule_sets = {
            language: RuleSet.from_sources(language, patterns)
            for language, patterns in BUILTIN_PATTERNS.items()
        }
        return cls(rule_sets, default=default)

    @classmethod
    def from_overrides(cls, overrides: Optional[Mapping[str, Mapping[str, str]]] = None,
                       default: Optional[str] = None) -> "RuleSetRegistry":
        """
        Строит реестр из встроенных правил с переопределениями из конфигурации.

        Args:
            overrides: {код языка: {ключ шаблона: регулярное выражение}}
            default: Код языка по умолчанию (неизвестный код → испанский)

        Returns:
            Готовый реестр
        """
        default_language = Language.from_code(default)
        rule_sets: Dict[Language, RuleSet] = {}
        for language, patterns in BUILTIN_PATTERNS.items():
            rule_sets[language] = RuleSet.from_sources(language, patterns)

        for code, language_overrides in (overrides or {}).items():
            language = Language.lookup(code)
            if language is None:
                logger.warning(f"Переопределения для неподдерживаемого языка '{code}' пропущены")
                continue
            if not isinstance(language_overrides, Mapping):
                logger.warning(f"Переопределения для '{code}' должны быть словарём, пропущены")
                continue
            rule_sets[language], applied = apply_overrides(rule_sets[language], language_overrides)
            if applied:
                logger.info(f"[{language.value}] Применены переопределения шаблонов: {', '.join(applied)}")

        return cls(rule_sets, default=default_language)

    @property
    def default_language(self) -> Language:
        return self._default

    def resolve(self, language_code: Optional[str]) -> RuleSet:
        """
        Возвращает набор правил для кода языка.

        Неизвестный, пустой или None код даёт набор языка по умолчанию.
        """
        language = Language.from_code(language_code, default=self._default)
        rule_set = self._rule_sets.get(language)
        if rule_set is None:
            logger.debug(f"Нет правил для '{language_code}', используется {self._default.value}")
            return self._rule_sets[self._default]
        return rule_set

    def languages(self) -> List[str]:
        """Коды языков, для которых есть правила."""
        return [language.value for language in self._rule_sets]

    def __contains__(self, language_code: object) -> bool:
        if not isinstance(language_code, str):
            return False
        language = Language.lookup(language_code)
        return language is not None and language in self._rule_sets


# Реестр со встроенными правилами, строится один раз при импорте
DEFAULT_REGISTRY = RuleSetRegistry.builtin()
