"""
Компонент для поиска структурированных сущностей.

Ищет в исходном (не токенизированном, с сохранённым регистром) тексте
email, URL, телефоны, даты, суммы, хэштеги, упоминания, коды и имена.
Повторы одного типа в разных местах сохраняются, пересечения разных
типов не устраняются - дедупликацию для показа делает слой отчётов.
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from ..interfaces.text_processor import DetectedPattern, PatternDetectorInterface
from ..rules.base import EntityType, RuleSet

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_RADIUS = 30


class PatternDetector(PatternDetectorInterface):
    """Детектор сущностей с извлечением контекста."""

    def __init__(self, context_radius: int = DEFAULT_CONTEXT_RADIUS, max_matches_per_pattern: int = 0):
        """
        Инициализирует детектор.

        Args:
            context_radius: Радиус окна контекста в символах
            max_matches_per_pattern: Лимит совпадений на один тип (0 = без лимита)
        """
        self.context_radius = max(0, context_radius)
        self.max_matches_per_pattern = max(0, max_matches_per_pattern)

    def detect(self, raw_text: Optional[str], rule_set: RuleSet) -> List[DetectedPattern]:
        """
        Находит все совпадения всех шаблонов сущностей.

        Args:
            raw_text: Исходный текст
            rule_set: Набор правил языка

        Returns:
            Список DetectedPattern: по типам в порядке EntityType, внутри типа - по позиции
        """
        if not raw_text:
            return []

        found: List[DetectedPattern] = []
        for entity_type, pattern in rule_set.iter_entity_patterns():
            count = 0
            for match in pattern.finditer(raw_text):
                if match.end() == match.start():
                    continue
                if self.max_matches_per_pattern and count >= self.max_matches_per_pattern:
                    logger.debug(
                        f"[{rule_set.language_code}] Лимит {self.max_matches_per_pattern} "
                        f"совпадений для '{entity_type.value}' достигнут"
                    )
                    break
                found.append(DetectedPattern(
                    pattern_type=entity_type,
                    matched_text=match.group(0),
                    context_window=self.extract_context(raw_text, match.start(), self.context_radius),
                    start_offset=match.start(),
                    end_offset=match.end(),
                ))
                count += 1

        logger.debug(f"[{rule_set.language_code}] Найдено сущностей: {len(found)}")
        return found

    @staticmethod
    def extract_context(text: str, index: int, radius: int = DEFAULT_CONTEXT_RADIUS) -> str:
        """
        Возвращает окно текста радиуса radius вокруг позиции index.

        Границы окна обрезаются по границам текста.
        """
        start = max(0, index - radius)
        end = min(len(text), index + radius)
        return text[start:end]

    @staticmethod
    def group_by_type(patterns: Iterable[DetectedPattern], distinct: bool = True,
                      cap: Optional[int] = None) -> Dict[EntityType, List[str]]:
        """
        Группирует совпадения по типу для отображения.

        Args:
            patterns: Найденные сущности
            distinct: Убирать повторы одного текста внутри типа
            cap: Максимум значений на тип (None = без ограничения)

        Returns:
            Словарь {тип: [совпадения]} с ключами для всех типов в порядке EntityType
        """
        grouped: Dict[EntityType, List[str]] = OrderedDict((entity, []) for entity in EntityType)
        for pattern in patterns:
            values = grouped[pattern.pattern_type]
            if cap is not None and len(values) >= cap:
                continue
            if distinct and pattern.matched_text in values:
                continue
            values.append(pattern.matched_text)
        return grouped
