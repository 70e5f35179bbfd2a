"""
Компонент для эвристической грамматической классификации.

Классификация строится на шаблонах окончаний, а не на морфологии:
- местоимение исключает остальные категории;
- глагол и существительное проверяются независимо, слово может
  попасть в обе категории.
"""

import logging
from typing import List, Mapping

from ..interfaces.text_processor import Classification, GrammaticalClassifierInterface, WordCategory
from ..rules.base import RuleSet

logger = logging.getLogger(__name__)


class GrammaticalClassifier(GrammaticalClassifierInterface):
    """Классификатор слов по шаблонам RuleSet."""

    def classify(self, token_counts: Mapping[str, int], rule_set: RuleSet) -> List[Classification]:
        """
        Классифицирует каждое уникальное слово (включая стоп-слова).

        Args:
            token_counts: Словарь частот
            rule_set: Набор правил языка

        Returns:
            Список Classification в порядке первого появления слов
        """
        result: List[Classification] = []
        for word, freq in token_counts.items():
            result.extend(self.classify_word(word, freq, rule_set))

        logger.debug(f"[{rule_set.language_code}] Классифицировано записей: {len(result)}")
        return result

    @staticmethod
    def classify_word(word: str, frequency: int, rule_set: RuleSet) -> List[Classification]:
        """
        Возвращает категории одного слова.

        Args:
            word: Слово в нижнем регистре
            frequency: Частота слова
            rule_set: Набор правил языка

        Returns:
            Ноль, одна или две записи Classification
        """
        if rule_set.pronoun_pattern.search(word):
            return [Classification(word=word, category=WordCategory.PRONOUN, frequency=frequency)]

        categories: List[Classification] = []
        if rule_set.verb_pattern.search(word):
            categories.append(Classification(word=word, category=WordCategory.VERB, frequency=frequency))
        if rule_set.noun_pattern.search(word):
            categories.append(Classification(word=word, category=WordCategory.NOUN, frequency=frequency))
        return categories
