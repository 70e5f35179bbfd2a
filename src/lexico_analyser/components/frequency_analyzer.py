"""
Компонент для анализа частотности слов.

Подсчитывает частоту токенов за один проход и даёт сводную
статистику. Анализатор не хранит состояния между вызовами: каждый
документ получает собственный словарь частот.
"""

from collections import Counter
from typing import Dict, Iterable, Mapping
import logging

from ..interfaces.text_processor import FrequencyAnalyzerInterface, TokenCount

logger = logging.getLogger(__name__)


class FrequencyAnalyzer(FrequencyAnalyzerInterface):
    """Анализатор частотности слов."""

    def count_frequency(self, tokens: Iterable[str]) -> TokenCount:
        """
        Подсчитывает частоту появления токенов.

        Токены уже приведены к нижнему регистру, поэтому ключи сравниваются точно.

        Args:
            tokens: Последовательность токенов (в т.ч. ленивая)

        Returns:
            Словарь {токен: частота}
        """
        counts = Counter(tokens)
        logger.debug(f"Подсчитано {sum(counts.values())} токенов, уникальных: {len(counts)}")
        return dict(counts)

    @staticmethod
    def merge_frequencies(*partials: Mapping[str, int]) -> TokenCount:
        """
        Объединяет частичные подсчёты (например, посчитанные параллельно).

        Результат не зависит от порядка аргументов по содержимому.

        Args:
            partials: Частичные словари частот

        Returns:
            Объединённый словарь частот
        """
        merged: Counter = Counter()
        for partial in partials:
            if partial:
                merged.update(partial)
        return dict(merged)

    @staticmethod
    def get_frequency_distribution(token_counts: Mapping[str, int]) -> Dict[int, int]:
        """
        Возвращает распределение слов по частоте.

        Returns:
            Словарь {частота: количество слов}, упорядоченный по частоте
        """
        distribution = Counter(token_counts.values())
        return dict(sorted(distribution.items()))

    @staticmethod
    def get_frequency_statistics(token_counts: Mapping[str, int]) -> Dict[str, float]:
        """
        Возвращает общую статистику частотности.

        Returns:
            Словарь со статистикой
        """
        if not token_counts:
            return {
                'total_words': 0,
                'unique_words': 0,
                'hapax_count': 0,
                'max_frequency': 0,
                'type_token_ratio': 0.0,
            }

        total = sum(token_counts.values())
        unique = len(token_counts)
        return {
            'total_words': total,
            'unique_words': unique,
            'hapax_count': sum(1 for freq in token_counts.values() if freq == 1),
            'max_frequency': max(token_counts.values()),
            'type_token_ratio': round(unique / total, 4),
        }
