"""Компонент для сборки итогового результата анализа."""

import logging
from typing import Iterable, Mapping, Optional

from ..interfaces.text_processor import (
    AnalysisResult,
    Classification,
    DetectedPattern,
    RankingResult,
    ResultAggregatorInterface,
)

logger = logging.getLogger(__name__)


class ResultAggregator(ResultAggregatorInterface):
    """Собирает AnalysisResult из результатов этапов без дополнительной обработки."""

    def aggregate(self, token_counts: Mapping[str, int], ranking: RankingResult,
                  classifications: Iterable[Classification],
                  patterns: Iterable[DetectedPattern],
                  language: Optional[str] = None) -> AnalysisResult:
        """
        Собирает неизменяемый результат.

        Args:
            token_counts: Словарь частот
            ranking: Топ и hapax
            classifications: Классификация слов
            patterns: Найденные сущности
            language: Код языка набора правил

        Returns:
            AnalysisResult

        Raises:
            ValueError: если какой-либо из входов равен None
        """
        for name, value in (
            ('token_counts', token_counts),
            ('ranking', ranking),
            ('classifications', classifications),
            ('patterns', patterns),
        ):
            if value is None:
                raise ValueError(f"{name} не может быть None")

        return AnalysisResult(
            total_word_count=sum(token_counts.values()),
            unique_word_count=len(token_counts),
            top_frequent=tuple(ranking.top_frequent),
            hapax=tuple(ranking.hapax),
            classifications=tuple(classifications),
            patterns=tuple(patterns),
            language=language,
        )
