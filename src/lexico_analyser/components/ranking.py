"""
Компонент для построения рейтингов слов.

Топ частых слов: частота по убыванию, при равенстве - слово по возрастанию.
Hapax: слова с частотой 1 по алфавиту. Стоп-слова исключаются из обоих
списков, порядок полностью определяется содержимым словаря частот.
"""

import heapq
import logging
from typing import FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ..interfaces.text_processor import RankedWord, RankingResult, RankingSelectorInterface

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 50
DEFAULT_HAPAX_N = 50


def normalize_stopwords(stopwords: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Приводит стоп-слова к нижнему регистру; None и пустой набор = без фильтрации."""
    if not stopwords:
        return frozenset()
    return frozenset(w.strip().lower() for w in stopwords if isinstance(w, str) and w.strip())


class RankingSelector(RankingSelectorInterface):
    """Селектор топа и hapax."""

    def select(self, token_counts: Mapping[str, int], stopwords: Optional[Iterable[str]] = None,
               top_n: int = DEFAULT_TOP_N, hapax_n: int = DEFAULT_HAPAX_N) -> RankingResult:
        """
        Строит топ частых слов и список hapax.

        Args:
            token_counts: Словарь частот
            stopwords: Стоп-слова (сравнение без учёта регистра)
            top_n: Максимальная длина топа (отрицательное значение = 0)
            hapax_n: Максимальная длина списка hapax

        Returns:
            RankingResult с кортежами RankedWord
        """
        stop = normalize_stopwords(stopwords)
        candidates: List[Tuple[str, int]] = [
            (word, freq) for word, freq in token_counts.items()
            if word.lower() not in stop
        ]

        top = heapq.nsmallest(max(0, top_n), candidates, key=lambda item: (-item[1], item[0]))
        hapax_words = heapq.nsmallest(max(0, hapax_n), (word for word, freq in candidates if freq == 1))

        logger.debug(
            f"Ранжирование: кандидатов {len(candidates)}, стоп-слов {len(stop)}, "
            f"топ {len(top)}, hapax {len(hapax_words)}"
        )
        return RankingResult(
            top_frequent=tuple(RankedWord(word=word, frequency=freq) for word, freq in top),
            hapax=tuple(RankedWord(word=word, frequency=1) for word in hapax_words),
        )
