"""
Абстрактные интерфейсы и типы результатов лексического анализа.

Определяет контракты компонентов движка (токенизация, подсчёт частот,
ранжирование, классификация, поиск шаблонов, сборка результата)
и неизменяемые структуры данных, которыми они обмениваются.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Pattern, Tuple, Union

from ..rules.base import EntityType, RuleSet

# Отображение "токен → количество вхождений"
TokenCount = Dict[str, int]


class WordCategory(str, Enum):
    """Эвристические грамматические категории."""

    PRONOUN = "pronoun"
    VERB = "verb"
    NOUN = "noun"


@dataclass(frozen=True)
class RankedWord:
    """Слово и его частота (для топа и для hapax)."""
    word: str
    frequency: int

    def to_dict(self) -> Dict[str, Any]:
        return {'word': self.word, 'frequency': self.frequency}


@dataclass(frozen=True)
class Classification:
    """Одна категория для одного слова; слово может иметь несколько записей."""
    word: str
    category: WordCategory
    frequency: int

    def to_dict(self) -> Dict[str, Any]:
        return {'word': self.word, 'category': self.category.value, 'frequency': self.frequency}


@dataclass(frozen=True)
class DetectedPattern:
    """
    Найденная структурированная сущность.

    Attributes:
        pattern_type: Тип сущности
        matched_text: Совпавший фрагмент исходного текста
        context_window: Окрестность совпадения фиксированного радиуса
        start_offset: Начало совпадения (индекс в исходном тексте)
        end_offset: Конец совпадения (не включительно)
    """
    pattern_type: EntityType
    matched_text: str
    context_window: str
    start_offset: int
    end_offset: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'patternType': self.pattern_type.value,
            'matchedText': self.matched_text,
            'contextWindow': self.context_window,
            'startOffset': self.start_offset,
            'endOffset': self.end_offset,
        }


@dataclass(frozen=True)
class RankingResult:
    """Результат ранжирования: топ частых слов и hapax."""
    top_frequent: Tuple[RankedWord, ...] = ()
    hapax: Tuple[RankedWord, ...] = ()


@dataclass(frozen=True)
class AnalysisResult:
    """Результат анализа одного документа. Создаётся заново при каждом вызове."""
    total_word_count: int = 0
    unique_word_count: int = 0
    top_frequent: Tuple[RankedWord, ...] = ()
    hapax: Tuple[RankedWord, ...] = ()
    classifications: Tuple[Classification, ...] = ()
    patterns: Tuple[DetectedPattern, ...] = ()
    language: Optional[str] = None

    @classmethod
    def empty(cls, language: Optional[str] = None) -> "AnalysisResult":
        """Нулевой результат (пустой или отсутствующий текст)."""
        return cls(language=language)

    def words_by_category(self, category: Union[WordCategory, str]) -> List[RankedWord]:
        """
        Возвращает слова категории, отсортированные по частоте (убывание), затем по слову.

        Args:
            category: Категория (WordCategory или её строковое значение)

        Returns:
            Список RankedWord
        """
        category = WordCategory(category)
        words = [
            RankedWord(word=c.word, frequency=c.frequency)
            for c in self.classifications
            if c.category == category
        ]
        words.sort(key=lambda w: (-w.frequency, w.word))
        return words

    def patterns_of_type(self, pattern_type: Union[EntityType, str]) -> List[DetectedPattern]:
        """Возвращает все совпадения одного типа в порядке появления."""
        pattern_type = EntityType(pattern_type)
        return [p for p in self.patterns if p.pattern_type == pattern_type]

    def to_summary(self, category_limit: Optional[int] = None) -> Dict[str, Any]:
        """
        Краткая сводка для HTTP-ответа: счётчики, топ, hapax и списки по категориям.

        Args:
            category_limit: Ограничение длины списков по категориям (None = без ограничения)
        """
        def category_words(category: WordCategory) -> List[Dict[str, Any]]:
            words = self.words_by_category(category)
            if category_limit is not None:
                words = words[:category_limit]
            return [w.to_dict() for w in words]

        return {
            'language': self.language,
            'totalWordCount': self.total_word_count,
            'uniqueWordCount': self.unique_word_count,
            'topFrequent': [w.to_dict() for w in self.top_frequent],
            'hapax': [w.to_dict() for w in self.hapax],
            'pronouns': category_words(WordCategory.PRONOUN),
            'verbs': category_words(WordCategory.VERB),
            'nouns': category_words(WordCategory.NOUN),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Полное представление результата для JSON-экспорта."""
        return {
            'language': self.language,
            'totalWordCount': self.total_word_count,
            'uniqueWordCount': self.unique_word_count,
            'topFrequent': [w.to_dict() for w in self.top_frequent],
            'hapax': [w.to_dict() for w in self.hapax],
            'classifications': [c.to_dict() for c in self.classifications],
            'patterns': [p.to_dict() for p in self.patterns],
        }


@dataclass(frozen=True)
class Document:
    """Документ, поступающий от источника документов."""
    id: Union[int, str]
    raw_text: str
    language: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)


class TokenProcessorInterface(ABC):
    """Интерфейс для токенизации текста."""

    @abstractmethod
    def tokenize(self, text: Optional[str], word_pattern: Union[str, Pattern]) -> Iterator[str]:
        """Лениво извлекает токены в нижнем регистре."""
        pass


class FrequencyAnalyzerInterface(ABC):
    """Интерфейс для подсчёта частотности."""

    @abstractmethod
    def count_frequency(self, tokens: Iterable[str]) -> TokenCount:
        """Подсчитывает частоту токенов за один проход."""
        pass


class RankingSelectorInterface(ABC):
    """Интерфейс для построения топа и hapax."""

    @abstractmethod
    def select(self, token_counts: TokenCount, stopwords: Optional[Iterable[str]],
               top_n: int, hapax_n: int) -> RankingResult:
        """Строит детерминированные списки топа и hapax без стоп-слов."""
        pass


class GrammaticalClassifierInterface(ABC):
    """Интерфейс для эвристической классификации слов."""

    @abstractmethod
    def classify(self, token_counts: TokenCount, rule_set: RuleSet) -> List[Classification]:
        """Классифицирует каждое уникальное слово."""
        pass


class PatternDetectorInterface(ABC):
    """Интерфейс для поиска структурированных сущностей."""

    @abstractmethod
    def detect(self, raw_text: Optional[str], rule_set: RuleSet) -> List[DetectedPattern]:
        """Находит все совпадения всех шаблонов сущностей."""
        pass


class ResultAggregatorInterface(ABC):
    """Интерфейс для сборки итогового результата."""

    @abstractmethod
    def aggregate(self, token_counts: TokenCount, ranking: RankingResult,
                  classifications: Iterable[Classification],
                  patterns: Iterable[DetectedPattern]) -> AnalysisResult:
        """Собирает AnalysisResult из результатов этапов."""
        pass


class ResultExporterInterface(ABC):
    """Интерфейс для экспорта результатов."""

    @abstractmethod
    def export_to_excel(self, result: AnalysisResult, filepath: Union[str, Path]) -> Path:
        """Экспортирует результат в Excel формат."""
        pass

    @abstractmethod
    def export_to_json(self, result: AnalysisResult, filepath: Union[str, Path]) -> Path:
        """Экспортирует результат в JSON формат."""
        pass

    @abstractmethod
    def export_summary_report(self, result: AnalysisResult, filepath: Union[str, Path]) -> Path:
        """Экспортирует краткий текстовый отчёт."""
        pass


class TextProcessor(ABC):
    """Основной интерфейс для анализа текста."""

    @abstractmethod
    def analyze_text(self, text: Optional[str], language: Optional[str] = None,
                     stopwords: Optional[Iterable[str]] = None) -> AnalysisResult:
        """Анализирует текст и возвращает результат."""
        pass
