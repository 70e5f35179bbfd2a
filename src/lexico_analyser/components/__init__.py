"""
Компоненты движка лексического анализа.

Каждый компонент отвечает за одну конкретную задачу:
- TokenProcessor - потоковая токенизация текста
- FrequencyAnalyzer - подсчёт частотности
- RankingSelector - топ частых слов и hapax
- GrammaticalClassifier - эвристическая классификация слов
- PatternDetector - поиск структурированных сущностей
- ResultAggregator - сборка итогового результата
- ResultExporter - экспорт результатов
"""

from .tokenizer import TokenProcessor
from .frequency_analyzer import FrequencyAnalyzer
from .ranking import RankingSelector
from .classifier import GrammaticalClassifier
from .pattern_detector import PatternDetector
from .aggregator import ResultAggregator
from .exporter import ResultExporter

__all__ = [
    'TokenProcessor',
    'FrequencyAnalyzer',
    'RankingSelector',
    'GrammaticalClassifier',
    'PatternDetector',
    'ResultAggregator',
    'ResultExporter',
]
