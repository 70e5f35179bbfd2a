"""
Интерфейсы для компонентов лексического анализа.

Определяет абстрактные базовые классы для всех компонентов,
обеспечивая единообразный API и возможность замены реализаций.
"""

from .text_processor import (
    AnalysisResult,
    Classification,
    DetectedPattern,
    Document,
    FrequencyAnalyzerInterface,
    GrammaticalClassifierInterface,
    PatternDetectorInterface,
    RankedWord,
    RankingResult,
    RankingSelectorInterface,
    ResultAggregatorInterface,
    ResultExporterInterface,
    TextProcessor,
    TokenCount,
    TokenProcessorInterface,
    WordCategory,
)

__all__ = [
    'AnalysisResult',
    'Classification',
    'DetectedPattern',
    'Document',
    'FrequencyAnalyzerInterface',
    'GrammaticalClassifierInterface',
    'PatternDetectorInterface',
    'RankedWord',
    'RankingResult',
    'RankingSelectorInterface',
    'ResultAggregatorInterface',
    'ResultExporterInterface',
    'TextProcessor',
    'TokenCount',
    'TokenProcessorInterface',
    'WordCategory',
]
