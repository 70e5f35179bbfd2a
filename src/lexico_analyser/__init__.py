"""
Lexico Analyser - движок лексического анализа текстов

Этот модуль предоставляет инструменты для:
- Подсчёта частоты слов, топа частых слов и hapax
- Эвристической классификации слов (местоимения, глаголы, существительные)
- Поиска структурированных сущностей (email, URL, телефоны, даты и т.д.)
- Экспорта результатов в Excel, JSON и текстовый отчёт

Поддерживаемые языки: испанский (по умолчанию), английский, русский.
"""

__version__ = "0.1.0"
__author__ = "Sergey"

from .interfaces.text_processor import AnalysisResult, Document
from .lexical_analyzer import AnalysisCancelledError, LexicalAnalyzer
from .rules import DEFAULT_REGISTRY, EntityType, Language, RuleSetRegistry

__all__ = [
    "AnalysisCancelledError",
    "AnalysisResult",
    "DEFAULT_REGISTRY",
    "Document",
    "EntityType",
    "Language",
    "LexicalAnalyzer",
    "RuleSetRegistry",
]
