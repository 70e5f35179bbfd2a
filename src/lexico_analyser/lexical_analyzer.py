"""
Фасад движка лексического анализа.

Последовательно выполняет этапы: выбор набора правил → токенизация →
подсчёт частот → ранжирование → классификация → поиск сущностей →
сборка результата. Между этапами проверяется флаг отмены.
Независимые документы можно анализировать параллельно (analyze_many):
наборы правил только читаются, словарь частот у каждого вызова свой.
"""

import logging
import threading
import time
from collections import Counter, OrderedDict
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, Optional, Sequence, Union

from .components.aggregator import ResultAggregator
from .components.classifier import GrammaticalClassifier
from .components.frequency_analyzer import FrequencyAnalyzer
from .components.pattern_detector import PatternDetector
from .components.ranking import DEFAULT_HAPAX_N, DEFAULT_TOP_N, RankingSelector
from .components.tokenizer import TokenProcessor
from .config import Config, config
from .interfaces.text_processor import AnalysisResult, Document, TextProcessor
from .rules.registry import DEFAULT_REGISTRY, RuleSetRegistry

logger = logging.getLogger(__name__)

StopwordSource = Callable[[str], Iterable[str]]


class AnalysisCancelledError(RuntimeError):
    """Анализ прерван вызывающей стороной между этапами."""

    def __init__(self, stage: str):
        super().__init__(f"Анализ отменён перед этапом '{stage}'")
        self.stage = stage


class LexicalAnalyzer(TextProcessor):
    """Анализатор текста: собирает компоненты в единый конвейер"""

    def __init__(self,
                 registry: Optional[RuleSetRegistry] = None,
                 tokenizer: Optional[TokenProcessor] = None,
                 frequency_analyzer: Optional[FrequencyAnalyzer] = None,
                 ranking_selector: Optional[RankingSelector] = None,
                 classifier: Optional[GrammaticalClassifier] = None,
                 pattern_detector: Optional[PatternDetector] = None,
                 aggregator: Optional[ResultAggregator] = None,
                 stopword_source: Optional[StopwordSource] = None,
                 top_n: int = DEFAULT_TOP_N,
                 hapax_n: int = DEFAULT_HAPAX_N,
                 max_workers: int = 4):
        """
        Инициализация анализатора.

        Args:
            registry: Реестр наборов правил (по умолчанию встроенный)
            tokenizer, frequency_analyzer, ranking_selector, classifier,
            pattern_detector, aggregator: Реализации этапов конвейера
            stopword_source: Функция "код языка → стоп-слова", используется,
                если стоп-слова не переданы в вызов явно
            top_n: Размер топа частых слов по умолчанию
            hapax_n: Размер списка hapax по умолчанию
            max_workers: Число потоков для analyze_many по умолчанию
        """
        self.registry = registry or DEFAULT_REGISTRY
        self.tokenizer = tokenizer or TokenProcessor()
        self.frequency_analyzer = frequency_analyzer or FrequencyAnalyzer()
        self.ranking_selector = ranking_selector or RankingSelector()
        self.classifier = classifier or GrammaticalClassifier()
        self.pattern_detector = pattern_detector or PatternDetector()
        self.aggregator = aggregator or ResultAggregator()
        self.stopword_source = stopword_source
        self.top_n = top_n
        self.hapax_n = hapax_n
        self.max_workers = max(1, max_workers)

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> "LexicalAnalyzer":
        """Создаёт анализатор по настройкам конфигурации (переопределения шаблонов, стоп-слова, лимиты)."""
        cfg = cfg or config
        registry = RuleSetRegistry.from_overrides(
            cfg.get_all_rule_overrides(),
            default=cfg.get_default_language(),
        )
        return cls(
            registry=registry,
            tokenizer=TokenProcessor(
                chunk_size=cfg.get_chunk_size(),
                boundary_safe=cfg.is_boundary_safe_chunking_enabled(),
            ),
            pattern_detector=PatternDetector(
                context_radius=cfg.get_context_radius(),
                max_matches_per_pattern=cfg.get_max_matches_per_pattern(),
            ),
            stopword_source=cfg.get_stopwords,
            top_n=cfg.get_top_n(),
            hapax_n=cfg.get_hapax_n(),
            max_workers=cfg.get_workers(),
        )

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event], stage: str) -> None:
        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Анализ отменён перед этапом '{stage}'")
            raise AnalysisCancelledError(stage)

    def analyze_text(self, text: Optional[str], language: Optional[str] = None,
                     stopwords: Optional[Iterable[str]] = None,
                     top_n: Optional[int] = None, hapax_n: Optional[int] = None,
                     cancel_event: Optional[threading.Event] = None) -> AnalysisResult:
        """
        Анализирует текст и возвращает результат.

        Args:
            text: Исходный текст (None или пустая строка дают нулевой результат)
            language: Код языка (неизвестный код → язык по умолчанию)
            stopwords: Стоп-слова; None = взять из stopword_source
            top_n: Размер топа (None = значение анализатора)
            hapax_n: Размер списка hapax (None = значение анализатора)
            cancel_event: Флаг отмены, проверяется между этапами

        Returns:
            AnalysisResult

        Raises:
            AnalysisCancelledError: если cancel_event установлен
        """
        rule_set = self.registry.resolve(language)
        if not text:
            return AnalysisResult.empty(rule_set.language_code)

        start = time.time()
        if stopwords is None and self.stopword_source is not None:
            stopwords = self.stopword_source(rule_set.language_code)

        self._check_cancelled(cancel_event, 'tokenize')
        tokens = self.tokenizer.tokenize(text, rule_set.word_pattern)
        token_counts = self.frequency_analyzer.count_frequency(tokens)

        self._check_cancelled(cancel_event, 'rank')
        ranking = self.ranking_selector.select(
            token_counts,
            stopwords,
            self.top_n if top_n is None else top_n,
            self.hapax_n if hapax_n is None else hapax_n,
        )

        self._check_cancelled(cancel_event, 'classify')
        classifications = self.classifier.classify(token_counts, rule_set)

        self._check_cancelled(cancel_event, 'detect')
        patterns = self.pattern_detector.detect(text, rule_set)

        result = self.aggregator.aggregate(
            token_counts, ranking, classifications, patterns, language=rule_set.language_code
        )
        logger.info(
            f"[{rule_set.language_code}] Анализ завершён: {result.total_word_count} слов, "
            f"{result.unique_word_count} уникальных, {len(result.patterns)} сущностей "
            f"за {time.time() - start:.3f} сек"
        )
        return result

    def analyze_document(self, document: Document, stopwords: Optional[Iterable[str]] = None,
                         cancel_event: Optional[threading.Event] = None) -> AnalysisResult:
        """Анализирует один документ с его собственным кодом языка."""
        logger.debug(f"Анализ документа {document.id!r} (язык: {document.language or 'по умолчанию'})")
        return self.analyze_text(
            document.raw_text,
            language=document.language,
            stopwords=stopwords,
            cancel_event=cancel_event,
        )

    def analyze_many(self, documents: Sequence[Document], max_workers: Optional[int] = None,
                     cancel_event: Optional[threading.Event] = None) -> Dict[Union[int, str], AnalysisResult]:
        """
        Анализирует независимые документы параллельно.

        Args:
            documents: Документы
            max_workers: Число потоков (None = значение анализатора)
            cancel_event: Общий флаг отмены для всех документов

        Returns:
            Словарь {id документа: результат} в порядке входных документов

        Raises:
            ValueError: если id документов повторяются
            AnalysisCancelledError: если анализ был отменён
        """
        if not documents:
            return OrderedDict()

        ids = Counter(document.id for document in documents)
        duplicates = [doc_id for doc_id, count in ids.items() if count > 1]
        if duplicates:
            raise ValueError(f"Повторяющиеся id документов: {duplicates}")

        workers = max(1, max_workers or self.max_workers)
        results: Dict[Union[int, str], AnalysisResult] = OrderedDict()
        with ThreadPoolExecutor(max_workers=min(workers, len(documents))) as executor:
            futures = [
                executor.submit(self.analyze_document, document, None, cancel_event)
                for document in documents
            ]
            for document, future in zip(documents, futures):
                results[document.id] = future.result()

        logger.info(f"Проанализировано документов: {len(results)} (потоков: {workers})")
        return results
