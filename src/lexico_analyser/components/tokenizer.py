"""
Компонент для токенизации текста.

Отвечает за ленивое извлечение токенов по шаблону слова языка.
Большие тексты обрабатываются кусками фиксированного размера
(по умолчанию 64 КиБ): слово, попавшее на границу куска, распадается
на два токена. Это известное ограничение; режим boundary_safe
продлевает кусок до ближайшего пробельного символа.
"""

import logging
import re
import unicodedata
from typing import Dict, Iterable, Iterator, Optional, Pattern, Union

from ..interfaces.text_processor import TokenProcessorInterface
from ..rules.base import WORD_FLAGS

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

_WHITESPACE_RE = re.compile(r"\s")


class TokenProcessor(TokenProcessorInterface):
    """Процессор для потоковой токенизации текста."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE, boundary_safe: bool = False):
        """
        Инициализирует процессор токенизации.

        Args:
            chunk_size: Размер куска текста в символах
            boundary_safe: Продлевать кусок до пробела, чтобы не резать слова

        Raises:
            ValueError: если chunk_size меньше 1
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size должен быть положительным, получено {chunk_size}")
        self.chunk_size = chunk_size
        self.boundary_safe = boundary_safe

    def tokenize(self, text: Optional[str], word_pattern: Union[str, Pattern]) -> Iterator[str]:
        """
        Лениво разбивает текст на токены в нижнем регистре.

        Последовательность одноразовая: повторный обход требует нового вызова.

        Args:
            text: Исходный текст (None и пустая строка дают пустую последовательность)
            word_pattern: Шаблон слова (строка или скомпилированный шаблон)

        Yields:
            Токены в нижнем регистре
        """
        if not text:
            return
        if isinstance(word_pattern, str):
            word_pattern = re.compile(word_pattern, WORD_FLAGS)

        # Единая Unicode-нормализация (NFC) до разбиения
        text = unicodedata.normalize('NFC', text)

        for chunk in self.iter_chunks(text):
            for match in word_pattern.finditer(chunk):
                token = match.group(0).strip()
                if token:
                    yield token.lower()

    def iter_chunks(self, text: str) -> Iterator[str]:
        """
        Делит текст на куски размера chunk_size.

        Args:
            text: Текст для разбиения

        Yields:
            Последовательные непересекающиеся куски текста
        """
        length = len(text)
        start = 0
        while start < length:
            end = min(start + self.chunk_size, length)
            if self.boundary_safe and end < length:
                whitespace = _WHITESPACE_RE.search(text, end)
                end = whitespace.start() if whitespace else length
            yield text[start:end]
            start = end

    def get_token_statistics(self, tokens: Iterable[str]) -> Dict[str, object]:
        """
        Возвращает статистику по токенам.

        Args:
            tokens: Токены (итерируется один раз)

        Returns:
            Словарь со статистикой
        """
        total = 0
        total_length = 0
        length_dist: Dict[int, int] = {}
        for token in tokens:
            total += 1
            total_length += len(token)
            length_dist[len(token)] = length_dist.get(len(token), 0) + 1

        return {
            'total_tokens': total,
            'avg_length': round(total_length / total, 1) if total else 0.0,
            'length_distribution': length_dist,
        }
