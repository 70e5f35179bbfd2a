"""
Модуль для подготовки текста документов к анализу

Содержит функции для:
- Удаления HTML тегов
- Нормализации пробелов и Unicode (NFC)
- Проверки размера входного текста
- Чтения документа из файла
"""

import logging
import re
import unicodedata
from pathlib import Path
from typing import Optional, Union

from bs4 import BeautifulSoup

from .interfaces.text_processor import Document

logger = logging.getLogger(__name__)

HTML_SUFFIXES = ('.html', '.htm', '.xhtml')

# Неразрывные пробелы и их HTML-сущность
_NBSP_RE = re.compile(r'(?:\xa0|&nbsp;)')


class DocumentTextPreparer:
    """Подготовка исходного текста документа (граница сервиса, вне движка)"""

    def __init__(self, max_input_chars: int = 5_000_000, strip_html: bool = True) -> None:
        """
        Args:
            max_input_chars: Максимальная длина текста (0 = без ограничения)
            strip_html: Удалять ли HTML теги по умолчанию
        """
        self.max_input_chars = max(0, max_input_chars)
        self.strip_html = strip_html

    def remove_html_tags(self, text: str) -> str:
        """
        Удаляет HTML теги из текста используя BeautifulSoup

        Args:
            text: HTML текст

        Returns:
            Очищенный текст без HTML тегов
        """
        if not text:
            return ""

        # Проверяем, содержит ли текст HTML теги
        if '<' in text and '>' in text:
            soup = BeautifulSoup(text, "html.parser")
            return soup.get_text(separator=' ')
        # Если текст не содержит HTML, возвращаем как есть
        return text

    def normalize(self, text: str) -> str:
        """Приводит текст к NFC и заменяет неразрывные пробелы обычными"""
        return unicodedata.normalize('NFC', _NBSP_RE.sub(' ', text))

    def prepare(self, text: Optional[str], strip_html: Optional[bool] = None) -> str:
        """
        Готовит текст к анализу.

        Args:
            text: Исходный текст (None трактуется как пустая строка)
            strip_html: Переопределяет настройку удаления HTML

        Returns:
            Подготовленный текст

        Raises:
            ValueError: если текст длиннее max_input_chars
        """
        if not text:
            return ""

        if self.max_input_chars and len(text) > self.max_input_chars:
            raise ValueError(
                f"Текст слишком большой: {len(text)} символов (лимит {self.max_input_chars})"
            )

        if self.strip_html if strip_html is None else strip_html:
            text = self.remove_html_tags(text)
        return self.normalize(text)

    def read_document(self, path: Union[str, Path], language: Optional[str] = None,
                      doc_id: Optional[Union[int, str]] = None) -> Document:
        """
        Читает файл и возвращает подготовленный документ.

        HTML теги удаляются только для файлов с расширением .html/.htm/.xhtml.

        Args:
            path: Путь к файлу (UTF-8)
            language: Код языка документа
            doc_id: Идентификатор документа (по умолчанию имя файла)

        Returns:
            Document
        """
        path = Path(path)
        raw = path.read_text(encoding='utf-8', errors='replace')
        is_html = path.suffix.lower() in HTML_SUFFIXES
        text = self.prepare(raw, strip_html=is_html)
        logger.debug(f"Прочитан документ {path}: {len(raw)} -> {len(text)} символов")
        return Document(
            id=doc_id if doc_id is not None else path.name,
            raw_text=text,
            language=language,
            metadata={'source': str(path)},
        )
