#!/usr/bin/env python3
"""
Интерфейс командной строки для Lexico Analyser

Команды:
1. analyze - лексический анализ файла и экспорт отчётов (Excel, JSON, TXT)
2. languages - список поддерживаемых языков
"""

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional

from .components.exporter import ResultExporter
from .config import config, parse_stopwords
from .lexical_analyzer import LexicalAnalyzer
from .rules.base import Language
from .text_processor import DocumentTextPreparer

logger = logging.getLogger(__name__)

# Формат CLI → ключ export_all_formats
FORMAT_KEYS = {
    'xlsx': ['excel'],
    'json': ['json'],
    'txt': ['report'],
    'all': ['excel', 'json', 'report'],
}


def build_parser() -> argparse.ArgumentParser:
    """Создаёт парсер аргументов командной строки"""
    parser = argparse.ArgumentParser(
        prog='lexico-analyser',
        description="Lexico Analyser - лексический анализ текстов (частоты, категории слов, сущности)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:
  lexico-analyser analyze texto.txt                       # Анализ на языке по умолчанию
  lexico-analyser analyze article.html --lang en --top 20 # HTML на английском, топ-20
  lexico-analyser analyze doc.txt --format json           # Только JSON
  lexico-analyser languages                               # Поддерживаемые языки
        """
    )
    subparsers = parser.add_subparsers(dest='command')

    analyze = subparsers.add_parser('analyze', help='Проанализировать текстовый или HTML файл')
    analyze.add_argument('file', help='Путь к файлу (UTF-8)')
    analyze.add_argument('--lang', default=None, help='Код языка (es, en, ru); по умолчанию из config.yaml')
    analyze.add_argument('--stopwords', default=None, help='Файл стоп-слов (одно слово в строке)')
    analyze.add_argument('--top', type=int, default=None, help='Размер топа частых слов')
    analyze.add_argument('--hapax', type=int, default=None, help='Размер списка hapax')
    analyze.add_argument('--format', choices=sorted(FORMAT_KEYS), default='all', help='Формат отчёта')
    analyze.add_argument('--output-dir', default=None, help='Папка для результатов')

    subparsers.add_parser('languages', help='Показать поддерживаемые языки')
    return parser


def run_analyze(args: argparse.Namespace) -> int:
    """Выполняет команду analyze"""
    path = Path(args.file)
    if not path.is_file():
        print(f"❌ Файл не найден: {path}")
        return 1

    analyzer = LexicalAnalyzer.from_config(config)
    preparer = DocumentTextPreparer(max_input_chars=config.get_max_input_chars())

    try:
        document = preparer.read_document(path, language=args.lang)
    except (OSError, ValueError) as e:
        logger.error(f"Ошибка чтения {path}: {e}")
        print(f"❌ Не удалось прочитать документ: {e}")
        return 1

    stopwords = None
    if args.stopwords:
        stopwords = parse_stopwords(args.stopwords)
        print(f"🧹 Стоп-слов загружено: {len(stopwords)}")

    print(f"📊 Анализ файла: {path.name}")
    result = analyzer.analyze_text(
        document.raw_text,
        language=document.language,
        stopwords=stopwords,
        top_n=args.top,
        hapax_n=args.hapax,
    )

    print(f"\n📊 Результаты анализа ({result.language}):")
    print(f"   Всего слов: {result.total_word_count}")
    print(f"   Уникальных слов: {result.unique_word_count}")
    print(f"   Найдено сущностей: {len(result.patterns)}")
    if result.top_frequent:
        top = ', '.join(f"{w.word} ({w.frequency})" for w in result.top_frequent[:10])
        print(f"   Топ слов: {top}")

    exporter = ResultExporter(
        output_dir=args.output_dir or config.get_results_folder(),
        pattern_display_cap=config.get_pattern_display_cap(),
        category_display_cap=config.get_category_display_cap(),
    )
    base_filename = f"{config.get_results_filename_prefix()}_{path.stem}"
    try:
        exported = exporter.export_all_formats(result, base_filename, formats=FORMAT_KEYS[args.format])
    except OSError as e:
        logger.debug(f"Экспорт прерван: {e}")
        print(f"❌ Ошибка экспорта: {e}")
        return 1

    print("\n📁 Результаты экспортированы:")
    for kind, exported_path in exported.items():
        print(f"   {kind}: {exported_path}")
    print("✅ Готово")
    return 0


def run_languages() -> int:
    """Печатает поддерживаемые языки"""
    default = Language.from_code(config.get_default_language())
    print("🌐 Поддерживаемые языки:")
    for language in Language:
        marker = " (по умолчанию)" if language is default else ""
        print(f"   {language.value}{marker}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Основная функция CLI"""
    # Специальная обработка LEXICO_ANALYSER_DEBUG для переопределения уровня логирования
    if os.environ.get('LEXICO_ANALYSER_DEBUG') == '1':
        os.environ['LEXICO_ANALYSER_LOGGING__LEVEL'] = 'DEBUG'
        config._apply_env_overrides()
        print("🔍 DEBUG режим активирован через LEXICO_ANALYSER_DEBUG=1")
    config._configure_logging_if_needed(force=True)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == 'analyze':
        return run_analyze(args)
    if args.command == 'languages':
        return run_languages()

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
