"""
Компонент для экспорта результатов анализа.

Отвечает за экспорт результатов в различные форматы:
Excel (несколько листов), JSON и краткий текстовый отчёт.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import pandas as pd
from ..interfaces.text_processor import (
    AnalysisResult, RankedWord, ResultExporterInterface, WordCategory,
)
from .pattern_detector import PatternDetector
import logging

logger = logging.getLogger(__name__)

DEFAULT_PATTERN_DISPLAY_CAP = 200
DEFAULT_CATEGORY_DISPLAY_CAP = 25

CATEGORY_SHEETS = (
    (WordCategory.PRONOUN, 'Pronouns'),
    (WordCategory.VERB, 'Verbs'),
    (WordCategory.NOUN, 'Nouns'),
)


def _ranked_frame(words: List[RankedWord]) -> pd.DataFrame:
    return pd.DataFrame(
        [{'Слово': w.word, 'Частота': w.frequency} for w in words],
        columns=['Слово', 'Частота'],
    )


class ResultExporter(ResultExporterInterface):
    """Экспортёр результатов анализа."""

    def __init__(self, output_dir: Union[str, Path] = "data/results",
                 pattern_display_cap: int = DEFAULT_PATTERN_DISPLAY_CAP,
                 category_display_cap: int = DEFAULT_CATEGORY_DISPLAY_CAP):
        """
        Инициализирует экспортёр.

        Args:
            output_dir: Папка для сохранения результатов
            pattern_display_cap: Максимум уникальных совпадений одного типа на листе Patterns
            category_display_cap: Максимум слов на листах категорий
        """
        self.output_dir = Path(output_dir)
        self.pattern_display_cap = pattern_display_cap
        self.category_display_cap = category_display_cap

    @staticmethod
    def _prepare_path(filepath: Union[str, Path], suffix: str) -> Path:
        filepath = Path(filepath)
        if not filepath.suffix:
            filepath = filepath.with_suffix(suffix)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        return filepath

    def _summary_frame(self, result: AnalysisResult) -> pd.DataFrame:
        stats_data = {
            'Параметр': [
                'Язык',
                'Общее количество слов',
                'Уникальных слов',
                'Hapax (показано)',
                'Найдено сущностей',
                'Дата анализа',
            ],
            'Значение': [
                result.language or '',
                result.total_word_count,
                result.unique_word_count,
                len(result.hapax),
                len(result.patterns),
                datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
            ],
        }
        return pd.DataFrame(stats_data)

    def _patterns_frame(self, result: AnalysisResult) -> pd.DataFrame:
        grouped = PatternDetector.group_by_type(
            result.patterns, distinct=True, cap=self.pattern_display_cap
        )
        # Общее число совпадений по типу (до дедупликации)
        totals: Dict[str, int] = {}
        if result.patterns:
            df = pd.DataFrame([p.to_dict() for p in result.patterns])
            totals = df.groupby('patternType').size().to_dict()

        rows = []
        for entity_type, values in grouped.items():
            rows.append({
                'Тип': entity_type.value,
                'Всего совпадений': int(totals.get(entity_type.value, 0)),
                'Уникальные значения': ', '.join(values),
            })
        return pd.DataFrame(rows, columns=['Тип', 'Всего совпадений', 'Уникальные значения'])

    def export_to_excel(self, result: AnalysisResult, filepath: Union[str, Path]) -> Path:
        """
        Экспортирует результат в Excel формат.

        Листы: Summary, Top words, Hapax, Pronouns, Verbs, Nouns, Patterns.

        Args:
            result: Результат анализа
            filepath: Путь для сохранения файла

        Returns:
            Путь к созданному файлу
        """
        try:
            filepath = self._prepare_path(filepath, '.xlsx')
            with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
                self._summary_frame(result).to_excel(writer, sheet_name='Summary', index=False)
                _ranked_frame(list(result.top_frequent)).to_excel(writer, sheet_name='Top words', index=False)
                _ranked_frame(list(result.hapax)).to_excel(writer, sheet_name='Hapax', index=False)

                for category, sheet_name in CATEGORY_SHEETS:
                    words = result.words_by_category(category)[:self.category_display_cap]
                    _ranked_frame(words).to_excel(writer, sheet_name=sheet_name, index=False)

                self._patterns_frame(result).to_excel(writer, sheet_name='Patterns', index=False)
        except OSError as e:
            logger.error(f"Ошибка экспорта в Excel: {e}")
            raise

        logger.info(f"Результат экспортирован в Excel: {filepath}")
        return filepath

    def export_to_json(self, result: AnalysisResult, filepath: Union[str, Path]) -> Path:
        """
        Экспортирует результат в JSON формат.

        Args:
            result: Результат анализа
            filepath: Путь для сохранения файла

        Returns:
            Путь к созданному файлу
        """
        json_data: Dict[str, Any] = {
            'metadata': {
                'timestamp': datetime.now().isoformat(),
            },
            'summary': result.to_summary(),
            'result': result.to_dict(),
        }

        try:
            filepath = self._prepare_path(filepath, '.json')
            with open(filepath, 'w', encoding='utf-8') as jsonfile:
                json.dump(json_data, jsonfile, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.error(f"Ошибка экспорта в JSON: {e}")
            raise

        logger.info(f"Результат экспортирован в JSON: {filepath}")
        return filepath

    def export_summary_report(self, result: AnalysisResult, filepath: Union[str, Path]) -> Path:
        """
        Экспортирует краткий отчёт по результатам.

        Args:
            result: Результат анализа
            filepath: Путь для сохранения файла

        Returns:
            Путь к созданному файлу
        """
        lines: List[str] = []
        lines.append("ОТЧЁТ ПО ЛЕКСИЧЕСКОМУ АНАЛИЗУ ТЕКСТА")
        lines.append("=" * 50)
        lines.append("")

        lines.append("ОБЩАЯ СТАТИСТИКА:")
        lines.append(f"Язык: {result.language or '-'}")
        lines.append(f"Общее количество слов: {result.total_word_count}")
        lines.append(f"Уникальных слов: {result.unique_word_count}")
        lines.append(f"Дата анализа: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append("")

        if result.top_frequent:
            lines.append("ТОП ЧАСТЫХ СЛОВ:")
            lines.append("-" * 40)
            for i, ranked in enumerate(result.top_frequent[:20], 1):
                lines.append(f"{i:2d}. {ranked.word:<20} Частота: {ranked.frequency}")
            lines.append("")

        for category, title in CATEGORY_SHEETS:
            words = result.words_by_category(category)[:self.category_display_cap]
            if words:
                lines.append(f"{title.upper()}:")
                lines.append("-" * 40)
                lines.append(', '.join(f"{w.word} ({w.frequency})" for w in words))
                lines.append("")

        grouped = PatternDetector.group_by_type(result.patterns, cap=self.pattern_display_cap)
        found = {entity: values for entity, values in grouped.items() if values}
        if found:
            lines.append("НАЙДЕННЫЕ СУЩНОСТИ:")
            lines.append("-" * 40)
            for entity_type, values in found.items():
                lines.append(f"{entity_type.value}: {', '.join(values)}")

        try:
            filepath = self._prepare_path(filepath, '.txt')
            with open(filepath, 'w', encoding='utf-8') as report_file:
                report_file.write("\n".join(lines) + "\n")
        except OSError as e:
            logger.error(f"Ошибка экспорта отчёта: {e}")
            raise

        logger.info(f"Краткий отчёт сохранён: {filepath}")
        return filepath

    def export_all_formats(self, result: AnalysisResult, base_filename: str,
                           formats: Optional[List[str]] = None) -> Dict[str, Path]:
        """
        Экспортирует результат во все (или выбранные) форматы.

        Args:
            result: Результат анализа
            base_filename: Базовое имя файла без расширения
            formats: Подмножество из 'excel', 'json', 'report' (None = все)

        Returns:
            Словарь с путями к экспортированным файлам
        """
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        base_filename = f"{base_filename}_{timestamp}"
        formats = formats or ['excel', 'json', 'report']

        exported_files: Dict[str, Path] = {}

        if 'excel' in formats:
            exported_files['excel'] = self.export_to_excel(result, self.output_dir / f"{base_filename}.xlsx")
        if 'json' in formats:
            exported_files['json'] = self.export_to_json(result, self.output_dir / f"{base_filename}.json")
        if 'report' in formats:
            exported_files['report'] = self.export_summary_report(
                result, self.output_dir / f"{base_filename}_report.txt"
            )

        logger.info(f"Результат экспортирован ({', '.join(exported_files)}) в папку: {self.output_dir}")
        return exported_files
