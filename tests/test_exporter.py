"""
Тесты для компонента ResultExporter.
"""

import json

import pandas as pd
import pytest

from lexico_analyser.components.exporter import ResultExporter
from lexico_analyser.interfaces.text_processor import AnalysisResult

SHEETS = ['Summary', 'Top words', 'Hapax', 'Pronouns', 'Verbs', 'Nouns', 'Patterns']


@pytest.fixture
def result(analyzer, sample_texts):
    return analyzer.analyze_text(sample_texts["entities"] + " " + sample_texts["complex"], "es")


class TestExcelExport:
    """Экспорт в Excel."""

    def test_sheets(self, tmp_path, result):
        path = ResultExporter(tmp_path).export_to_excel(result, tmp_path / "analysis")
        assert path.suffix == ".xlsx"
        assert path.exists() and path.stat().st_size > 0
        sheets = pd.read_excel(path, sheet_name=None)
        assert list(sheets) == SHEETS

    def test_top_words_sheet(self, tmp_path, result):
        path = ResultExporter(tmp_path).export_to_excel(result, tmp_path / "analysis.xlsx")
        top = pd.read_excel(path, sheet_name='Top words')
        assert list(top.columns) == ['Слово', 'Частота']
        assert top['Слово'].tolist() == [w.word for w in result.top_frequent]

    def test_patterns_sheet(self, tmp_path, result):
        path = ResultExporter(tmp_path, pattern_display_cap=1).export_to_excel(result, tmp_path / "a.xlsx")
        patterns = pd.read_excel(path, sheet_name='Patterns').fillna('')
        assert len(patterns) == 9
        mention = patterns[patterns['Тип'] == 'mention'].iloc[0]
        assert mention['Всего совпадений'] == 2
        assert mention['Уникальные значения'] == '@empresa'

    def test_category_cap(self, tmp_path, result):
        path = ResultExporter(tmp_path, category_display_cap=2).export_to_excel(result, tmp_path / "a.xlsx")
        nouns = pd.read_excel(path, sheet_name='Nouns')
        assert len(nouns) == 2

    def test_empty_result(self, tmp_path):
        path = ResultExporter(tmp_path).export_to_excel(AnalysisResult.empty("es"), tmp_path / "empty.xlsx")
        sheets = pd.read_excel(path, sheet_name=None)
        assert list(sheets) == SHEETS
        assert sheets['Top words'].empty
        assert (sheets['Patterns']['Всего совпадений'] == 0).all()


class TestOtherFormats:
    """Экспорт в JSON и текстовый отчёт."""

    def test_json(self, tmp_path, result):
        path = ResultExporter(tmp_path).export_to_json(result, tmp_path / "analysis")
        assert path.suffix == ".json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["summary"]["totalWordCount"] == result.total_word_count
        assert data["result"]["patterns"][0]["patternType"] == "email"
        assert "timestamp" in data["metadata"]

    def test_report(self, tmp_path, result):
        path = ResultExporter(tmp_path).export_summary_report(result, tmp_path / "report")
        text = path.read_text(encoding="utf-8")
        assert path.suffix == ".txt"
        assert "ОТЧЁТ ПО ЛЕКСИЧЕСКОМУ АНАЛИЗУ ТЕКСТА" in text
        assert f"Общее количество слов: {result.total_word_count}" in text
        assert "email: soporte@empresa.es" in text

    def test_export_all_formats(self, tmp_path, result):
        exported = ResultExporter(tmp_path / "out").export_all_formats(result, "lexical_analysis")
        assert set(exported) == {'excel', 'json', 'report'}
        for path in exported.values():
            assert path.exists()
            assert path.name.startswith("lexical_analysis_")

    def test_export_selected_formats(self, tmp_path, result):
        exported = ResultExporter(tmp_path).export_all_formats(result, "doc", formats=['json'])
        assert list(exported) == ['json']
        assert list(tmp_path.glob("*.xlsx")) == []

    def test_io_error_is_raised(self, tmp_path, result):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(OSError):
            ResultExporter(tmp_path).export_to_json(result, blocker / "nested" / "analysis.json")
