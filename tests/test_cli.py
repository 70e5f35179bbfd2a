"""
Тесты для интерфейса командной строки.
"""

from lexico_analyser.cli import build_parser, main


class TestCli:
    """Тесты для CLI."""

    def test_parser_defaults(self):
        args = build_parser().parse_args(["analyze", "texto.txt"])
        assert args.command == "analyze"
        assert args.file == "texto.txt"
        assert args.format == "all"
        assert args.lang is None and args.top is None

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "lexico-analyser" in capsys.readouterr().out

    def test_languages(self, capsys):
        assert main(["languages"]) == 0
        out = capsys.readouterr().out
        for code in ("es", "en", "ru"):
            assert code in out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["analyze", str(tmp_path / "missing.txt")]) == 1
        assert "Файл не найден" in capsys.readouterr().out

    def test_analyze_json(self, tmp_path, capsys):
        source = tmp_path / "texto.txt"
        source.write_text("Juan corre y Juan salta. juan@mail.com", encoding="utf-8")
        out_dir = tmp_path / "out"

        code = main(["analyze", str(source), "--lang", "es", "--format", "json", "--output-dir", str(out_dir)])

        assert code == 0
        output = capsys.readouterr().out
        assert "Всего слов: 7" in output
        assert len(list(out_dir.glob("*.json"))) == 1
        assert list(out_dir.glob("*.xlsx")) == []

    def test_analyze_with_stopwords(self, tmp_path, capsys):
        source = tmp_path / "texto.txt"
        source.write_text("de de de casa casa perro", encoding="utf-8")
        stopwords = tmp_path / "stop.txt"
        stopwords.write_text("de\n", encoding="utf-8")

        code = main([
            "analyze", str(source), "--stopwords", str(stopwords),
            "--top", "1", "--format", "txt", "--output-dir", str(tmp_path / "out"),
        ])

        assert code == 0
        output = capsys.readouterr().out
        assert "Стоп-слов загружено: 1" in output
        assert "Топ слов: casa (2)" in output
        assert len(list((tmp_path / "out").glob("*_report.txt"))) == 1
