import textwrap

from lexico_analyser.config import Config, parse_rule_overrides, parse_stopwords
from lexico_analyser.lexical_analyzer import LexicalAnalyzer


def test_config_defaults_when_missing_file(isolated_cwd):
    """
    Проверяет, что при отсутствии файла конфигурации подставляются дефолтные значения.
    Приложение должно работать без config.yaml.
    """
    cfg = Config()
    assert cfg.get_default_language() == "es"
    assert cfg.get_chunk_size() == 65536
    assert cfg.is_boundary_safe_chunking_enabled() is False
    assert cfg.get_top_n() == 50
    assert cfg.get_hapax_n() == 50
    assert cfg.get_context_radius() == 30
    assert cfg.get_max_matches_per_pattern() == 0
    assert cfg.get_max_input_chars() == 5_000_000
    assert cfg.get_results_folder() == "data/results"
    assert cfg.get_pattern_display_cap() == 200
    assert cfg.get_category_display_cap() == 25
    assert cfg.get_stopwords("es") == frozenset()
    assert cfg.get_all_rule_overrides() == {}


def test_config_overrides_from_yaml(isolated_cwd):
    """
    Проверяет, что значения из YAML перекрывают дефолты, а незаданные ключи остаются дефолтными.
    """
    (isolated_cwd / "stop_ru.txt").write_text("# служебные слова\nИ\n\nв\nна\n", encoding="utf-8")
    yaml_text = textwrap.dedent(
        r"""
        text_analysis:
          default_language: en
          top_n: 10
        stopwords:
          en: ["The", "a"]
          es: '["de", "la"]'
          ru: stop_ru.txt
        rules:
          es:
            verb: '\b\w+ar\b'
          en: '{"noun": "\\b\\w+ness\\b"}'
        """
    ).strip()
    cfg_path = isolated_cwd / "config.yaml"
    cfg_path.write_text(yaml_text, encoding="utf-8")

    cfg = Config(config_path=str(cfg_path))

    assert cfg.get_default_language() == "en"
    assert cfg.get_top_n() == 10
    # Незаданные в YAML ключи раздела сохраняются
    assert cfg.get_chunk_size() == 65536
    assert cfg.get_stopwords("en") == frozenset({"the", "a"})
    assert cfg.get_stopwords("es") == frozenset({"de", "la"})
    assert cfg.get_stopwords("ru") == frozenset({"и", "в", "на"})
    assert cfg.get_stopwords(None) == frozenset({"the", "a"})
    assert cfg.get_rule_overrides("es") == {"verb": r"\b\w+ar\b"}
    assert cfg.get_all_rule_overrides() == {
        "es": {"verb": r"\b\w+ar\b"},
        "en": {"noun": r"\b\w+ness\b"},
    }

    analyzer = LexicalAnalyzer.from_config(cfg)
    assert analyzer.registry.default_language.value == "en"
    assert analyzer.registry.resolve("es").verb_pattern.pattern == r"\b\w+ar\b"
    assert analyzer.registry.resolve("en").noun_pattern.pattern == r"\b\w+ness\b"
    assert analyzer.top_n == 10


def test_config_env_overrides(isolated_cwd, monkeypatch):
    """
    Проверяет ENV-переопределения с префиксом LEXICO_ANALYSER_ и вложенностью через __.
    """
    monkeypatch.setenv("LEXICO_ANALYSER_TEXT_ANALYSIS__TOP_N", "7")
    monkeypatch.setenv("LEXICO_ANALYSER_TEXT_ANALYSIS__BOUNDARY_SAFE_CHUNKS", "true")
    monkeypatch.setenv("LEXICO_ANALYSER_STOPWORDS__EN", '["x", "Y"]')

    cfg = Config()

    assert cfg.get_top_n() == 7
    assert cfg.is_boundary_safe_chunking_enabled() is True
    assert cfg.get_stopwords("en") == frozenset({"x", "y"})


def test_config_validation_clamps_values(isolated_cwd):
    """Некорректные числовые значения заменяются допустимыми."""
    (isolated_cwd / "config.yaml").write_text(
        "text_analysis:\n  top_n: -5\n  chunk_size: abc\n  workers: 0\n",
        encoding="utf-8",
    )
    cfg = Config()
    assert cfg.get_top_n() == 0
    assert cfg.get_chunk_size() == 65536
    assert cfg.get_workers() == 1


def test_config_profile_selection(isolated_cwd, monkeypatch):
    """LEXICO_ANALYSER_ENV=testing выбирает config.test.yaml."""
    (isolated_cwd / "config.yaml").write_text("text_analysis:\n  top_n: 11\n", encoding="utf-8")
    (isolated_cwd / "config.test.yaml").write_text("text_analysis:\n  top_n: 22\n", encoding="utf-8")
    monkeypatch.setenv("LEXICO_ANALYSER_ENV", "testing")

    cfg = Config()

    assert cfg.get_top_n() == 22
    assert cfg.get("env") is None


def test_config_broken_yaml_falls_back_to_defaults(isolated_cwd):
    (isolated_cwd / "config.yaml").write_text("text_analysis: [unclosed\n", encoding="utf-8")
    assert Config().get_top_n() == 50

    (isolated_cwd / "config.yaml").write_text("- a\n- b\n", encoding="utf-8")
    assert Config().get_top_n() == 50


def test_malformed_stopwords_give_empty_set(isolated_cwd):
    (isolated_cwd / "config.yaml").write_text(
        "stopwords:\n  es: '[not json'\n  en: missing.txt\n  ru: 5\n",
        encoding="utf-8",
    )
    cfg = Config()
    assert cfg.get_stopwords("es") == frozenset()
    assert cfg.get_stopwords("en") == frozenset()
    assert cfg.get_stopwords("ru") == frozenset()


class TestParseHelpers:
    """Тесты для разбора стоп-слов и шаблонов."""

    def test_parse_stopwords_variants(self, tmp_path):
        path = tmp_path / "stop.txt"
        path.write_text("de\nLA\n# comentario\n", encoding="utf-8")
        assert parse_stopwords(["De", " la ", "", None]) == frozenset({"de", "la"})
        assert parse_stopwords('["De", "el"]') == frozenset({"de", "el"})
        assert parse_stopwords(str(path)) == frozenset({"de", "la"})
        assert parse_stopwords("stop.txt", base_dir=tmp_path) == frozenset({"de", "la"})
        assert parse_stopwords(None) == frozenset()
        assert parse_stopwords("") == frozenset()

    def test_parse_stopwords_malformed(self, caplog):
        assert parse_stopwords("[broken") == frozenset()
        assert parse_stopwords('{"a": 1}') == frozenset()
        assert "стоп-слов" in caplog.text

    def test_parse_rule_overrides(self):
        assert parse_rule_overrides({"verb": r"\w+ar", "noun": None}) == {"verb": r"\w+ar"}
        assert parse_rule_overrides('{"code": "\\\\d+"}') == {"code": r"\d+"}
        assert parse_rule_overrides("{broken") == {}
        assert parse_rule_overrides('["list"]') == {}
        assert parse_rule_overrides(None) == {}
