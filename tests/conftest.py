import sys
from pathlib import Path

import pytest

# Пакет лежит в src/: делаем его импортируемым без установки
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lexico_analyser.lexical_analyzer import LexicalAnalyzer  # noqa: E402
from lexico_analyser.rules.registry import RuleSetRegistry  # noqa: E402


@pytest.fixture
def temp_directory(tmp_path: Path) -> Path:
    """Временная директория для тестов.

    Возвращает уникальную директорию для каждого теста.
    """
    return tmp_path


@pytest.fixture(scope="session")
def sample_texts():
    """Наборы текстов на поддерживаемых языках для тестирования."""
    from .fixtures.sample_texts import (
        SAMPLE_SIMPLE_TEXT,
        SAMPLE_COMPLEX_TEXT,
        SAMPLE_HTML_TEXT,
        SAMPLE_ENTITIES_TEXT,
        SAMPLE_ENGLISH_TEXT,
        SAMPLE_RUSSIAN_TEXT,
    )

    return {
        "simple": SAMPLE_SIMPLE_TEXT,
        "complex": SAMPLE_COMPLEX_TEXT,
        "html": SAMPLE_HTML_TEXT,
        "entities": SAMPLE_ENTITIES_TEXT,
        "english": SAMPLE_ENGLISH_TEXT,
        "russian": SAMPLE_RUSSIAN_TEXT,
    }


@pytest.fixture(scope="session")
def registry() -> RuleSetRegistry:
    """Реестр со встроенными правилами."""
    return RuleSetRegistry.builtin()


@pytest.fixture
def analyzer(registry) -> LexicalAnalyzer:
    """Анализатор со встроенными правилами и без источника стоп-слов."""
    return LexicalAnalyzer(registry=registry)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch) -> Path:
    """Текущая директория без config.yaml и без ENV-переопределений."""
    import os

    for key in list(os.environ):
        if key.startswith("LEXICO_ANALYSER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def pytest_configure(config):
    """Регистрируем маркеры для проекта."""
    config.addinivalue_line("markers", "integration: интеграционные тесты")
    config.addinivalue_line("markers", "performance: тесты производительности")
