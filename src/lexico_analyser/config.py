"""
Модуль для работы с конфигурацией проекта

Функции:
- Загрузка config.yaml (+ профили: config.prod.yaml, config.test.yaml)
- ENV-переопределения (префикс LEXICO_ANALYSER_, вложенность через __)
- Валидация числовых параметров анализа
- Настройка логирования
- Источники стоп-слов и переопределений шаблонов по языкам
"""

import json
import os
import yaml
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional
from dotenv import load_dotenv
import logging
from datetime import datetime

logger = logging.getLogger(__name__)

ENV_PREFIX = 'LEXICO_ANALYSER_'
PROFILE_ENV = 'LEXICO_ANALYSER_ENV'


def parse_stopwords(value: Any, base_dir: Optional[Path] = None) -> FrozenSet[str]:
    """
    Разбирает стоп-слова из значения конфигурации.

    Поддерживаются: список строк, JSON-массив в строке, путь к файлу
    (одно слово в строке, '#' - комментарий). Некорректное значение
    даёт пустой набор (без фильтрации) и предупреждение в лог.

    Args:
        value: Значение из конфигурации
        base_dir: Папка для относительных путей к файлам

    Returns:
        Набор стоп-слов в нижнем регистре
    """
    if value is None or value == '':
        return frozenset()

    if isinstance(value, str):
        text = value.strip()
        if text.startswith('['):
            try:
                value = json.loads(text)
            except json.JSONDecodeError as e:
                logger.warning(f"Некорректный JSON стоп-слов, фильтрация отключена: {e}")
                return frozenset()
        else:
            path = Path(text).expanduser()
            if not path.is_absolute() and base_dir is not None:
                path = base_dir / path
            try:
                lines = path.read_text(encoding='utf-8').splitlines()
            except OSError as e:
                logger.warning(f"Не удалось прочитать файл стоп-слов {path}: {e}")
                return frozenset()
            value = [line for line in lines if not line.strip().startswith('#')]

    if not isinstance(value, (list, tuple, set, frozenset)):
        logger.warning(f"Стоп-слова должны быть списком, получено {type(value).__name__}")
        return frozenset()

    return frozenset(
        str(word).strip().lower() for word in value
        if word is not None and str(word).strip()
    )


def parse_rule_overrides(value: Any) -> Dict[str, str]:
    """
    Разбирает переопределения шаблонов (плоский словарь или JSON-объект в строке).

    Некорректное значение даёт пустой словарь - используются встроенные шаблоны.
    """
    if value is None or value == '':
        return {}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            logger.warning(f"Некорректный JSON шаблонов, используются встроенные: {e}")
            return {}
    if not isinstance(value, dict):
        logger.warning(f"Переопределения шаблонов должны быть словарём, получено {type(value).__name__}")
        return {}
    return {str(key): str(pattern) for key, pattern in value.items() if pattern is not None}


class Config:
    """Класс для работы с конфигурацией проекта"""

    def __init__(self, config_path: str = None):
        """
        Инициализация конфигурации

        Args:
            config_path: Путь к файлу конфигурации
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            # Ищем config.yaml в текущей директории и выше
            current_dir = Path.cwd()
            config_path = current_dir / "config.yaml"

            while not config_path.exists() and current_dir.parent != current_dir:
                current_dir = current_dir.parent
                config_path = current_dir / "config.yaml"

            self.config_path = config_path

        self.config_data = {}

        self._load_config()
        self._load_env()
        # Применяем ENV-переопределения и проверяем значения
        try:
            self._apply_env_overrides()
            self._validate()
        except (TypeError, ValueError) as e:
            logger.warning(f"Проблема при применении ENV/валидации: {e}")
        self._configure_logging_if_needed()

    def _resolve_config_path(self) -> Path:
        env = os.getenv(PROFILE_ENV, '').lower().strip()
        root = self.config_path.parent if self.config_path else Path.cwd()
        if env == 'production':
            candidate = root / 'config.prod.yaml'
        elif env == 'testing':
            candidate = root / 'config.test.yaml'
        else:
            candidate = root / 'config.yaml'
        if candidate.exists():
            return candidate
        return self.config_path

    def _load_config(self):
        """Загружает конфигурацию из YAML файла поверх значений по умолчанию"""
        self.config_data = self._get_default_config()
        try:
            self.config_path = self._resolve_config_path()
            if self.config_path.exists():
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f) or {}
                if not isinstance(loaded, dict):
                    raise ValueError("корневой элемент должен быть словарём")
                self._merge(self.config_data, loaded)
                logger.info(f"Конфигурация загружена: {self.config_path}")
            else:
                logger.warning(f"Файл конфигурации {self.config_path} не найден, используются значения по умолчанию")
        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.error(f"Ошибка загрузки конфигурации: {e}")
            self.config_data = self._get_default_config()

    def _load_env(self):
        """Загружает переменные окружения из .env файла"""
        load_dotenv()
        logger.debug("Переменные окружения загружены из .env (если есть)")

    def _merge(self, target: Dict[str, Any], source: Dict[str, Any]) -> None:
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                self._merge(target[key], value)
            else:
                target[key] = value

    def _set_nested(self, data: Dict[str, Any], dotted: str, value: Any) -> None:
        cur = data
        keys = dotted.split('.')
        for k in keys[:-1]:
            if k not in cur or not isinstance(cur[k], dict):
                cur[k] = {}
            cur = cur[k]
        cur[keys[-1]] = value

    def _apply_env_overrides(self) -> None:
        """Переопределяет конфиг значениями из ENV (LEXICO_ANALYSER_*)."""
        for key, val in os.environ.items():
            if not key.startswith(ENV_PREFIX) or key == PROFILE_ENV:
                continue
            tail = key[len(ENV_PREFIX):]
            # Вложенность разделяется двойным подчёркиванием
            dotted = tail.replace('__', '.').lower()
            parsed: Any = val
            if val.lower() in ('true', 'false'):
                parsed = (val.lower() == 'true')
            else:
                try:
                    if '.' in val:
                        parsed = float(val)
                    else:
                        parsed = int(val)
                except ValueError:
                    parsed = val
            self._set_nested(self.config_data, dotted, parsed)
        if os.getenv(PROFILE_ENV):
            logger.info(f"Активирован профиль: {os.getenv(PROFILE_ENV)}")

    def _coerce_int(self, key: str, default: int, minimum: int) -> None:
        try:
            value = int(self.get(key, default))
        except (TypeError, ValueError):
            logger.warning(f"{key}: некорректное значение, установлено {default}")
            value = default
        if value < minimum:
            logger.warning(f"{key} < {minimum}: принудительно установлено в {minimum}")
            value = minimum
        self._set_nested(self.config_data, key, value)

    def _validate(self) -> None:
        """Проверяет диапазоны числовых параметров анализа."""
        self._coerce_int('text_analysis.chunk_size', 65536, 1)
        self._coerce_int('text_analysis.top_n', 50, 0)
        self._coerce_int('text_analysis.hapax_n', 50, 0)
        self._coerce_int('text_analysis.context_radius', 30, 0)
        self._coerce_int('text_analysis.max_matches_per_pattern', 0, 0)
        self._coerce_int('text_analysis.max_input_chars', 5_000_000, 0)
        self._coerce_int('text_analysis.workers', 4, 1)

    def _configure_logging_if_needed(self, force: bool = False) -> None:
        """Инициализирует/переинициализирует базовое логирование по config.

        Повторная конфигурация выполняется, если:
          - ранее не конфигурировалось, или
          - изменился уровень/формат/файл логирования, или
          - явно указан force=True
        """
        root = logging.getLogger()

        console_level_name = str(self.get_console_logging_level()).upper()
        file_level_name = str(self.get_file_logging_level()).upper()
        console_level = getattr(logging, console_level_name, logging.INFO)
        file_level = getattr(logging, file_level_name, logging.DEBUG)

        desired_fmt = self.get_logging_format()
        desired_file = self.get_logging_file() if self.is_logging_to_file_enabled() else None

        if getattr(root, "_lexico_analyser_configured", False) and not force:
            if (
                getattr(root, "_lexico_analyser_console_level", None) == console_level_name and
                getattr(root, "_lexico_analyser_file_level", None) == file_level_name and
                getattr(root, "_lexico_analyser_format", None) == desired_fmt and
                getattr(root, "_lexico_analyser_file", None) == desired_file
            ):
                return

        handlers: List[logging.Handler] = []
        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(logging.Formatter(desired_fmt))
        handlers.append(console)

        if desired_file:
            self.cleanup_old_log_files()
            log_file = Path(desired_file)
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                fh = logging.FileHandler(log_file, encoding='utf-8')
                fh.setLevel(file_level)
                fh.setFormatter(logging.Formatter(desired_fmt))
                handlers.append(fh)
            except OSError as e:
                logger.warning(f"Не удалось открыть файл лога: {e}")

        root_level = min(console_level, file_level) if desired_file else console_level
        logging.basicConfig(level=root_level, handlers=handlers, format=desired_fmt, force=True)
        setattr(root, "_lexico_analyser_configured", True)
        setattr(root, "_lexico_analyser_console_level", console_level_name)
        setattr(root, "_lexico_analyser_file_level", file_level_name)
        setattr(root, "_lexico_analyser_format", desired_fmt)
        setattr(root, "_lexico_analyser_file", desired_file)

    def _get_default_config(self) -> Dict[str, Any]:
        """Возвращает конфигурацию по умолчанию"""
        return {
            'text_analysis': {
                'default_language': "es",
                # Размер куска при потоковой токенизации (символы)
                'chunk_size': 65536,
                # Продлевать кусок до пробела, чтобы не резать слова на границе
                'boundary_safe_chunks': False,
                'top_n': 50,
                'hapax_n': 50,
                'context_radius': 30,
                # 0 = без ограничения числа совпадений на тип сущности
                'max_matches_per_pattern': 0,
                # Защита от слишком больших документов (0 = без ограничения)
                'max_input_chars': 5_000_000,
                'workers': 4,
            },
            # {код языка: список | JSON-массив | путь к файлу}
            'stopwords': {},
            # {код языка: {ключ шаблона: regex} | JSON-объект}
            'rules': {},
            'files': {
                'results_folder': "data/results",
                'results_filename_prefix': "lexical_analysis",
            },
            'excel': {
                'pattern_display_cap': 200,
                'category_display_cap': 25,
            },
            'logging': {
                'level': "INFO",
                'format': "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                'log_to_file': False,
                'max_log_files': 10,
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Получает значение конфигурации по ключу

        Args:
            key: Ключ в формате 'section.subsection.parameter'
            default: Значение по умолчанию

        Returns:
            Значение параметра или default
        """
        try:
            keys = key.split('.')
            value = self.config_data

            for k in keys:
                value = value[k]

            return value
        except (KeyError, TypeError):
            return default

    # --- Анализ текста ---
    def get_default_language(self) -> str:
        """Код языка по умолчанию"""
        return str(self.get('text_analysis.default_language', "es"))

    def get_chunk_size(self) -> int:
        return self.get('text_analysis.chunk_size', 65536)

    def is_boundary_safe_chunking_enabled(self) -> bool:
        return bool(self.get('text_analysis.boundary_safe_chunks', False))

    def get_top_n(self) -> int:
        return self.get('text_analysis.top_n', 50)

    def get_hapax_n(self) -> int:
        return self.get('text_analysis.hapax_n', 50)

    def get_context_radius(self) -> int:
        return self.get('text_analysis.context_radius', 30)

    def get_max_matches_per_pattern(self) -> int:
        return self.get('text_analysis.max_matches_per_pattern', 0)

    def get_max_input_chars(self) -> int:
        return self.get('text_analysis.max_input_chars', 5_000_000)

    def get_workers(self) -> int:
        """Количество потоков для параллельного анализа документов"""
        return self.get('text_analysis.workers', 4)

    # --- Стоп-слова и шаблоны ---
    def _base_dir(self) -> Path:
        return self.config_path.parent if self.config_path else Path.cwd()

    def get_stopwords(self, language: Optional[str]) -> FrozenSet[str]:
        """
        Возвращает стоп-слова для языка.

        Отсутствующая или некорректная настройка даёт пустой набор.
        """
        if not language:
            language = self.get_default_language()
        section = self.get('stopwords', {}) or {}
        if not isinstance(section, dict):
            logger.warning("Раздел stopwords должен быть словарём")
            return frozenset()
        return parse_stopwords(section.get(language.strip().lower()), base_dir=self._base_dir())

    def get_rule_overrides(self, language: str) -> Dict[str, str]:
        """Возвращает переопределения шаблонов для языка"""
        section = self.get('rules', {}) or {}
        if not isinstance(section, dict):
            return {}
        return parse_rule_overrides(section.get(language.strip().lower()))

    def get_all_rule_overrides(self) -> Dict[str, Dict[str, str]]:
        """Возвращает переопределения шаблонов для всех языков из конфигурации"""
        section = self.get('rules', {}) or {}
        if not isinstance(section, dict):
            logger.warning("Раздел rules должен быть словарём, переопределения отключены")
            return {}
        return {str(code): self.get_rule_overrides(str(code)) for code in section}

    # --- Файлы и отчёты ---
    def get_results_folder(self) -> str:
        """Получает папку для результатов"""
        return self.get('files.results_folder', "data/results")

    def get_results_filename_prefix(self) -> str:
        """Получает префикс для файлов результатов"""
        return self.get('files.results_filename_prefix', "lexical_analysis")

    def get_pattern_display_cap(self) -> int:
        """Максимум уникальных совпадений одного типа в отчёте"""
        return int(self.get('excel.pattern_display_cap', 200))

    def get_category_display_cap(self) -> int:
        """Максимум слов одной категории в отчёте"""
        return int(self.get('excel.category_display_cap', 25))

    # --- Логирование ---
    def get_console_logging_level(self) -> str:
        """Получает уровень логирования для консоли"""
        return self.get('logging.console_level', self.get('logging.level', "INFO"))

    def get_file_logging_level(self) -> str:
        """Получает уровень логирования для файла"""
        return self.get('logging.file_level', "DEBUG")

    def get_logging_format(self) -> str:
        """Получает формат логов"""
        return self.get('logging.format', "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def get_logging_file(self) -> str:
        """Генерирует имя файла лога для текущей сессии с временной меткой"""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"logs/lexico_analyser_{timestamp}.log"

    def is_logging_to_file_enabled(self) -> bool:
        """Проверяет, включено ли логирование в файл"""
        return bool(self.get('logging.log_to_file', False))

    def get_max_log_files(self) -> int:
        """Получает максимальное количество файлов логов для хранения"""
        return self.get('logging.max_log_files', 10)

    def cleanup_old_log_files(self) -> None:
        """Удаляет старые файлы логов, оставляя только последние max_log_files"""
        logs_dir = Path("logs")
        if not logs_dir.exists():
            return

        log_files = list(logs_dir.glob("lexico_analyser_*.log"))
        max_files = self.get_max_log_files()
        if len(log_files) <= max_files:
            return

        # Сортируем по времени модификации (самые новые последними)
        log_files.sort(key=lambda f: f.stat().st_mtime)
        for old_file in log_files[:-max_files]:
            try:
                old_file.unlink()
                logger.debug(f"Удален старый лог файл: {old_file}")
            except OSError as e:
                logger.debug(f"Не удалось удалить лог файл {old_file}: {e}")


# Глобальный экземпляр конфигурации
config = Config()
