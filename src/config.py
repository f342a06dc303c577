"""Runtime settings.

Values resolve with priority: real env var > project .env file > default.
The .env file is optional; unknown keys in it are ignored.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_ENV_FILE = Path(__file__).resolve().parent.parent / '.env'

ENV_KEYS = {
    'TODO_TASKS_FILE', 'TODO_ALT_SCREEN', 'TODO_LOG_DIR', 'TODO_LOG_LEVEL',
    'TODO_PRIMARY', 'TODO_OPEN', 'TODO_DONE',
}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    tasks_file: Path = Path('tasks.json')
    alt_screen: bool = True
    log_dir: Path = Path('.local/todo')
    log_level: str = 'INFO'


def truthy(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def read_env_file(path: Path = DEFAULT_ENV_FILE) -> dict[str, str]:
    """Parse KEY=VALUE lines from a .env file; missing file -> {}."""
    overrides: dict[str, str] = {}
    if not path.exists():
        return overrides
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError):
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")
        if k in ENV_KEYS:
            overrides[k] = v
    return overrides


def resolve(key: str, default: Optional[str] = None, *,
            environ: Optional[Mapping[str, str]] = None,
            file_values: Optional[Mapping[str, str]] = None) -> Optional[str]:
    environ = os.environ if environ is None else environ
    file_values = {} if file_values is None else file_values
    if key in environ:
        return environ[key]
    return file_values.get(key, default)


def load_settings(environ: Optional[Mapping[str, str]] = None,
                  env_file: Optional[Path] = None) -> Settings:
    file_values = read_env_file(env_file if env_file is not None else DEFAULT_ENV_FILE)

    def get(key: str) -> Optional[str]:
        return resolve(key, environ=environ, file_values=file_values)

    defaults = Settings()
    tasks_file = get('TODO_TASKS_FILE')
    log_dir = get('TODO_LOG_DIR')
    log_level = get('TODO_LOG_LEVEL')
    return Settings(
        tasks_file=Path(tasks_file) if tasks_file else defaults.tasks_file,
        alt_screen=truthy(get('TODO_ALT_SCREEN'), defaults.alt_screen),
        log_dir=Path(log_dir) if log_dir else defaults.log_dir,
        log_level=log_level.upper() if log_level and log_level.upper() in LOG_LEVELS else defaults.log_level,
    )
