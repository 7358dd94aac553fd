"""Settings loaded from TASKDESK_* environment variables (+ optional .env).

Real environment variables win over the project .env file; command line
options in ``main`` win over both.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

ENV_PREFIX = "TASKDESK"
ENV_FILE = Path(__file__).resolve().parent.parent / '.env'
SETTINGS_KEYS = ('TASKDESK_ALT_SCREEN', 'TASKDESK_SAMPLE_DATA', 'TASKDESK_LOG_LEVEL', 'TASKDESK_LOG_FILE')


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def truthy(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def read_env_file(path: Path, keys: Tuple[str, ...]) -> Dict[str, str]:
    """Read ``KEY=value`` lines for the given keys from a .env style file.

    Blank lines, comments and unknown keys are skipped; a missing file yields
    an empty dict.
    """
    found: Dict[str, str] = {}
    if not path.exists():
        return found
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as exc:
        logger.warning('Could not read %s: %s', path, exc)
        return found
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        if k in keys:
            found[k] = v.strip().strip('"').strip("'")
    return found


@dataclass(frozen=True)
class Settings:
    alt_screen: bool = True
    sample_data: bool = True
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> Settings:
        file_values = read_env_file(env_file or ENV_FILE, SETTINGS_KEYS)

        def get(suffix: str) -> Optional[str]:
            v = os.getenv(_k(suffix))
            return file_values.get(_k(suffix)) if v is None else v

        log_file = (get("LOG_FILE") or "").strip()
        return cls(
            alt_screen=truthy(get("ALT_SCREEN"), True),
            sample_data=truthy(get("SAMPLE_DATA"), True),
            log_level=(get("LOG_LEVEL") or "WARNING").strip().upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
        )

    def override(self, **changes: Any) -> Settings:
        """Copy with every non-None value in ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
