"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import logging
import os, sys

from config import ENV_FILE, read_env_file
from models import TaskStatus

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

PALETTE_KEYS = ('TASKDESK_PRIMARY', 'TASKDESK_SOON', 'TASKDESK_WEEK', 'TASKDESK_LONG')

def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

def _palette_value(key: str, default: str, overrides: dict[str, str]) -> str:
    """Priority: real env var > .env override > default; bad hex falls back."""
    raw = os.environ.get(key) or overrides.get(key)
    if raw and _is_hex(raw):
        return '#' + raw.lstrip('#')
    if raw:
        logger.warning('Ignoring %s=%r: not a #RRGGBB colour', key, raw)
    return default

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
UNDERLINE = _code('4')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_SOON_DEFAULT = '#E4572E'
HEX_WEEK_DEFAULT = '#F6FF99'
HEX_LONG_DEFAULT = '#A7E399'

_ENV_OVERRIDES = read_env_file(ENV_FILE, PALETTE_KEYS)

HEX_PRIMARY = _palette_value('TASKDESK_PRIMARY', HEX_PRIMARY_DEFAULT, _ENV_OVERRIDES)
HEX_SOON = _palette_value('TASKDESK_SOON', HEX_SOON_DEFAULT, _ENV_OVERRIDES)
HEX_WEEK = _palette_value('TASKDESK_WEEK', HEX_WEEK_DEFAULT, _ENV_OVERRIDES)
HEX_LONG = _palette_value('TASKDESK_LONG', HEX_LONG_DEFAULT, _ENV_OVERRIDES)

PRIMARY = _from_hex(HEX_PRIMARY)

STATUS_COLOR = {
    TaskStatus.DUE_SOON: _from_hex(HEX_SOON),
    TaskStatus.DUE_THIS_WEEK: _from_hex(HEX_WEEK),
    TaskStatus.LONG_TERM: _from_hex(HEX_LONG),
}

HEADER_COLOR = PRIMARY
ID_COLOR = PRIMARY + BOLD
EMPTY_COLOR = DIM + PRIMARY
ERROR_COLOR = _from_hex(HEX_SOON) + BOLD

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','RESET','BOLD','DIM','UNDERLINE','STATUS_COLOR','HEADER_COLOR',
    'ID_COLOR','EMPTY_COLOR','ERROR_COLOR','HEX_PRIMARY','HEX_SOON','HEX_WEEK','HEX_LONG',
]
