"""Table layout: column widths, cell wrapping and rendering.

Renders a list of row mappings as a fixed-width text table sized to the
terminal. Rendering returns lines instead of printing so views can decide
where the output goes.
"""
import datetime as dt
import re, shutil
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from models import Task
from theme import color, HEADER_COLOR, ID_COLOR, EMPTY_COLOR, STATUS_COLOR, BOLD
from user import User

SEP = " | "
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

Row = Mapping[str, str]


@dataclass(frozen=True)
class Column:
    key: str
    title: str
    min_width: int = 4


CLIENT_COLUMNS: Tuple[Column, ...] = (
    Column('id', 'ID', 3),
    Column('student_name', 'STUDENT', 8),
    Column('parent_name', 'PARENT', 8),
    Column('phone_number', 'PHONE', 9),
    Column('tasks', 'TASKS', 5),
    Column('description', 'DESCRIPTION', 12),
)

TASK_COLUMNS: Tuple[Column, ...] = (
    Column('id', 'ID', 3),
    Column('subject', 'SUBJECT', 8),
    Column('client_id', 'CLIENT', 6),
    Column('date', 'DATE', 10),
    Column('time', 'TIME', 5),
    Column('status', 'STATUS', 8),
    Column('description', 'DESCRIPTION', 12),
)


def visible_len(s: str) -> int:
    return len(ANSI_RE.sub('', s))


# -------------------- rows --------------------
def client_rows(user: User) -> List[Dict[str, str]]:
    rows: List[Dict[str, str]] = []
    for c in user.list_clients():
        rows.append({
            'id': str(c.id),
            'student_name': c.student_name,
            'parent_name': c.parent_name,
            'phone_number': c.phone_number or '-',
            'tasks': str(len(user.tasks.for_client(c.id))),
            'description': c.description,
        })
    return rows


def task_rows(tasks: Sequence[Task], today: Optional[dt.date] = None) -> Tuple[List[Dict[str, str]], List[str]]:
    """Rows plus a per-row colour keyed on each task's status."""
    day = today or dt.date.today()
    rows: List[Dict[str, str]] = []
    colors: List[str] = []
    for t in tasks:
        status = t.status_on(day)
        rows.append({
            'id': str(t.id),
            'subject': t.subject,
            'client_id': str(t.client_id),
            'date': t.date_s,
            'time': t.time_s,
            'status': status.title,
            'description': t.description,
        })
        colors.append(STATUS_COLOR.get(status, ''))
    return rows, colors


# -------------------- width calculation --------------------
def compute_widths(columns: Sequence[Column], rows: Sequence[Row], term_width: int) -> Dict[str, int]:
    sep_total = len(SEP) * (len(columns) - 1)
    widths: Dict[str, int] = {}
    for col in columns:
        longest = len(col.title)
        for row in rows:
            longest = max(longest, len(row.get(col.key, '')))
        widths[col.key] = max(col.min_width, longest)
    total = sum(widths.values()) + sep_total
    if total > term_width:
        target_space = max(term_width - sep_total, sum(c.min_width for c in columns))
        minimum = {c.key: max(c.min_width, len(c.title)) for c in columns}
        while sum(widths.values()) > target_space:
            widest = max(columns, key=lambda c: widths[c.key] - minimum[c.key])
            if widths[widest.key] <= minimum[widest.key]:
                break
            widths[widest.key] -= 1
    else:
        # spare width goes to the last column (free text)
        widths[columns[-1].key] += term_width - total
    return widths


# -------------------- wrapping --------------------
def wrap_cell(text: str, width: int) -> List[str]:
    """Word-wrap ``text`` to ``width``; words longer than a line are split."""
    width = max(1, width)
    lines: List[str] = []
    current = ''
    for word in text.split():
        while len(word) > width:
            if current:
                lines.append(current)
                current = ''
            lines.append(word[:width])
            word = word[width:]
        candidate = word if not current else current + ' ' + word
        if len(candidate) <= width:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines or ['']


def _pad(cell: str, width: int) -> str:
    pad = width - visible_len(cell)
    return cell + ' ' * pad if pad > 0 else cell


# -------------------- rendering --------------------
def render_table(columns: Sequence[Column], rows: Sequence[Row], term_width: Optional[int] = None,
                 row_colors: Optional[Sequence[str]] = None) -> List[str]:
    if term_width is None:
        term_width = shutil.get_terminal_size((120, 30)).columns
    widths = compute_widths(columns, rows, term_width)
    header = SEP.join(_pad(color(c.title, HEADER_COLOR, BOLD), widths[c.key]) for c in columns)
    rule = SEP.join(color('-' * widths[c.key], HEADER_COLOR) for c in columns)
    out = [header, rule]
    if not rows:
        out.append(color('(empty)', EMPTY_COLOR))
        return out
    for idx, row in enumerate(rows):
        row_color = row_colors[idx] if row_colors and idx < len(row_colors) else ''
        cells: List[List[str]] = []
        for c in columns:
            style = ID_COLOR if c.key == 'id' else row_color
            wrapped = wrap_cell(row.get(c.key, ''), widths[c.key])
            cells.append([color(line, style) if style and line else line for line in wrapped])
        height = max(len(lines) for lines in cells)
        for r in range(height):
            parts: List[str] = []
            for c, lines in zip(columns, cells):
                parts.append(_pad(lines[r] if r < len(lines) else '', widths[c.key]))
            out.append(SEP.join(parts).rstrip())
    return out
