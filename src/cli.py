"""Command-line interface loop for the client/task desk.

Three views share one User: the menu, the client table and the task table.
Views are built through ``build_views``, a mapping from view id to a
closure over the User, so no view reaches for global state.
"""
import datetime as dt
import logging
from typing import Callable, Dict, List, Optional, Tuple

from config import Settings
from errors import ErrorKind, NotFoundError, TaskDeskError, ValidationError
from models import Client, Task, TaskStatus
from table import CLIENT_COLUMNS, TASK_COLUMNS, client_rows, render_table, task_rows
from theme import color, BOLD, ERROR_COLOR, HEADER_COLOR
from user import User

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]
Output = Callable[[str], None]


# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home)
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


CLIENT_FIELDS = {
    'student': 'student_name',
    'student_name': 'student_name',
    'parent': 'parent_name',
    'parent_name': 'parent_name',
    'phone': 'phone_number',
    'phone_number': 'phone_number',
    'desc': 'description',
    'description': 'description',
}

TASK_FIELDS = {
    'subject': 'subject',
    'desc': 'description',
    'description': 'description',
    'client': 'client_id',
    'client_id': 'client_id',
    'date': 'date',
    'time': 'time',
}

NO_PHONE = {'', '-'}


def parse_id(raw: str, entity_kind: str) -> int:
    try:
        return int(raw.rstrip('.'))
    except ValueError:
        raise NotFoundError(entity_kind, raw) from None


def parse_client_ref(raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValidationError(ErrorKind.INVALID_CLIENT_ID, 'client_id', 'Invalid client ID.') from None
    return Task.check_field('client_id', value)


def _field(aliases: Dict[str, str], raw: str) -> str:
    name = aliases.get(raw.lower())
    if name is None:
        choices = ', '.join(sorted({k for k, v in aliases.items() if '_' not in k}))
        raise ValidationError(ErrorKind.UNKNOWN_FIELD, raw, f'Unknown field "{raw}". Fields: {choices}.')
    return name


class Cancelled(Exception):
    pass


class View:
    title = ''
    commands: Tuple[Tuple[str, str], ...] = ()

    def __init__(self, user: User, prompt: Prompt = input, out: Output = print):
        self.user = user
        self.prompt = prompt
        self.out = out
        self.message: Optional[str] = None

    def render(self) -> List[str]:
        return [color(self.title, HEADER_COLOR, BOLD), '']

    def handle(self, tokens: List[str]) -> Optional[str]:
        """Run one command; return the id of the next view or None to stay."""
        raise NotImplementedError

    def help_lines(self) -> List[str]:
        lines = ['Commands:']
        for usage, text in self.commands + GLOBAL_COMMANDS:
            lines.append(f'  {usage:<30}{text}')
        return lines

    def unknown(self) -> None:
        self.message = "Unknown command. Type 'help' for instructions."

    def ask(self, label: str, check: Callable[[str], object], required: bool = True):
        """Prompt until ``check`` accepts the answer; blank cancels a required field."""
        while True:
            raw = self.prompt(f'{label}: ').strip()
            if not raw and required:
                raise Cancelled()
            try:
                return check(raw)
            except TaskDeskError as exc:
                self.out(color(str(exc), ERROR_COLOR))


GLOBAL_COMMANDS: Tuple[Tuple[str, str], ...] = (
    ('back', 'Return to the menu'),
    ('help', 'Show this help (press Enter to return)'),
    ('exit', 'Exit'),
)


class MenuView(View):
    title = 'Task Desk'
    commands = (
        ('clients  (c, 1)', 'Open the client table'),
        ('tasks    (t, 2)', 'Open the task table'),
    )
    TARGETS = {'clients': 'clients', 'c': 'clients', '1': 'clients',
               'tasks': 'tasks', 't': 'tasks', '2': 'tasks'}

    def render(self) -> List[str]:
        lines = super().render()
        lines.append(str(self.user))
        lines.append('')
        lines.append('  1. Clients')
        lines.append('  2. Tasks')
        return lines

    def handle(self, tokens: List[str]) -> Optional[str]:
        target = self.TARGETS.get(tokens[0].lower())
        if target is None:
            self.unknown()
        return target


class ClientView(View):
    title = 'Clients'
    commands = (
        ('add', 'Add a client (prompts for each field)'),
        ('add <student> <parent> [phone|-] [desc...]', ''),
        ('set <id> <field> <value...>', 'Edit a cell; fields: student, parent, phone, description'),
        ('rm <id>', 'Remove a client (ids after it shift down)'),
    )

    def render(self) -> List[str]:
        return super().render() + render_table(CLIENT_COLUMNS, client_rows(self.user))

    def handle(self, tokens: List[str]) -> Optional[str]:
        cmd = tokens[0].lower()
        if cmd == 'add':
            self._add(tokens[1:])
        elif cmd in ('set', 'edit'):
            self._set(tokens[1:])
        elif cmd in ('rm', 'remove'):
            self._rm(tokens[1:])
        else:
            self.unknown()
        return None

    def _add(self, args: List[str]) -> None:
        if args:
            if len(args) < 2:
                self.message = 'Usage: add <student> <parent> [phone|-] [description...]'
                return
            phone = args[2] if len(args) > 2 else ''
            client = Client(args[0], args[1], '' if phone in NO_PHONE else phone, ' '.join(args[3:]))
        else:
            try:
                client = self._prompt_client()
            except Cancelled:
                self.message = 'Cancelled.'
                return
        cid = self.user.add_client(client)
        self.message = f'Client {cid} added.'

    def _prompt_client(self) -> Client:
        student = self.ask('Student name', lambda v: Client.check_field('student_name', v))
        parent = self.ask('Parent name', lambda v: Client.check_field('parent_name', v))
        phone = self.ask('Phone number (9 digits, blank for none)',
                         lambda v: Client.check_field('phone_number', v), required=False)
        description = self.prompt('Description: ').strip()
        return Client(student, parent, phone, description)

    def _set(self, args: List[str]) -> None:
        if len(args) < 2:
            self.message = 'Usage: set <id> <field> <value...>'
            return
        cid = parse_id(args[0], 'client')
        name = _field(CLIENT_FIELDS, args[1])
        value = ' '.join(args[2:])
        if name == 'phone_number' and value in NO_PHONE:
            value = ''
        self.user.update_client(cid, **{name: value})
        self.message = f'Client {cid} updated.'

    def _rm(self, args: List[str]) -> None:
        if len(args) != 1:
            self.message = 'Usage: rm <id>'
            return
        cid = parse_id(args[0], 'client')
        removed = self.user.remove_client(cid)
        self.message = f'Client {cid} ({removed.student_name}) removed.'


class TaskView(View):
    title = 'Tasks'
    commands = (
        ('add', 'Add a task (prompts for each field)'),
        ('add <subject> <client> <date> <time> [desc...]', ''),
        ('set <id> <field> <value...>', 'Edit a cell; fields: subject, description, client, date, time'),
        ('rm <id>', 'Remove a task (ids after it shift down)'),
        ('filter <soon|week|long>', 'Show only tasks with that status'),
        ('all', 'Show every task'),
    )

    def __init__(self, user: User, prompt: Prompt = input, out: Output = print,
                 today: Optional[Callable[[], dt.date]] = None):
        super().__init__(user, prompt, out)
        self.today = today or dt.date.today
        self.status_filter: Optional[TaskStatus] = None

    def render(self) -> List[str]:
        day = self.today()
        if self.status_filter is None:
            tasks = self.user.list_tasks()
            heading = f'{self.title} (all)'
        else:
            tasks = self.user.filter_tasks_by_status(self.status_filter, day)
            heading = f'{self.title} ({self.status_filter.title})'
        rows, colors = task_rows(tasks, day)
        return [color(heading, HEADER_COLOR, BOLD), ''] + render_table(TASK_COLUMNS, rows, row_colors=colors)

    def handle(self, tokens: List[str]) -> Optional[str]:
        cmd = tokens[0].lower()
        if cmd == 'add':
            self._add(tokens[1:])
        elif cmd in ('set', 'edit'):
            self._set(tokens[1:])
        elif cmd in ('rm', 'remove'):
            self._rm(tokens[1:])
        elif cmd == 'filter':
            if len(tokens) != 2:
                self.message = 'Usage: filter <soon|week|long>'
            else:
                self.status_filter = TaskStatus.parse(tokens[1])
        elif cmd == 'all':
            self.status_filter = None
        else:
            self.unknown()
        return None

    def _existing_client(self, raw: str) -> int:
        client_id = parse_client_ref(raw)
        self.user.get_client_by_id(client_id)
        return client_id

    def _add(self, args: List[str]) -> None:
        if args:
            if len(args) < 4:
                self.message = 'Usage: add <subject> <client> <date> <time> [description...]'
                return
            task = Task.from_strings(args[0], ' '.join(args[4:]), self._existing_client(args[1]),
                                     args[2], args[3])
        else:
            try:
                task = self._prompt_task()
            except Cancelled:
                self.message = 'Cancelled.'
                return
        tid = self.user.add_task(task)
        self.message = f'Task {tid} added.'

    def _prompt_task(self) -> Task:
        subject = self.ask('Subject', lambda v: Task.check_field('subject', v))
        client_id = self.ask('Client id', self._existing_client)
        date = self.ask('Date (YYYY-MM-DD)', lambda v: Task.check_field('date', v))
        time = self.ask('Time (HH:mm)', lambda v: Task.check_field('time', v))
        description = self.prompt('Description: ').strip()
        return Task(subject, description, client_id, date, time)

    def _set(self, args: List[str]) -> None:
        if len(args) < 2:
            self.message = 'Usage: set <id> <field> <value...>'
            return
        tid = parse_id(args[0], 'task')
        name = _field(TASK_FIELDS, args[1])
        raw = ' '.join(args[2:])
        value = parse_client_ref(raw) if name == 'client_id' else raw
        self.user.update_task(tid, **{name: value})
        self.message = f'Task {tid} updated.'

    def _rm(self, args: List[str]) -> None:
        if len(args) != 1:
            self.message = 'Usage: rm <id>'
            return
        tid = parse_id(args[0], 'task')
        removed = self.user.remove_task(tid)
        self.message = f'Task {tid} ({removed.subject}) removed.'


def build_views(user: User, prompt: Prompt = input, out: Output = print) -> Dict[str, Callable[[], View]]:
    """Map each view id to a constructor closed over the shared ``user``."""
    return {
        'menu': lambda: MenuView(user, prompt, out),
        'clients': lambda: ClientView(user, prompt, out),
        'tasks': lambda: TaskView(user, prompt, out),
    }


class CLI:
    def __init__(self, user: User, settings: Optional[Settings] = None,
                 prompt: Prompt = input, out: Output = print):
        self.user = user
        self.settings = settings or Settings()
        self.prompt = prompt
        self.out = out
        self.views = build_views(user, prompt, out)
        self.view: View = self.views['menu']()

    def open(self, view_id: str) -> None:
        self.view = self.views[view_id]()

    def run(self) -> None:
        """Main REPL loop; the current view is cleared/redrawn each cycle.

        Uses the terminal's alternate screen (if enabled) so earlier renders
        do not remain in scrollback history.
        """
        exit_message: Optional[str] = None
        if self.settings.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                for line in self.view.render():
                    self.out(line)
                if self.view.message:
                    self.out('\n' + self.view.message)
                    self.view.message = None
                line = self.prompt("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower in ('exit', 'quit'):
                    exit_message = "Goodbye."
                    break
                if lower == 'help':
                    _clear_screen()
                    for text in self.view.help_lines():
                        self.out(text)
                    self.prompt("\nPress Enter to return...")
                    continue
                self.execute(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.settings.alt_screen:
                _leave_alt_screen()
            if exit_message:
                self.out(exit_message)

    def execute(self, line: str) -> None:
        """Dispatch one command line to the current view."""
        tokens = line.split()
        if not tokens:
            return
        if tokens[0].lower() in ('back', 'menu'):
            self.open('menu')
            return
        try:
            next_view = self.view.handle(tokens)
        except TaskDeskError as exc:
            logger.info('Rejected %r: %s', line, exc)
            self.view.message = color(str(exc), ERROR_COLOR)
            return
        if next_view:
            self.open(next_view)
