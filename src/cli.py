"""Command-line interface loop for the to-do list.

The CLI is the only caller of the repository's mutating operations. It
rejects empty descriptions before calling add, reports unknown ids itself
(the repository ignores them silently), and saves after every change.
"""
from typing import Optional, Tuple
from repository import TaskRepository
from models import Task
from theme import color, HEADER_COLOR, ID_COLOR, OPEN_COLOR, DONE_COLOR, EMPTY_COLOR, BOLD

TITLE = "To-Do List"
EMPTY_MESSAGE = "Nothing planned for today."
CHECK = "✓"
UNKNOWN_COMMAND = "Unknown command. Type 'help' for instructions."

# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home); 3J first
def _clear_screen() -> None:  # pragma: no cover
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:  # pragma: no cover
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:  # pragma: no cover
    print("\033[?1049l", end="", flush=True)


def _parse_id(raw: str) -> Optional[int]:
    raw = raw.rstrip('.')
    # isdigit() also accepts superscripts, which int() rejects
    return int(raw) if raw.isdecimal() and raw.isascii() else None


def format_task(task: Task) -> str:
    prefix = color(f"{task.id}.", ID_COLOR, BOLD) + ' '
    if task.completed:
        return prefix + color(task.description, DONE_COLOR) + ' ' + color(CHECK, DONE_COLOR)
    return prefix + color(task.description, OPEN_COLOR)


class CLI:
    def __init__(self, repository: TaskRepository, alt_screen: bool = True):
        self.repository: TaskRepository = repository
        self.alt_screen: bool = alt_screen

    def run(self) -> None:
        """Main REPL loop; the list is cleared/redrawn each cycle.

        Uses the terminal's alternate screen (if enabled) so prior renders
        do not remain in scrollback history.
        """
        exit_message: Optional[str] = None
        message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                self.display()
                if message:
                    print("\n" + message)
                    message = None
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the list...")
                    continue
                if lower == 'exit':
                    self.repository.save()
                    exit_message = "Goodbye."
                    break
                message = self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            self.repository.save()
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    # -------------------- display --------------------
    def display(self) -> None:
        print(color(TITLE, HEADER_COLOR, BOLD))
        print(color('-' * len(TITLE), HEADER_COLOR))
        tasks = self.repository.tasks
        if not tasks:
            print(color(EMPTY_MESSAGE, EMPTY_COLOR))
            return
        for task in tasks:
            print(format_task(task))

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> Optional[str]:
        """Run one command line; returns the feedback to show, if any."""
        parts = line.split(None, 1)
        if not parts:
            return None
        cmd = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ''
        if cmd == 'add':
            return self._cmd_add(rest)
        if cmd == 'edit':
            return self._cmd_edit(rest)
        if cmd in ('done', 'd'):
            return self._cmd_done(rest)
        if cmd in ('rm', 'remove'):
            return self._cmd_rm(rest)
        return UNKNOWN_COMMAND

    # ---- individual command helpers ----
    def _cmd_add(self, rest: str) -> Optional[str]:
        description = rest.strip()  # inline shorthand, kept as typed
        if not description:
            description = input("Enter task description: ").strip()
        if not description:
            return "Description required."
        self.repository.add(description)
        self.repository.save()
        return None

    def _cmd_edit(self, rest: str) -> Optional[str]:
        args = rest.split(None, 1)
        if not args:
            return "Usage: edit <id> [new description]"
        task, error = self._lookup(args[0])
        if task is None:
            return error
        if len(args) > 1:
            description = args[1].strip()
        else:
            print(f"Current: {task.description}")
            description = input("New description: ").strip()
        if not description:
            return "Description required."
        self.repository.edit(task.id, description)
        self.repository.save()
        return None

    def _cmd_done(self, rest: str) -> Optional[str]:
        args = rest.split()
        if len(args) != 1:
            return "Usage: done <id>"
        task, error = self._lookup(args[0])
        if task is None:
            return error
        if task.completed:
            return f"Task {task.id} already done."
        self.repository.mark_completed(task.id)
        self.repository.save()
        return None

    def _cmd_rm(self, rest: str) -> Optional[str]:
        args = rest.split()
        if len(args) != 1:
            return "Usage: rm <id>"
        task, error = self._lookup(args[0])
        if task is None:
            return error
        self.repository.delete(task.id)
        self.repository.save()
        return f'Task {task.id} removed.'

    def _lookup(self, raw_id: str) -> Tuple[Optional[Task], Optional[str]]:
        task_id = _parse_id(raw_id)
        if task_id is None:
            return None, "Invalid id."
        task = self.repository.get(task_id)
        if task is None:
            return None, f"Task id {task_id} not found."
        return task, None

    # -------------------- help --------------------
    def _help(self) -> None:
        print("Commands:")
        print("  add                 Add a new task (prompts for description)")
        print("  add <text...>       Shorthand add with inline description (e.g., add buy milk)")
        print("  edit <id>           Edit a task's description (prompts)")
        print("  edit <id> <text...> Shorthand edit with inline description")
        print("  done <id>           Mark a task as done (alias: d)")
        print("  rm <id>             Remove a task (alias: remove)")
        print("  help                Show this help (press Enter to return)")
        print("  exit                Save and exit")
