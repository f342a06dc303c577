"""Task repository: owns the task list and the id counter.

All mutations pass through TaskRepository. Lookups are linear scans by id;
an unknown id is a silent no-op for edit, delete and mark_completed.
"""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from models import Task
from storage import DEFAULT_TASKS_FILE, Storage

logger = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    # bool is a subclass of int; JSON true/false must not pass as ids
    return isinstance(value, int) and not isinstance(value, bool)


class TaskRepository:
    def __init__(self, path: Union[str, Path] = DEFAULT_TASKS_FILE):
        self.storage: Storage = Storage(path)
        self._tasks: List[Task] = []
        self._next_id: int = 0

    # -------------------- queries --------------------
    @property
    def path(self) -> Path:
        return self.storage.path

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Read-only snapshot of the tasks in insertion order."""
        return tuple(self._tasks)

    @property
    def next_id(self) -> int:
        return self._next_id

    def get(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    # -------------------- task operations --------------------
    def add(self, description: str) -> None:
        """Append a new open task. Callers reject empty descriptions."""
        self._tasks.append(Task(id=self._next_id, description=description))
        self._next_id += 1

    def edit(self, task_id: int, new_description: str) -> None:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                self._tasks[idx] = replace(task, description=new_description)
                return

    def delete(self, task_id: int) -> None:
        self._tasks = [task for task in self._tasks if task.id != task_id]

    def mark_completed(self, task_id: int) -> None:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                if not task.completed:
                    self._tasks[idx] = replace(task, completed=True)
                return

    # -------------------- serialization --------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            'tasks': [
                {'id': t.id, 'description': t.description, 'completed': t.completed}
                for t in self._tasks
            ],
            'next_id': self._next_id,
        }

    @classmethod
    def from_dict(cls, data: Any, path: Union[str, Path] = DEFAULT_TASKS_FILE) -> 'TaskRepository':
        """Build a repository from its persisted shape.

        Raises ValueError when data is not {"tasks": [...], "next_id": int}
        with well-typed, uniquely-numbered task records. Extra keys are
        ignored. A next_id that would reuse a stored id is raised past it.
        """
        if not isinstance(data, Mapping):
            raise ValueError('repository data must be an object')
        raw_tasks = data.get('tasks')
        next_id = data.get('next_id')
        if not isinstance(raw_tasks, list):
            raise ValueError('"tasks" must be a list')
        if not _is_int(next_id) or next_id < 0:
            raise ValueError('"next_id" must be a non-negative integer')
        tasks: List[Task] = []
        seen = set()
        for raw in raw_tasks:
            if not isinstance(raw, Mapping):
                raise ValueError('task records must be objects')
            tid = raw.get('id')
            description = raw.get('description')
            completed = raw.get('completed')
            if not _is_int(tid) or tid < 0:
                raise ValueError(f'invalid task id: {tid!r}')
            if tid in seen:
                raise ValueError(f'duplicate task id: {tid}')
            if not isinstance(description, str):
                raise ValueError(f'task {tid}: description must be a string')
            if not isinstance(completed, bool):
                raise ValueError(f'task {tid}: completed must be a boolean')
            seen.add(tid)
            tasks.append(Task(id=tid, description=description, completed=completed))
        repo = cls(path)
        repo._tasks = tasks
        repo._next_id = max([next_id] + [t.id + 1 for t in tasks])
        return repo

    # -------------------- persistence --------------------
    def save(self) -> None:
        """Overwrite the task file with the full state.

        Write failures are logged and swallowed; the in-memory state stays
        authoritative.
        """
        try:
            self.storage.write(self.to_dict())
        except (OSError, ValueError) as exc:
            # ValueError covers descriptions that cannot be encoded as UTF-8
            logger.warning("could not save tasks to %s: %s", self.path, exc)

    @classmethod
    def load(cls, path: Union[str, Path] = DEFAULT_TASKS_FILE) -> 'TaskRepository':
        """Load from path; missing, unreadable or malformed files give an empty repository."""
        storage = Storage(path)
        try:
            data = storage.read()
            if data is None:
                logger.info("no task file at %s, starting empty", storage.path)
                return cls(path)
            repo = cls.from_dict(data, path)
        except (OSError, ValueError, RecursionError) as exc:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors;
            # deeply nested JSON raises RecursionError
            logger.warning("could not load tasks from %s (%s), starting empty", storage.path, exc)
            return cls(path)
        logger.debug("loaded %d tasks from %s (next_id=%d)", len(repo), storage.path, repo.next_id)
        return repo

    # -------------------- comparison --------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskRepository):
            return NotImplemented
        return self._tasks == other._tasks and self._next_id == other._next_id

    __hash__ = None  # type: ignore[assignment]
