from pathlib import Path

import pytest

from repository import TaskRepository


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / 'tasks.json'


@pytest.fixture()
def repo(tasks_file: Path) -> TaskRepository:
    return TaskRepository(tasks_file)
