import copy

import pytest

from models import Task
from repository import TaskRepository


def test_scenario_add_complete_delete_never_reuses_ids(repo):
    repo.add("Buy milk")
    assert repo.tasks == (Task(id=0, description="Buy milk", completed=False),)

    repo.mark_completed(0)
    assert repo.tasks[0].completed is True

    repo.delete(0)
    assert repo.tasks == ()

    repo.add("Call mom")
    assert repo.tasks[0].id == 1


def test_add_assigns_strictly_increasing_ids(repo):
    for text in ["a", "b", "c", "d"]:
        repo.add(text)
    ids = [t.id for t in repo.tasks]
    assert ids == sorted(set(ids))
    assert ids == [0, 1, 2, 3]
    assert repo.next_id == 4
    assert all(not t.completed for t in repo)


def test_delete_leaves_next_id_unchanged(repo):
    repo.add("X")
    before = repo.next_id
    repo.delete(repo.tasks[-1].id)
    assert repo.next_id == before


def test_delete_preserves_order_of_remaining(repo):
    for text in ["a", "b", "c"]:
        repo.add(text)
    repo.delete(1)
    assert [t.description for t in repo.tasks] == ["a", "c"]


def test_edit_changes_only_target_description(repo):
    repo.add("one")
    repo.add("two")
    repo.mark_completed(1)
    repo.edit(1, "new")
    assert repo.tasks == (
        Task(0, "one", False),
        Task(1, "new", True),
    )
    assert repo.next_id == 2


def test_mark_completed_is_idempotent(repo):
    repo.add("a")
    repo.mark_completed(0)
    once = repo.to_dict()
    repo.mark_completed(0)
    assert repo.to_dict() == once


@pytest.mark.parametrize("op", [
    lambda r: r.edit(42, "nope"),
    lambda r: r.delete(42),
    lambda r: r.mark_completed(42),
])
def test_unknown_id_is_silent_noop(repo, op):
    repo.add("a")
    repo.add("b")
    before = copy.deepcopy(repo.to_dict())
    op(repo)
    assert repo.to_dict() == before


def test_tasks_snapshot_is_immutable(repo):
    repo.add("a")
    snapshot = repo.tasks
    with pytest.raises(AttributeError):
        snapshot[0].description = "changed"  # type: ignore[misc]
    repo.add("b")
    assert len(snapshot) == 1
    assert len(repo) == 2


def test_get_returns_task_or_none(repo):
    repo.add("a")
    assert repo.get(0) == Task(0, "a")
    assert repo.get(1) is None


def test_save_then_load_round_trips(repo, tasks_file):
    repo.add("Buy milk")
    repo.add("")
    repo.add("Café ☕")
    repo.mark_completed(0)
    repo.edit(2, "Tea")
    repo.delete(1)
    repo.save()

    loaded = TaskRepository.load(tasks_file)
    assert loaded == repo
    assert loaded.next_id == 3
    assert loaded.path == tasks_file


def test_round_trip_keeps_empty_description_and_zero_values(repo, tasks_file):
    repo.add("")
    repo.save()
    loaded = TaskRepository.load(tasks_file)
    assert loaded.tasks == (Task(0, "", False),)
    assert loaded.next_id == 1


def test_empty_repository_round_trips(repo, tasks_file):
    repo.save()
    assert TaskRepository.load(tasks_file) == TaskRepository(tasks_file)


def test_load_missing_file_gives_empty(tmp_path):
    loaded = TaskRepository.load(tmp_path / "does-not-exist.json")
    assert loaded.tasks == ()
    assert loaded.next_id == 0


@pytest.mark.parametrize("content", [
    "",
    "not json",
    "[]",
    '{"tasks": []}',
    '{"next_id": 0}',
    '{"tasks": {}, "next_id": 0}',
    '{"tasks": [], "next_id": -1}',
    '{"tasks": [], "next_id": true}',
    '{"tasks": [], "next_id": "3"}',
    '{"tasks": [1], "next_id": 1}',
    '{"tasks": [{"id": -1, "description": "a", "completed": false}], "next_id": 1}',
    '{"tasks": [{"id": true, "description": "a", "completed": false}], "next_id": 2}',
    '{"tasks": [{"id": 0, "description": 5, "completed": false}], "next_id": 1}',
    '{"tasks": [{"id": 0, "description": "a", "completed": 0}], "next_id": 1}',
    '{"tasks": [{"id": 0, "description": "a"}], "next_id": 1}',
    '{"tasks": [{"id": 0, "description": "a", "completed": false},'
    ' {"id": 0, "description": "b", "completed": false}], "next_id": 1}',
    '[' * 100000,
    '{"tasks": ' + '[' * 100000,
])
def test_load_malformed_file_gives_empty(tasks_file, content):
    tasks_file.write_text(content, encoding="utf-8")
    loaded = TaskRepository.load(tasks_file)
    assert loaded.tasks == ()
    assert loaded.next_id == 0


def test_load_undecodable_file_gives_empty(tasks_file):
    tasks_file.write_bytes(b"\xff\xfe\x00garbage")
    assert TaskRepository.load(tasks_file) == TaskRepository(tasks_file)


def test_load_raises_stale_next_id_past_stored_ids(tasks_file):
    tasks_file.write_text(
        '{"tasks": [{"id": 5, "description": "a", "completed": false}], "next_id": 2}',
        encoding="utf-8",
    )
    loaded = TaskRepository.load(tasks_file)
    assert loaded.next_id == 6
    loaded.add("b")
    assert [t.id for t in loaded] == [5, 6]


def test_from_dict_ignores_unknown_keys():
    repo = TaskRepository.from_dict({
        "tasks": [{"id": 0, "description": "a", "completed": True, "extra": 1}],
        "next_id": 1,
        "version": 9,
    })
    assert repo.tasks == (Task(0, "a", True),)


def test_from_dict_rejects_non_object():
    with pytest.raises(ValueError):
        TaskRepository.from_dict(["tasks"])


def test_save_failure_is_swallowed_and_state_kept(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("i am a file", encoding="utf-8")
    repo = TaskRepository(blocker / "tasks.json")
    repo.add("a")

    with caplog.at_level("WARNING"):
        repo.save()

    assert repo.tasks == (Task(0, "a"),)
    assert "could not save tasks" in caplog.text


def test_save_overwrites_previous_content(repo, tasks_file):
    for text in ["a", "b", "c"]:
        repo.add(text)
    repo.save()
    repo.delete(0)
    repo.delete(1)
    repo.delete(2)
    repo.save()
    assert TaskRepository.load(tasks_file).tasks == ()
    assert TaskRepository.load(tasks_file).next_id == 3


def test_equality_ignores_path(tmp_path):
    a = TaskRepository(tmp_path / "a.json")
    b = TaskRepository(tmp_path / "b.json")
    a.add("x")
    b.add("x")
    assert a == b
    b.mark_completed(0)
    assert a != b


def test_unencodable_description_keeps_previous_file(repo, tasks_file, caplog):
    repo.add("good")
    repo.save()
    before = tasks_file.read_bytes()

    repo.add("bad \ud800")
    with caplog.at_level("WARNING"):
        repo.save()

    assert tasks_file.read_bytes() == before
    assert [t.description for t in repo] == ["good", "bad \ud800"]
    assert "could not save tasks" in caplog.text
    assert TaskRepository.load(tasks_file).tasks == (Task(0, "good"),)
    assert [p.name for p in tasks_file.parent.iterdir()] == [tasks_file.name]
