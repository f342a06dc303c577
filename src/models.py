"""Data models for the terminal to-do list.

Only the Task dataclass lives here. Tasks are frozen; the repository
replaces a task wholesale when its description or completion flag changes,
so a snapshot handed to the shell can never be mutated behind its back.
"""
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Task:
    """A single to-do entry.

    Fields:
        id: Repository-assigned integer id, never reused.
        description: Free-form text.
        completed: True once marked done (there is no way back).
    """
    id: int
    description: str
    completed: bool = False
