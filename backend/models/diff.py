"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DiffKind(str, Enum):
    """Classification of a single diff line"""

    ADDED = "added"
    REMOVED = "removed"
    COMMON = "common"


class DiffLine(BaseModel):
    """A single line of a line-level diff"""

    content: str
    kind: DiffKind


class DiffStats(BaseModel):
    """Line counts per kind"""

    added: int = 0
    removed: int = 0
    common: int = 0


class DiffRequest(BaseModel):
    """Request to diff two texts"""

    old_text: str
    new_text: str


class DiffResponse(BaseModel):
    """Complete diff result"""

    lines: list[DiffLine]
    stats: DiffStats
    unified: str  # "+", "-" or " " prefixed lines
