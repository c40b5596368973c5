"""Chat mode data models"""

from __future__ import annotations

from pydantic import BaseModel

from .project import FileView


class ReviseRequest(BaseModel):
    """Request to revise a generated project through chat"""

    project_id: str
    message: str


class ReviseResponse(BaseModel):
    """Response for a revision request"""

    reply: str
    changed_files: list[str] = []
    last_changed_file: str | None = None
    diff: FileView | None = None  # View of the last changed file


class TutorRequest(BaseModel):
    """Question about the project, answered as a stream"""

    project_id: str
    message: str
    file_path: str | None = None  # File the user is looking at


class StreamEvent(BaseModel):
    """SSE stream event"""

    type: str  # "content", "done", "error"
    chunk: str | None = None
    metadata: dict | None = None
    done: bool = False
    error: str | None = None
