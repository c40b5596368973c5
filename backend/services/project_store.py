"""
Project Store - In-memory project sessions with last-change tracking
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field

from models.project import FileView, LastChange, Locale, ProjectFile, ProjectOutput
from services.diff_engine import compute_diff


@dataclass
class ProjectSession:
    """A generated project plus its chat history and most recent edit"""

    id: str
    project: ProjectOutput
    personality_id: str
    locale: Locale
    history: list[dict] = field(default_factory=list)
    last_change: LastChange | None = None
    # Held for a whole revision so concurrent requests see each other's edits
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    def find_file(self, path: str) -> ProjectFile | None:
        return next((f for f in self.project.files if f.path == path), None)

    def add_turn(self, role: str, content: str):
        self.history.append({"role": role, "content": content})

    def apply_edits(self, edits: list[ProjectFile]) -> list[str]:
        """
        Apply full-content edits and return the paths that actually changed.

        New paths are appended as new files (old content ""). last_change
        tracks the last applied edit and is left alone when nothing changed.
        """
        changed: list[str] = []

        for edit in edits:
            current = self.find_file(edit.path)
            old_content = current.content if current else ""

            if current is None:
                self.project.files.append(
                    ProjectFile(path=edit.path, content=edit.content, explanation=edit.explanation)
                )
            elif current.content == edit.content:
                continue
            else:
                current.content = edit.content
                if edit.explanation:
                    current.explanation = edit.explanation

            self.last_change = LastChange(path=edit.path, old_content=old_content, new_content=edit.content)
            if edit.path not in changed:
                changed.append(edit.path)

        return changed

    def file_view(self, path: str) -> FileView:
        """File content, with a freshly computed diff if it is the last changed file"""
        file = self.find_file(path)
        if file is None:
            raise FileNotFoundError(f"File not found: {path}")

        change = self.last_change
        if change is None or change.path != path:
            return FileView(file=file)

        return FileView(
            file=file,
            is_last_changed=True,
            diff=compute_diff(change.old_content, change.new_content),
        )


class ProjectStore:
    """Holds project sessions for the lifetime of the process"""

    def __init__(self):
        self._sessions: dict[str, ProjectSession] = {}

    def create(self, project: ProjectOutput, personality_id: str, locale: Locale) -> ProjectSession:
        session = ProjectSession(
            id=str(uuid.uuid4()),
            project=project,
            personality_id=personality_id,
            locale=locale,
        )
        self._sessions[session.id] = session
        print(f"[ProjectStore] Created session {session.id} for '{project.project_name}'")
        return session

    def get(self, project_id: str) -> ProjectSession:
        """Get a session; raises KeyError for unknown ids"""
        try:
            return self._sessions[project_id]
        except KeyError:
            raise KeyError(f"Project not found: {project_id}") from None

    def delete(self, project_id: str):
        self.get(project_id)
        del self._sessions[project_id]
        print(f"[ProjectStore] Deleted session {project_id}")

    def clear(self):
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


project_store = ProjectStore()
