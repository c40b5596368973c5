"""Project generation data models"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .diff import DiffLine

Locale = Literal["pt-br", "en"]


class CamelModel(BaseModel):
    """Model exchanged with Gemini and the browser using camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageData(CamelModel):
    """Base64-encoded sketch, mockup or reference image"""

    data: str
    mime_type: str


class ProjectFile(CamelModel):
    """A single generated source file"""

    path: str  # e.g. "lib/main.dart"
    content: str
    explanation: str = ""


class LearningStep(CamelModel):
    """One step of the learning path"""

    title: str
    explanation: str
    diagram: str | None = None  # ASCII or Mermaid
    backend_suggestion: str | None = None


class ProjectOutput(CamelModel):
    """Complete generated project"""

    project_name: str
    project_description: str
    files: list[ProjectFile]
    learning_path: list[LearningStep]


class RevisionOutput(CamelModel):
    """Answer to a revision request: a reply plus changed or new files"""

    reply: str
    files: list[ProjectFile] = []


class Personality(BaseModel):
    """Instructor persona with localized name and system prompt"""

    id: str
    name: dict[str, str]
    prompt: dict[str, str]


class PersonalityInfo(BaseModel):
    id: str
    name: str


class FileTreeNode(BaseModel):
    """Explorer node; directories have children, files have content"""

    name: str
    path: str
    children: list[FileTreeNode] | None = None
    content: str | None = None
    explanation: str | None = None


FileTreeNode.model_rebuild()


class LastChange(BaseModel):
    """Most recent edit applied to a project file"""

    path: str
    old_content: str
    new_content: str


class FileView(BaseModel):
    """A file as shown in the viewer, with the diff when it was the last changed file"""

    file: ProjectFile
    is_last_changed: bool = False
    diff: list[DiffLine] | None = None


class GenerateRequest(BaseModel):
    """Request to generate a project"""

    description: str = ""
    images: list[ImageData] = []
    personality_id: str | None = None  # Falls back to configured personality
    locale: Locale | None = None  # Falls back to configured locale


class GenerateResponse(BaseModel):
    """Response with the generated project"""

    project_id: str
    project: ProjectOutput
    file_tree: FileTreeNode
    selected_file: str | None = None


class ProjectSessionResponse(BaseModel):
    """Current state of a project session"""

    project_id: str
    project: ProjectOutput
    file_tree: FileTreeNode
    personality_id: str
    locale: Locale
    last_changed_file: str | None = None
    history: list[dict] = []
