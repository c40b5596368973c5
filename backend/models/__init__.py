"""Models module - Pydantic data models"""

from .chat import ReviseRequest, ReviseResponse, StreamEvent, TutorRequest
from .diff import DiffKind, DiffLine, DiffRequest, DiffResponse, DiffStats
from .project import (
    FileTreeNode,
    FileView,
    GenerateRequest,
    GenerateResponse,
    ImageData,
    LastChange,
    LearningStep,
    Locale,
    Personality,
    PersonalityInfo,
    ProjectFile,
    ProjectOutput,
    ProjectSessionResponse,
    RevisionOutput,
)

__all__ = [
    # Chat models
    "ReviseRequest",
    "ReviseResponse",
    "StreamEvent",
    "TutorRequest",
    # Diff models
    "DiffKind",
    "DiffLine",
    "DiffRequest",
    "DiffResponse",
    "DiffStats",
    # Project models
    "FileTreeNode",
    "FileView",
    "GenerateRequest",
    "GenerateResponse",
    "ImageData",
    "LastChange",
    "LearningStep",
    "Locale",
    "Personality",
    "PersonalityInfo",
    "ProjectFile",
    "ProjectOutput",
    "ProjectSessionResponse",
    "RevisionOutput",
]
