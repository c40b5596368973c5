"""Services module - Business logic layer"""

from .config_manager import ConfigManager
from .diff_engine import compute_diff, render_unified, summarize_diff
from .file_tree import build_file_tree, default_file
from .llm_service import LLMService
from .project_generator import ProjectGenerationError, ProjectGenerator
from .project_store import ProjectSession, ProjectStore, project_store

__all__ = [
    "ConfigManager",
    "compute_diff",
    "render_unified",
    "summarize_diff",
    "build_file_tree",
    "default_file",
    "LLMService",
    "ProjectGenerationError",
    "ProjectGenerator",
    "ProjectSession",
    "ProjectStore",
    "project_store",
]
