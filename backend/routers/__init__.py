"""Routers module - FastAPI route handlers"""

from . import chat, config, diff, project

__all__ = ["chat", "config", "diff", "project"]
