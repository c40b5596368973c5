"""Project generation API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from models.project import (
    FileView,
    GenerateRequest,
    GenerateResponse,
    Locale,
    PersonalityInfo,
    ProjectSessionResponse,
)
from services.config_manager import ConfigManager
from services.file_tree import build_file_tree, default_file
from services.llm_service import LLMService
from services.personalities import (
    UnknownPersonalityError,
    get_personality,
    list_personalities,
    resolve_locale,
)
from services.project_generator import ProjectGenerationError, ProjectGenerator
from services.project_store import ProjectSession, project_store

router = APIRouter()


def get_session(project_id: str) -> ProjectSession:
    """Look up a session or fail with 404"""
    try:
        return project_store.get(project_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])


@router.get("/personalities", response_model=list[PersonalityInfo])
async def get_personalities(locale: Locale = "pt-br") -> list[PersonalityInfo]:
    """List available instructors"""
    return list_personalities(locale)


@router.post("/generate", response_model=GenerateResponse)
async def generate_project(request: GenerateRequest) -> GenerateResponse:
    """Generate a Flutter project from a description and optional images"""
    if not request.description.strip() and not request.images:
        raise HTTPException(status_code=400, detail="Please provide a description or an image.")

    config = ConfigManager.get_instance().get_config()
    personality_id = request.personality_id or config.get("personality", "tars")
    locale = request.locale or resolve_locale(config.get("locale"))

    try:
        personality = get_personality(personality_id)
    except UnknownPersonalityError as e:
        raise HTTPException(status_code=404, detail=e.args[0])

    generator = ProjectGenerator(LLMService(config))
    try:
        project = await generator.generate(request.description, request.images, personality, locale)
    except ProjectGenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))

    session = project_store.create(project, personality.id, locale)
    selected = default_file(project)

    return GenerateResponse(
        project_id=session.id,
        project=project,
        file_tree=build_file_tree(project.files),
        selected_file=selected.path if selected else None,
    )


@router.get("/{project_id}", response_model=ProjectSessionResponse)
async def get_project(project_id: str) -> ProjectSessionResponse:
    """Get the current state of a project"""
    session = get_session(project_id)
    return ProjectSessionResponse(
        project_id=session.id,
        project=session.project,
        file_tree=build_file_tree(session.project.files),
        personality_id=session.personality_id,
        locale=session.locale,
        last_changed_file=session.last_change.path if session.last_change else None,
        history=session.history,
    )


@router.get("/{project_id}/files/{path:path}", response_model=FileView)
async def get_file(project_id: str, path: str) -> FileView:
    """Get a file, with an inline diff when it is the most recently changed file"""
    session = get_session(project_id)
    try:
        return session.file_view(path)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{project_id}")
async def delete_project(project_id: str) -> dict[str, Any]:
    """Discard a project session"""
    get_session(project_id)
    project_store.delete(project_id)
    return {"status": "success", "message": "Project deleted"}
