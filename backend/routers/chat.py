"""Chat mode API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from sse_starlette.sse import EventSourceResponse

from models.chat import ReviseRequest, ReviseResponse, StreamEvent, TutorRequest
from routers.project import get_session
from services.config_manager import ConfigManager
from services.llm_service import LLMService
from services.personalities import get_personality, system_prompt
from services.project_generator import ProjectGenerationError, ProjectGenerator
from services.project_store import ProjectSession

router = APIRouter()


def build_tutor_context(session: ProjectSession, file_path: str | None) -> str:
    """Selected file when given, otherwise the project overview and learning path"""
    if file_path:
        file = session.find_file(file_path)
        if file is None:
            raise HTTPException(status_code=404, detail=f"File not found: {file_path}")
        return f"FILE ({file.path}):\n```\n{file.content}\n```\n\nEXPLANATION:\n{file.explanation}"

    project = session.project
    steps = "\n".join(f"- {step.title}" for step in project.learning_path)
    return f"PROJECT: {project.project_name}\n{project.project_description}\n\nLEARNING PATH:\n{steps}"


async def tutor_events(llm_service: LLMService, session: ProjectSession, request: TutorRequest, context: str):
    """Yield SSE payloads for a streamed tutor answer"""
    personality = get_personality(session.personality_id)
    full_content = ""

    try:
        async for chunk in llm_service.generate_response_stream(
            request.message,
            context,
            system_instruction=system_prompt(personality, session.locale),
        ):
            full_content += chunk
            event = StreamEvent(type="content", chunk=chunk)
            yield {"event": "message", "data": event.model_dump_json()}

        event = StreamEvent(
            type="done",
            done=True,
            metadata={"project_id": session.id, "length": len(full_content)},
        )
        yield {"event": "message", "data": event.model_dump_json()}

    except Exception as e:
        print(f"[Chat] Tutor stream failed: {e}")
        event = StreamEvent(type="error", error=str(e))
        yield {"event": "message", "data": event.model_dump_json()}


@router.post("/revise", response_model=ReviseResponse)
async def revise_project(request: ReviseRequest) -> ReviseResponse:
    """Ask for a change to the project and apply the returned files"""
    if not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    session = get_session(request.project_id)
    config = ConfigManager.get_instance().get_config()
    generator = ProjectGenerator(LLMService(config))

    # One revision at a time per session, so each one edits the previous result
    async with session.lock:
        try:
            revision = await generator.revise(
                session.project,
                list(session.history),
                request.message,
                get_personality(session.personality_id),
                session.locale,
            )
        except ProjectGenerationError as e:
            raise HTTPException(status_code=502, detail=str(e))

        changed_files = session.apply_edits(revision.files)
        session.add_turn("user", request.message)
        session.add_turn("assistant", revision.reply)
        last_changed = session.last_change.path if session.last_change else None

    return ReviseResponse(
        reply=revision.reply,
        changed_files=changed_files,
        last_changed_file=last_changed,
        diff=session.file_view(last_changed) if changed_files else None,
    )


@router.post("/stream")
async def tutor_stream(request: TutorRequest):
    """Answer a question about the project as a streaming response (SSE)"""
    session = get_session(request.project_id)
    context = build_tutor_context(session, request.file_path)
    config = ConfigManager.get_instance().get_config()
    llm_service = LLMService(config)

    return EventSourceResponse(tutor_events(llm_service, session, request, context))
