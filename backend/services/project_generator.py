"""
Project Generator - Ask Gemini for a Flutter project and for revisions of it
"""

from __future__ import annotations

import json

from models.project import ImageData, Personality, ProjectOutput, RevisionOutput
from services.llm_service import LLMService, image_part, text_part
from services.personalities import (
    PROJECT_SCHEMA,
    REVISION_INSTRUCTION,
    REVISION_SCHEMA,
    system_prompt,
)

IMAGES_INTRO = "Here are some drawings, mockups, or reference images of the app I want to build:"


class ProjectGenerationError(Exception):
    """Generation or revision failed; the message is safe to show to the user"""


def parse_json_object(text: str) -> dict:
    """Parse a response that must be a single JSON object"""
    json_str = text.strip()
    if not json_str.startswith("{") or not json_str.endswith("}"):
        raise ValueError("Invalid JSON response from API.")
    return json.loads(json_str)


def build_generation_parts(description: str, images: list[ImageData]) -> list[dict]:
    """Intro text and images (in order) come before the description"""
    parts = []
    if images:
        parts.append(text_part(IMAGES_INTRO))
        parts.extend(image_part(image) for image in images)
    parts.append(text_part(f"App Description: {description}"))
    return parts


def build_revision_prompt(project: ProjectOutput, message: str) -> str:
    project_json = json.dumps(
        {
            "projectName": project.project_name,
            "projectDescription": project.project_description,
            "files": [{"path": f.path, "content": f.content} for f in project.files],
        },
        ensure_ascii=False,
        indent=2,
    )
    return f"{REVISION_INSTRUCTION}\n\nCURRENT PROJECT:\n{project_json}\n\nCHANGE REQUEST:\n{message}"


class ProjectGenerator:
    """Generate and revise projects through the LLM service"""

    def __init__(self, llm_service: LLMService):
        self.llm_service = llm_service

    async def generate(
        self,
        description: str,
        images: list[ImageData],
        personality: Personality,
        locale: str,
    ) -> ProjectOutput:
        contents = [{"role": "user", "parts": build_generation_parts(description, images)}]

        try:
            response = await self.llm_service.generate_structured(
                contents,
                system_prompt(personality, locale),
                PROJECT_SCHEMA,
            )
            project = ProjectOutput.model_validate(parse_json_object(response))
        except Exception as e:
            print(f"[ProjectGenerator] Error generating project: {e}")
            raise ProjectGenerationError(
                "Failed to generate project. Please check your API key and try again."
            ) from e

        print(
            f"[ProjectGenerator] Generated '{project.project_name}' "
            f"({len(project.files)} files, {len(project.learning_path)} steps)"
        )
        return project

    async def revise(
        self,
        project: ProjectOutput,
        history: list[dict],
        message: str,
        personality: Personality,
        locale: str,
    ) -> RevisionOutput:
        """
        Ask for a change to an existing project.

        history holds the previous {"role", "content"} turns; the current
        project files are sent with the new request so the model always
        edits the latest content.
        """
        contents = [
            {
                "role": "model" if turn["role"] == "assistant" else "user",
                "parts": [text_part(turn["content"])],
            }
            for turn in history
        ]
        contents.append({"role": "user", "parts": [text_part(build_revision_prompt(project, message))]})

        try:
            response = await self.llm_service.generate_structured(
                contents,
                system_prompt(personality, locale),
                REVISION_SCHEMA,
            )
            revision = RevisionOutput.model_validate(parse_json_object(response))
        except Exception as e:
            print(f"[ProjectGenerator] Error revising project: {e}")
            raise ProjectGenerationError(
                "Failed to revise project. Please check your API key and try again."
            ) from e

        print(f"[ProjectGenerator] Revision touches {len(revision.files)} file(s)")
        return revision
