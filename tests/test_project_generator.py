"""Tests for project generation and revision prompts."""

import asyncio
import json

import pytest

from conftest import SAMPLE_PROJECT
from models.project import ImageData
from services.personalities import PROJECT_SCHEMA, REVISION_SCHEMA, get_personality, resolve_locale
from services.project_generator import (
    IMAGES_INTRO,
    ProjectGenerationError,
    ProjectGenerator,
    build_generation_parts,
    parse_json_object,
)


class StubLLM:
    """Minimal stand-in for LLMService.generate_structured"""

    def __init__(self, response):
        self.response = response
        self.calls = []

    async def generate_structured(self, contents, system_instruction, response_schema):
        self.calls.append((contents, system_instruction, response_schema))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class TestGenerationParts:
    """Tests for request part ordering."""

    def test_description_only(self):
        parts = build_generation_parts("A timer app", [])
        assert parts == [{"text": "App Description: A timer app"}]

    def test_images_come_first_in_order(self):
        images = [ImageData(data="AAA", mime_type="image/png"), ImageData(data="BBB", mime_type="image/jpeg")]
        parts = build_generation_parts("A timer app", images)

        assert parts[0] == {"text": IMAGES_INTRO}
        assert parts[1] == {"inlineData": {"data": "AAA", "mimeType": "image/png"}}
        assert parts[2] == {"inlineData": {"data": "BBB", "mimeType": "image/jpeg"}}
        assert parts[3] == {"text": "App Description: A timer app"}


class TestParseJsonObject:
    """Tests for response validation."""

    def test_surrounding_whitespace(self):
        assert parse_json_object('  {"a": 1}\n') == {"a": 1}

    def test_rejects_non_object(self):
        with pytest.raises(ValueError, match="Invalid JSON response from API."):
            parse_json_object("Sure! Here is your project: {}.")


class TestGenerate:
    """Tests for ProjectGenerator.generate."""

    def test_success(self):
        llm = StubLLM(json.dumps(SAMPLE_PROJECT))
        project = asyncio.run(
            ProjectGenerator(llm).generate("A to-do app", [], get_personality("google-engineer"), "en")
        )

        assert project.project_name == "TodoFlow"
        assert project.learning_path[1].backend_suggestion == "Firebase Firestore"

        contents, system_instruction, schema = llm.calls[0]
        assert contents[0]["role"] == "user"
        assert system_instruction.startswith("You are a senior staff software engineer at Google")
        assert schema is PROJECT_SCHEMA

    def test_uses_locale_prompt(self):
        llm = StubLLM(json.dumps(SAMPLE_PROJECT))
        asyncio.run(ProjectGenerator(llm).generate("Um app", [], get_personality("tars"), "pt-br"))
        assert llm.calls[0][1].startswith("Você é TARS")

    def test_invalid_json_is_wrapped(self):
        llm = StubLLM("I cannot do that")
        with pytest.raises(ProjectGenerationError, match="Failed to generate project") as exc_info:
            asyncio.run(ProjectGenerator(llm).generate("x", [], get_personality("tars"), "en"))
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_schema_mismatch_is_wrapped(self):
        llm = StubLLM('{"projectName": "Only a name"}')
        with pytest.raises(ProjectGenerationError):
            asyncio.run(ProjectGenerator(llm).generate("x", [], get_personality("tars"), "en"))

    def test_api_error_is_wrapped(self):
        llm = StubLLM(RuntimeError("Gemini API error: quota"))
        with pytest.raises(ProjectGenerationError) as exc_info:
            asyncio.run(ProjectGenerator(llm).generate("x", [], get_personality("tars"), "en"))
        assert "quota" in str(exc_info.value.__cause__)


class TestRevise:
    """Tests for ProjectGenerator.revise."""

    def test_history_roles_and_request(self, sample_project):
        llm = StubLLM(json.dumps({"reply": "Added a FAB.", "files": [SAMPLE_PROJECT["files"][0]]}))
        history = [
            {"role": "user", "content": "Make it blue"},
            {"role": "assistant", "content": "Changed the theme."},
        ]

        revision = asyncio.run(
            ProjectGenerator(llm).revise(sample_project, history, "Add a FAB", get_personality("fun-dev"), "en")
        )

        assert revision.reply == "Added a FAB."
        assert revision.files[0].path == "lib/main.dart"

        contents, _, schema = llm.calls[0]
        assert [c["role"] for c in contents] == ["user", "model", "user"]
        last_prompt = contents[-1]["parts"][0]["text"]
        assert "CHANGE REQUEST:\nAdd a FAB" in last_prompt
        assert "lib/screens/home.dart" in last_prompt
        assert schema is REVISION_SCHEMA

    def test_failure_is_wrapped(self, sample_project):
        llm = StubLLM("not json")
        with pytest.raises(ProjectGenerationError, match="Failed to revise project"):
            asyncio.run(ProjectGenerator(llm).revise(sample_project, [], "x", get_personality("tars"), "en"))


class TestResolveLocale:
    """Tests for locale fallback."""

    def test_supported(self):
        assert resolve_locale("en") == "en"
        assert resolve_locale("pt-br") == "pt-br"

    def test_unsupported_or_missing(self):
        assert resolve_locale("fr") == "pt-br"
        assert resolve_locale(None) == "pt-br"
