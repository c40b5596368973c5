"""Shared fixtures: isolated config, empty project store and a fake Gemini."""

import json

import pytest
from fastapi.testclient import TestClient

from models.project import ProjectOutput
from services.config_manager import ConfigManager
from services.llm_service import LLMService
from services.project_store import project_store

SAMPLE_PROJECT = {
    "projectName": "TodoFlow",
    "projectDescription": "A minimalist to-do list with categories.",
    "files": [
        {
            "path": "lib/main.dart",
            "content": "void main() {\n  runApp(const TodoApp());\n}",
            "explanation": "Entry point",
        },
        {
            "path": "pubspec.yaml",
            "content": "name: todo_flow\nversion: 1.0.0",
            "explanation": "Package manifest",
        },
        {
            "path": "lib/screens/home.dart",
            "content": "class HomeScreen {}",
            "explanation": "Home screen",
        },
    ],
    "learningPath": [
        {
            "title": "Step 1: Project Setup",
            "explanation": "Install Flutter and create the project.",
        },
        {
            "title": "Step 2: Persist tasks",
            "explanation": "Store tasks remotely.",
            "backendSuggestion": "Firebase Firestore",
        },
    ],
}


class FakeLLM:
    """Records calls and plays back queued responses"""

    def __init__(self):
        self.responses = []
        self.chunks = []
        self.calls = []

    def queue(self, response):
        if isinstance(response, dict):
            response = json.dumps(response)
        self.responses.append(response)

    def next_response(self):
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config at a temp dir and drop any real API key"""
    monkeypatch.setenv("FLUTTER_FACTORY_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    ConfigManager.reset_instance()
    yield ConfigManager.get_instance()
    ConfigManager.reset_instance()


@pytest.fixture(autouse=True)
def empty_store():
    project_store.clear()
    yield project_store
    project_store.clear()


@pytest.fixture
def sample_project():
    return ProjectOutput.model_validate(SAMPLE_PROJECT)


@pytest.fixture
def fake_llm(monkeypatch):
    """Replace the Gemini calls on LLMService with a FakeLLM"""
    fake = FakeLLM()

    async def generate_structured(service, contents, system_instruction, response_schema):
        fake.calls.append(
            {
                "contents": contents,
                "system_instruction": system_instruction,
                "response_schema": response_schema,
            }
        )
        return fake.next_response()

    async def generate_response(service, prompt, context=None, system_instruction=None):
        fake.calls.append({"prompt": prompt, "context": context})
        return fake.next_response()

    async def generate_response_stream(service, prompt, context=None, system_instruction=None):
        fake.calls.append({"prompt": prompt, "context": context, "system_instruction": system_instruction})
        for chunk in fake.chunks:
            yield chunk

    monkeypatch.setattr(LLMService, "generate_structured", generate_structured)
    monkeypatch.setattr(LLMService, "generate_response", generate_response)
    monkeypatch.setattr(LLMService, "generate_response_stream", generate_response_stream)
    return fake


@pytest.fixture
def client():
    from main import app

    return TestClient(app)
