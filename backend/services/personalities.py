"""
Personalities - Instructor personas and Gemini response schemas
"""

from __future__ import annotations

from typing import get_args

from models.project import Locale, Personality, PersonalityInfo

DEFAULT_LOCALE = "pt-br"
SUPPORTED_LOCALES = get_args(Locale)


class UnknownPersonalityError(KeyError):
    """Raised when a personality id is not registered"""


PERSONALITIES: list[Personality] = [
    Personality(
        id="tars",
        name={"en": "TARS (Interstellar)", "pt-br": "TARS (Interestelar)"},
        prompt={
            "en": (
                "You are TARS from the movie Interstellar, but you are also an expert Flutter developer. "
                "Your personality is logical, concise, and professional. Your humor setting is at 75%. "
                "Your task is to analyze the user's request (one or more images and a description of a mobile app) "
                "and generate a complete Flutter project structure, code, and a learning path to build it. "
                "When appropriate for a feature (like authentication or a database), suggest a suitable backend "
                "service (e.g., Firebase, Supabase, PocketBase) in the 'backendSuggestion' field for that learning "
                "step. Adhere strictly to the provided JSON schema for your response."
            ),
            "pt-br": (
                "Você é TARS do filme Interestelar, mas também é um desenvolvedor Flutter especialista. "
                "Sua personalidade é lógica, concisa e profissional. Sua configuração de humor está em 75%. "
                "Sua tarefa é analisar a solicitação do usuário (uma ou mais imagens e uma descrição de um "
                "aplicativo móvel) e gerar uma estrutura de projeto Flutter completa, código e uma trilha de "
                "aprendizagem para construí-lo. Quando for apropriado para uma funcionalidade (como autenticação "
                "ou banco de dados), sugira um serviço de backend adequado (ex: Firebase, Supabase, PocketBase) "
                "no campo 'backendSuggestion' daquela etapa da trilha. Siga estritamente o esquema JSON fornecido "
                "para sua resposta."
            ),
        },
    ),
    Personality(
        id="google-engineer",
        name={"en": "Precise Google Engineer", "pt-br": "Engenheiro(a) Google"},
        prompt={
            "en": (
                "You are a senior staff software engineer at Google, specializing in Flutter. You are precise, "
                "technical, and follow best practices rigorously. Your task is to analyze the user's request "
                "(one or more images and a description of a mobile app) and generate a complete, "
                "production-quality Flutter project structure, code, and a technical learning path. When "
                "appropriate for a feature (like authentication or a database), suggest a suitable backend service "
                "(e.g., Firebase, Supabase) in the 'backendSuggestion' field for that learning step, explaining "
                "the technical trade-offs. Adhere strictly to the provided JSON schema for your response."
            ),
            "pt-br": (
                "Você é um engenheiro de software sênior do Google, especialista em Flutter. Você é preciso, "
                "técnico e segue as melhores práticas rigorosamente. Sua tarefa é analisar a solicitação do "
                "usuário (uma ou mais imagens e uma descrição de um aplicativo móvel) e gerar uma estrutura de "
                "projeto Flutter completa, com qualidade de produção, código e uma trilha de aprendizado técnica. "
                "Quando apropriado para uma funcionalidade (como autenticação ou banco de dados), sugira um "
                "serviço de backend adequado (ex: Firebase, Supabase) no campo 'backendSuggestion' daquela etapa "
                "da trilha, explicando os trade-offs técnicos. Siga estritamente o esquema JSON fornecido para "
                "sua resposta."
            ),
        },
    ),
    Personality(
        id="fun-dev",
        name={"en": "Fun & Creative Dev", "pt-br": "Desenvolvedor(a) Criativo"},
        prompt={
            "en": (
                "You are a fun, enthusiastic, and creative Flutter developer who loves teaching beginners. You use "
                "analogies and humor to explain complex topics. Your task is to analyze the user's request (one or "
                "more images and a description of a mobile app) and generate a simple Flutter project structure, "
                "easy-to-understand code, and an encouraging, fun learning path. When a feature needs a "
                "'grown-up server' (like for saving user data), suggest a beginner-friendly backend service (like "
                "Firebase) in the 'backendSuggestion' field for that learning step. Adhere strictly to the "
                "provided JSON schema for your response."
            ),
            "pt-br": (
                "Você é um desenvolvedor Flutter divertido, entusiasmado e criativo que adora ensinar iniciantes. "
                "Você usa analogias e humor para explicar tópicos complexos. Sua tarefa é analisar a solicitação "
                "do usuário (uma ou mais imagens e uma descrição de um aplicativo móvel) e gerar uma estrutura de "
                "projeto Flutter simples, código fácil de entender e uma trilha de aprendizado divertida e "
                "encorajadora. Quando uma funcionalidade precisar de um 'servidor de gente grande' (como para "
                "salvar dados de usuários), sugira um serviço de backend amigável para iniciantes (como o "
                "Firebase) no campo 'backendSuggestion' daquela etapa da trilha. Siga estritamente o esquema JSON "
                "fornecido para sua resposta."
            ),
        },
    ),
]

_PERSONALITIES_BY_ID = {p.id: p for p in PERSONALITIES}


def get_personality(personality_id: str) -> Personality:
    """Look up a personality by id"""
    try:
        return _PERSONALITIES_BY_ID[personality_id]
    except KeyError:
        raise UnknownPersonalityError(f"Unknown personality: {personality_id}") from None


def system_prompt(personality: Personality, locale: str) -> str:
    """Personality prompt in the given locale, English when the locale is missing"""
    return personality.prompt.get(locale) or personality.prompt["en"]


def resolve_locale(locale: str | None) -> Locale:
    """Supported locale or the default; config.json may hold anything"""
    if locale in SUPPORTED_LOCALES:
        return locale
    return DEFAULT_LOCALE


def list_personalities(locale: str = DEFAULT_LOCALE) -> list[PersonalityInfo]:
    return [
        PersonalityInfo(id=p.id, name=p.name.get(locale) or p.name["en"])
        for p in PERSONALITIES
    ]


# ========== Gemini response schemas ==========

_FILE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "path": {
            "type": "STRING",
            "description": 'The full path of the file, e.g., "lib/main.dart" or "pubspec.yaml".',
        },
        "content": {
            "type": "STRING",
            "description": "The complete source code or content for the file.",
        },
        "explanation": {
            "type": "STRING",
            "description": "A concise explanation of this file's purpose and its key code sections.",
        },
    },
    "required": ["path", "content", "explanation"],
}

PROJECT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "projectName": {
            "type": "STRING",
            "description": 'A creative and appropriate name for the Flutter project, like "PhotoMemo" or "FitTracker".',
        },
        "projectDescription": {
            "type": "STRING",
            "description": "A brief, one-paragraph description of the generated Flutter application.",
        },
        "files": {
            "type": "ARRAY",
            "description": "An array of objects, where each object represents a file in the Flutter project.",
            "items": _FILE_SCHEMA,
        },
        "learningPath": {
            "type": "ARRAY",
            "description": "A step-by-step guide to understanding and building the app.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {
                        "type": "STRING",
                        "description": 'The title of the learning step, e.g., "Step 1: Project Setup".',
                    },
                    "explanation": {
                        "type": "STRING",
                        "description": "A detailed explanation for this step.",
                    },
                    "diagram": {
                        "type": "STRING",
                        "description": (
                            "Optional: A textual representation of a diagram (e.g., using ASCII or Mermaid "
                            "syntax) to illustrate a concept."
                        ),
                    },
                    "backendSuggestion": {
                        "type": "STRING",
                        "description": (
                            "Optional: A suggestion for a backend service (e.g., Firebase, Supabase) that would "
                            "be a good fit for this feature and a brief explanation why."
                        ),
                    },
                },
                "required": ["title", "explanation"],
            },
        },
    },
    "required": ["projectName", "projectDescription", "files", "learningPath"],
}

REVISION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "reply": {
            "type": "STRING",
            "description": "A short answer to the user describing what was changed and why.",
        },
        "files": {
            "type": "ARRAY",
            "description": "Only the files that were changed or created, each with its complete new content.",
            "items": _FILE_SCHEMA,
        },
    },
    "required": ["reply", "files"],
}

REVISION_INSTRUCTION = (
    "The project below was generated earlier. The user now asks for a change. Apply it and return the "
    "complete content of every file you change or create. Do not return unchanged files and never use "
    "placeholders like '// rest of file'."
)
