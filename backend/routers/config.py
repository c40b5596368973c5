"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from models.project import Locale
from services.config_manager import ConfigManager
from services.llm_service import LLMService
from services.personalities import UnknownPersonalityError, get_personality, resolve_locale

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    gemini: dict | None = None
    locale: Locale | None = None
    personality: str | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    gemini: dict
    locale: str
    personality: str


class ValidateResponse(BaseModel):
    """Validation response"""

    valid: bool
    message: str


def mask_key(key: str) -> str:
    """Mask an API key, keeping the first and last four characters"""
    if not key:
        return ""
    if len(key) <= 8:
        return "*" * len(key)
    return key[:4] + "*" * (len(key) - 8) + key[-4:]


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()

    gemini = config.get("gemini", {}).copy()
    gemini["apiKey"] = mask_key(gemini.get("apiKey", ""))

    return ConfigResponse(
        gemini=gemini,
        locale=resolve_locale(config.get("locale")),
        personality=config.get("personality", "tars"),
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    if request.gemini:
        current_gemini = current_config.get("gemini", {})
        gemini = dict(request.gemini)
        # A masked key echoed back from GET must not replace the stored one
        api_key = gemini.get("apiKey")
        if api_key and ("*" in api_key or api_key == mask_key(current_gemini.get("apiKey", ""))):
            del gemini["apiKey"]
        current_config["gemini"] = {**current_gemini, **gemini}
    if request.locale:
        current_config["locale"] = request.locale
    if request.personality:
        try:
            get_personality(request.personality)
        except UnknownPersonalityError as e:
            raise HTTPException(status_code=400, detail=e.args[0])
        current_config["personality"] = request.personality

    config_manager.save_config(current_config)

    return {"status": "success", "message": "Configuration updated"}


@router.post("/validate", response_model=ValidateResponse)
async def validate_config() -> ValidateResponse:
    """Validate current configuration by testing the Gemini connection"""
    config = ConfigManager.get_instance().get_config()

    try:
        llm_service = LLMService(config)
        response = await llm_service.generate_response("Say 'OK' if you can hear me.")
    except Exception as e:
        return ValidateResponse(valid=False, message=f"Connection failed: {e}")

    if response:
        return ValidateResponse(valid=True, message="Successfully connected to Gemini")
    return ValidateResponse(valid=False, message="Received empty response from Gemini")
