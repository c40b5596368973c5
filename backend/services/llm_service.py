"""
LLM Service - Handles interactions with the Gemini API
"""

from __future__ import annotations

import asyncio
import json
import os
from contextlib import asynccontextmanager
from typing import Any

import aiohttp

from models.project import ImageData

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-2.5-flash"


class LLMAPIError(Exception):
    """Non-200 response from the Gemini API"""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


def image_part(image: ImageData) -> dict[str, Any]:
    """Build an inline image part for a Gemini request"""
    return {"inlineData": {"data": image.data, "mimeType": image.mime_type}}


def text_part(text: str) -> dict[str, Any]:
    return {"text": text}


class LLMService:
    """Service for interacting with Gemini"""

    def __init__(self, config: dict[str, Any]):
        self.config = config

    # ========== Config Helpers ==========

    def _get_gemini_config(self) -> tuple[str, str, str]:
        """Get Gemini config: (api_key, model, base_url). Raises if no api_key available."""
        cfg = self.config.get("gemini", {})
        api_key = cfg.get("apiKey") or os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
        if not api_key:
            raise ValueError("Gemini API key not configured")
        model = cfg.get("model", DEFAULT_MODEL)
        base_url = f"{GEMINI_BASE_URL}/{model}"
        return api_key, model, base_url

    # ========== Message/Payload Builders ==========

    def _build_prompt(self, prompt: str, context: str | None = None) -> str:
        """Build full prompt with optional context"""
        if context:
            return f"Context:\n{context}\n\nUser Request:\n{prompt}"
        return prompt

    def _build_gemini_payload(
        self,
        contents: list[dict[str, Any]],
        system_instruction: str | None = None,
        response_schema: dict[str, Any] | None = None,
        max_output_tokens: int = 32768,
        temperature: float | None = None,
    ) -> dict[str, Any]:
        """Build Gemini API request payload"""
        cfg = self.config.get("gemini", {})
        temp = temperature if temperature is not None else cfg.get("temperature", 0.7)
        model = cfg.get("model", DEFAULT_MODEL)

        payload: dict[str, Any] = {
            "contents": contents,
            "generationConfig": {
                "temperature": temp,
                "topP": 0.95,
                "maxOutputTokens": max_output_tokens,
            },
        }

        if system_instruction:
            payload["systemInstruction"] = {"parts": [text_part(system_instruction)]}

        if response_schema is not None:
            payload["generationConfig"]["responseMimeType"] = "application/json"
            payload["generationConfig"]["responseSchema"] = response_schema

        # Gemini 2.5 models have built-in "thinking"
        if "2.5" in model or "2-5" in model:
            payload["generationConfig"]["thinkingConfig"] = {"thinkingBudget": 8192}

        return payload

    async def _retry_with_backoff(self, operation, max_retries: int = 3):
        """Execute operation with exponential backoff retry logic"""
        for attempt in range(max_retries):
            try:
                return await operation()
            except asyncio.TimeoutError:
                if attempt < max_retries - 1:
                    wait_time = (2**attempt) * 3
                    print(
                        f"[LLMService] Request timeout. Retrying in {wait_time}s... "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    await asyncio.sleep(wait_time)
                    continue
                raise LLMAPIError(f"Gemini request timeout after {max_retries} retries")
            except LLMAPIError as e:
                # Rate limit (429)
                if e.status == 429:
                    if attempt < max_retries - 1:
                        wait_time = 40 + (attempt * 20)
                        print(
                            f"[LLMService] Rate limit hit. Waiting {wait_time}s before retry... "
                            f"(attempt {attempt + 1}/{max_retries})"
                        )
                        await asyncio.sleep(wait_time)
                        continue
                    raise LLMAPIError(
                        f"Rate limit exceeded after {max_retries} retries. "
                        "Please wait a minute and try again.",
                        status=429,
                    ) from e
                # Server overloaded (503)
                if e.status == 503 and attempt < max_retries - 1:
                    wait_time = (2**attempt) * 5
                    print(
                        f"[LLMService] Server overloaded. Retrying in {wait_time}s... "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    await asyncio.sleep(wait_time)
                    continue
                # Other API errors - fail immediately
                raise
            except aiohttp.ClientError as e:
                # Network errors - retry
                if attempt < max_retries - 1:
                    wait_time = (2**attempt) * 2
                    print(
                        f"[LLMService] Network error: {e}. Retrying in {wait_time}s... "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    await asyncio.sleep(wait_time)
                    continue
                raise

    @asynccontextmanager
    async def _request(
        self,
        url: str,
        payload: dict[str, Any],
        timeout_seconds: int = 120,
    ):
        """Context manager for HTTP POST requests with automatic session cleanup"""
        timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(url, json=payload) as response:
                if response.status == 429:
                    error_text = await response.text()
                    raise LLMAPIError(f"Gemini API rate limit (429): {error_text}", status=429)
                if response.status == 503:
                    error_text = await response.text()
                    raise LLMAPIError(f"Gemini API overloaded (503): {error_text}", status=503)
                if response.status != 200:
                    error_text = await response.text()
                    print(f"[LLMService] Gemini API Error ({response.status}): {error_text}")
                    raise LLMAPIError(f"Gemini API error: {error_text}", status=response.status)
                yield response

    async def _stream_response(self, url: str, payload: dict[str, Any], line_parser):
        """Stream response and yield parsed content"""
        async with self._request(url, payload, timeout_seconds=120) as response:
            async for line in response.content:
                line_text = line.decode("utf-8").strip()
                content = line_parser(line_text)
                if content:
                    yield content

    # ========== Response Parsers ==========

    def _extract_gemini_text(self, data: dict[str, Any]) -> str | None:
        """Extract text from Gemini response data, skipping thought parts"""
        candidates = data.get("candidates") or []
        if not candidates:
            return None
        parts = candidates[0].get("content", {}).get("parts") or []
        texts = [part["text"] for part in parts if "text" in part and not part.get("thought")]
        if not texts:
            return None
        return "".join(texts)

    def _parse_gemini_response(self, data: dict[str, Any]) -> str:
        """Parse Gemini API response format"""
        text = self._extract_gemini_text(data)
        if text is not None:
            return text
        raise LLMAPIError("No valid response from Gemini API")

    def _parse_sse_line(self, line_text: str) -> str | None:
        """Parse a single SSE line from the Gemini stream"""
        if not line_text.startswith("data: "):
            return None
        data_str = line_text[6:]
        if data_str == "[DONE]":
            return None
        try:
            data = json.loads(data_str)
        except json.JSONDecodeError:
            return None
        return self._extract_gemini_text(data)

    # ========== Public API ==========

    async def generate_response(
        self,
        prompt: str,
        context: str | None = None,
        system_instruction: str | None = None,
    ) -> str:
        """Generate a plain text response"""
        contents = [{"role": "user", "parts": [text_part(self._build_prompt(prompt, context))]}]
        payload = self._build_gemini_payload(contents, system_instruction)
        return await self._call_gemini(payload)

    async def generate_structured(
        self,
        contents: list[dict[str, Any]],
        system_instruction: str | None,
        response_schema: dict[str, Any],
    ) -> str:
        """Generate a JSON response constrained by response_schema; returns the raw JSON text"""
        payload = self._build_gemini_payload(contents, system_instruction, response_schema)
        return await self._call_gemini(payload)

    async def generate_response_stream(
        self,
        prompt: str,
        context: str | None = None,
        system_instruction: str | None = None,
    ):
        """Generate a streaming text response"""
        api_key, model, base_url = self._get_gemini_config()
        url = f"{base_url}:streamGenerateContent?key={api_key}&alt=sse"
        contents = [{"role": "user", "parts": [text_part(self._build_prompt(prompt, context))]}]
        payload = self._build_gemini_payload(contents, system_instruction)

        print(f"[LLMService] Streaming from Gemini model: {model}")
        async for content in self._stream_response(url, payload, self._parse_sse_line):
            yield content

    async def _call_gemini(self, payload: dict[str, Any], max_retries: int = 3) -> str:
        """Call Google Gemini API with retry logic"""
        api_key, model, base_url = self._get_gemini_config()
        print(f"[LLMService] Calling Gemini API with model: {model}")

        url = f"{base_url}:generateContent?key={api_key}"

        async def _execute_request():
            async with self._request(url, payload) as response:
                data = await response.json()
            response_text = self._parse_gemini_response(data)
            print(f"[LLMService] Received response from {model} (length: {len(response_text)} chars)")
            return response_text

        return await self._retry_with_backoff(_execute_request, max_retries)
