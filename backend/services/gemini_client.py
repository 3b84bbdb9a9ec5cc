"""Google Gemini API wrapper with error handling.

Every call is a single request bounded by ``settings.gemini_timeout_seconds``.
Failures of any kind are logged and reported as ``None``; callers decide
on the fallback value.
"""

import asyncio
import json
import logging
import re

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)

_client: genai.Client | None = None

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def reset_client() -> None:
    """Drop the cached client. Useful for testing."""
    global _client
    _client = None


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_json_text(text: str) -> dict | None:
    """Parse a model completion as a JSON object.

    Accepts fenced output and, failing a direct parse, the first ``{...}``
    block embedded in surrounding prose.
    """
    text = _strip_code_fences(text)
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        match = _JSON_BLOCK.search(text)
        if not match:
            logger.error("Gemini response contained no JSON object")
            return None
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            logger.error("Failed to parse Gemini response as JSON: %s", e)
            return None

    if not isinstance(data, dict):
        logger.error("Gemini JSON response was %s, expected an object", type(data).__name__)
        return None
    return data


async def generate_text(
    prompt: str,
    system_instruction: str | None = None,
    temperature: float = 0.7,
    max_output_tokens: int | None = None,
    json_output: bool = False,
) -> str | None:
    """Send a prompt to Gemini and return the stripped completion text."""
    client = get_client()
    if client is None:
        return None

    config = types.GenerateContentConfig(
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        system_instruction=system_instruction,
        response_mime_type="application/json" if json_output else None,
    )

    try:
        response = await asyncio.wait_for(
            client.aio.models.generate_content(
                model=settings.gemini_model,
                contents=prompt,
                config=config,
            ),
            timeout=settings.gemini_timeout_seconds,
        )
        text = (response.text or "").strip()
    except asyncio.TimeoutError:
        logger.error("Gemini request timed out after %.1fs", settings.gemini_timeout_seconds)
        return None
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None

    if not text:
        logger.warning("Gemini returned an empty completion")
        return None
    return text


async def generate_json(
    prompt: str,
    system_instruction: str | None = None,
    temperature: float = 0.3,
    max_output_tokens: int | None = 4096,
) -> dict | None:
    """Send a prompt to Gemini and parse the JSON response."""
    text = await generate_text(
        prompt,
        system_instruction=system_instruction,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        json_output=True,
    )
    if text is None:
        return None
    return parse_json_text(text)
