import asyncio
from types import SimpleNamespace

import pytest

from config import settings
from services import gemini_client
from services.gemini_client import generate_json, generate_text, parse_json_text


def _fake_client(handler):
    """Client stand-in exposing ``client.aio.models.generate_content``."""
    return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=handler)))


def _returning(text):
    async def handler(**kwargs):
        return SimpleNamespace(text=text)
    return handler


class TestParseJsonText:
    def test_plain_json(self):
        assert parse_json_text('{"score": 7}') == {"score": 7}

    def test_code_fenced_json(self):
        assert parse_json_text('```json\n{"score": 7}\n```') == {"score": 7}

    def test_json_embedded_in_prose(self):
        assert parse_json_text('Here you go: {"score": 3} hope it helps') == {"score": 3}

    def test_garbage(self):
        assert parse_json_text("no json here") is None

    def test_non_object(self):
        assert parse_json_text("[1, 2, 3]") is None


@pytest.mark.asyncio
async def test_generate_text_without_api_key():
    assert await generate_text("hello") is None


@pytest.mark.asyncio
async def test_generate_text_strips_completion(monkeypatch):
    monkeypatch.setattr(gemini_client, "get_client", lambda: _fake_client(_returning("  Sure thing.  ")))
    assert await generate_text("hello") == "Sure thing."


@pytest.mark.asyncio
async def test_generate_text_passes_model_and_prompt(monkeypatch):
    seen = {}

    async def handler(**kwargs):
        seen.update(kwargs)
        return SimpleNamespace(text="ok")

    monkeypatch.setattr(gemini_client, "get_client", lambda: _fake_client(handler))
    await generate_text("the prompt", system_instruction="be Dave", temperature=0.8)
    assert seen["model"] == settings.gemini_model
    assert seen["contents"] == "the prompt"
    assert seen["config"].temperature == 0.8


@pytest.mark.asyncio
async def test_generate_text_empty_completion(monkeypatch):
    monkeypatch.setattr(gemini_client, "get_client", lambda: _fake_client(_returning("")))
    assert await generate_text("hello") is None


@pytest.mark.asyncio
async def test_generate_text_api_error(monkeypatch):
    async def handler(**kwargs):
        raise RuntimeError("503 unavailable")

    monkeypatch.setattr(gemini_client, "get_client", lambda: _fake_client(handler))
    assert await generate_text("hello") is None


@pytest.mark.asyncio
async def test_generate_text_timeout(monkeypatch):
    async def handler(**kwargs):
        await asyncio.sleep(5)
        return SimpleNamespace(text="too late")

    monkeypatch.setattr(settings, "gemini_timeout_seconds", 0.01)
    monkeypatch.setattr(gemini_client, "get_client", lambda: _fake_client(handler))
    assert await generate_text("hello") is None


@pytest.mark.asyncio
async def test_generate_json(monkeypatch):
    monkeypatch.setattr(
        gemini_client, "get_client", lambda: _fake_client(_returning('```json\n{"score": 8}\n```'))
    )
    assert await generate_json("rate this") == {"score": 8}


@pytest.mark.asyncio
async def test_generate_json_malformed(monkeypatch):
    monkeypatch.setattr(gemini_client, "get_client", lambda: _fake_client(_returning("{not json")))
    assert await generate_json("rate this") is None
