"""Shared fixtures for the extractor test suite."""

import json
from pathlib import Path

import pytest

from arb_extractor.ai.exceptions import TranslationError, TRANSPORT_FAILURE
from arb_extractor.config import API_KEY_ENV_VAR, CONFIG_ENV_VAR, resolve_config


class FakeAIService:
    """Stands in for AIService; prefixes the text with the target language."""

    def __init__(self, failing_languages=()):
        self.failing_languages = set(failing_languages)
        self.calls = []

    def translate_text(self, text, source_language, target_language):
        self.calls.append((text, source_language, target_language))
        if target_language in self.failing_languages:
            raise TranslationError("Gemini API request timeout", code=TRANSPORT_FAILURE)
        return f"[{target_language}] {text}"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """Keep tests away from a real config file and a real API key."""
    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_dir / "config.json"))
    monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)


@pytest.fixture
def workspace(tmp_path) -> Path:
    """Workspace root with an empty resource folder."""
    (tmp_path / "lib" / "l10n").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def arb_folder(workspace) -> Path:
    return workspace / "lib" / "l10n"


@pytest.fixture
def make_config(workspace):
    """Factory resolving a configuration rooted at the test workspace."""

    def _make(**overrides):
        raw = {
            "arb_folder_path": "lib/l10n",
            "auto_translate": False,
            "gemini": {"api_key": "test-key"},
        }
        raw.update(overrides)
        return resolve_config(raw, workspace_root=workspace)

    return _make


@pytest.fixture
def config(make_config):
    return make_config()


@pytest.fixture
def write_arb():
    """Write a dict as a resource file."""

    def _write(path: Path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def read_arb():
    def _read(path: Path):
        return json.loads(path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def fake_ai():
    return FakeAIService()


@pytest.fixture
def fake_ai_factory():
    return FakeAIService
