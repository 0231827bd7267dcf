"""Per-request access to the extractor configuration and collaborators."""

from pathlib import Path
from typing import Optional

from flask import current_app

from arb_extractor.config import ConfigError, ExtractorConfig, resolve_config

SETTINGS_KEY = "EXTRACTOR_SETTINGS"
AI_SERVICE_KEY = "EXTRACTOR_AI_SERVICE"


def request_config(workspace_root: Optional[str] = None) -> ExtractorConfig:
    """
    Resolve the application settings for one request.

    A workspace root sent by the client is resolved against the configured
    root and must stay inside it.

    Raises:
        ConfigError: If the settings are invalid or the workspace root is outside the configured one
    """
    settings = current_app.config[SETTINGS_KEY]
    configured = Path(settings.get("workspace_root") or Path.cwd()).resolve()

    root = None
    if workspace_root:
        root = (configured / workspace_root).resolve()
        if root != configured and configured not in root.parents:
            raise ConfigError(f"Workspace root '{workspace_root}' is outside {configured}")
    return resolve_config(settings, workspace_root=root)


def ai_service():
    """AI service injected into the app (tests), or None for the configured provider."""
    return current_app.config.get(AI_SERVICE_KEY)
