"""Web application package for the ARB extractor."""

from typing import Any, Dict, Optional

from flask import Flask

from arb_extractor.config import load_config, _merge


def create_app(config_overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Application factory for the HTTP surface.

    Args:
        config_overrides: Values merged over the loaded configuration file
    """
    settings = _merge(load_config(), config_overrides or {})

    from .app import build_app  # Import here to avoid circular imports

    return build_app(settings)


__all__ = ["create_app"]
