"""Target language API routes."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

import arb_extractor.language_codes as lc
from arb_extractor.config import ConfigError
from arb_extractor.logger import get_logger
from arb_extractor.project.scanner import find_target_languages
from arb_extractor.web.context import request_config

languages_bp = Blueprint("languages", __name__)
logger = get_logger(__name__)


@languages_bp.get("/languages")
def list_languages():
    """List the target languages found in the resource folder."""
    try:
        config = request_config(request.args.get("workspace_root"))
    except ConfigError as e:
        return jsonify({"error": str(e), "code": "config_error"}), 400

    scan = find_target_languages(config.arb_folder, config.file_name_pattern, config.source_language)
    return jsonify({
        "folder": str(scan.folder),
        "source_language": {
            "code": config.source_language,
            "name": lc.get_display_name(config.source_language),
            "file": config.source_file_name,
        },
        "languages": [
            {
                "code": code,
                "name": lc.get_display_name(code),
                "file": config.file_name_for(code),
            }
            for code in scan.languages
        ],
        "warning": scan.warning,
    })
