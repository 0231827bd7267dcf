"""Extraction API routes."""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, jsonify, request

from arb_extractor.config import ConfigError
from arb_extractor.core.extraction import (
    STATUS_FAILED,
    ExtractionInputError,
    ExtractionService,
)
from arb_extractor.core.keys import generate_suggested_key
from arb_extractor.core.placeholders import detect_and_convert_placeholders
from arb_extractor.editing import strip_literal_quotes
from arb_extractor.logger import get_logger
from arb_extractor.prompts import DecisionRequired, ScriptedPrompter
from arb_extractor.web.context import ai_service, request_config
from arb_extractor.web.tasks import create_extraction_job

extraction_bp = Blueprint("extraction", __name__)
logger = get_logger(__name__)

DECISION_NAMES = {
    "key_exists": "key_conflict",
    "value_exists": "value_conflict",
}


def _selection(data: Dict[str, Any]) -> Optional[Tuple[int, int]]:
    start = data.get("selection_start")
    end = data.get("selection_end")
    if start is None and end is None:
        return None
    if not isinstance(start, int) or not isinstance(end, int) or isinstance(start, bool) or isinstance(end, bool):
        raise ExtractionInputError("selection_start and selection_end must be integers")
    return start, end


@extraction_bp.post("/placeholders")
def convert_placeholders():
    """Convert interpolations of a selection and suggest a key, without writing anything."""
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    text = data.get("text")
    if not isinstance(text, str):
        return jsonify({"error": "Field 'text' must be a string", "code": "invalid_input"}), 400

    info = detect_and_convert_placeholders(strip_literal_quotes(text))
    return jsonify({
        "arb_text": info.arb_text,
        "original_placeholders": info.original_placeholders,
        "arb_placeholders": info.arb_placeholders,
        "has_placeholders": info.has_placeholders,
        "suggested_key": generate_suggested_key(info.arb_text),
    })


@extraction_bp.post("/extract")
def extract_string():
    """
    Extract a string into the source resource file.

    Conflict decisions are taken from 'decisions'; a decision that is needed
    but missing is answered with 409 and the pending question, and nothing
    is written. Translation and the post-extraction command run as a
    background job when a value was written.
    """
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    text = data.get("text")
    if not isinstance(text, str):
        return jsonify({"error": "Field 'text' must be a string", "code": "invalid_input"}), 400

    decisions = data.get("decisions") or {}
    if not isinstance(decisions, dict):
        return jsonify({"error": "Field 'decisions' must be an object", "code": "invalid_input"}), 400

    try:
        config = request_config(data.get("workspace_root"))
    except ConfigError as e:
        logger.warning(f"Invalid configuration: {e}")
        return jsonify({"error": str(e), "code": "config_error"}), 400

    if "translate" in data:
        config = dataclasses.replace(config, auto_translate=bool(data["translate"]))

    answers = dict(decisions)
    if data.get("key") is not None:
        answers["key"] = data["key"]
    prompter = ScriptedPrompter(answers, strict=True)
    service = ExtractionService(config, prompter, ai_service=ai_service())

    source = data.get("source")
    try:
        selection = _selection(data) if isinstance(source, str) else None
        result = service.extract(text, source=source if selection else None, selection=selection)
    except DecisionRequired as e:
        question = e.question
        logger.info(f"Extraction paused: {question.message}")
        return jsonify({
            "error": question.message,
            "code": "decision_required",
            "decision": DECISION_NAMES[question.kind.value],
            "question": question.to_dict(),
        }), 409
    except ExtractionInputError as e:
        return jsonify({"error": str(e), "code": "invalid_input"}), 400

    payload = result.to_dict()
    if result.status == STATUS_FAILED:
        return jsonify(payload), 500

    if result.written and (config.auto_translate or config.post_extraction_command):
        job = create_extraction_job(service, result)
        payload["job_id"] = job.job_id
    else:
        payload["job_id"] = None

    return jsonify(payload)
