"""
AI Provider API Implementations

This module contains the API call implementation for the Gemini
generateContent endpoint. The function takes an AIService instance and a
prompt and returns the raw text of the first candidate.
"""

from typing import Any

import httpx

from arb_extractor.logger import get_logger
from arb_extractor.ai.exceptions import (
    TranslationError,
    TRANSPORT_FAILURE,
    HTTP_STATUS_FAILURE,
    NO_CANDIDATE_FAILURE,
    NOT_CONFIGURED,
)

logger = get_logger(__name__)

GENERATION_CONFIG = {
    "temperature": 0.2,  # Low temperature for predictable translations
    "topP": 0.8,
    "topK": 40,
    "maxOutputTokens": 1024,
}


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (read timeout) or a dict with
            connect, write, read, pool keys

    Returns:
        httpx.Timeout object
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 10.0),
            write=timeout_config.get('write', 60.0),
            read=timeout_config.get('read', 120.0),
            pool=timeout_config.get('pool', 10.0),
        )
    else:
        timeout_value = float(timeout_config) if timeout_config else 120.0
        return httpx.Timeout(
            connect=10.0,
            write=60.0,
            read=timeout_value,
            pool=10.0,
        )


def extract_error_message(response: httpx.Response) -> str:
    """Message from a structured '{"error": {"message": ...}}' body, else the raw body."""
    try:
        error_json = response.json()
    except ValueError:
        return response.text[:500]

    if isinstance(error_json, dict) and "error" in error_json:
        error_detail = error_json["error"]
        if isinstance(error_detail, dict) and error_detail.get("message"):
            return str(error_detail["message"])
        if isinstance(error_detail, str):
            return error_detail
    return response.text[:500]


def handle_http_error(e: httpx.HTTPStatusError, provider: str):
    """Handle HTTP errors with detailed messages."""
    status_code = e.response.status_code
    error_text = extract_error_message(e.response)

    raise TranslationError(
        f"{provider} API error ({status_code}): {error_text}",
        code=HTTP_STATUS_FAILURE,
        details={"status_code": status_code},
    )


def extract_candidate_text(result: Any) -> str:
    """Text of the first candidate part, or '' when the response carries none."""
    if not isinstance(result, dict):
        return ''
    candidates = result.get('candidates') or []
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ''
    content = candidates[0].get('content') or {}
    parts = content.get('parts') if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ''
    text = parts[0].get('text') or ''
    return text if isinstance(text, str) else ''


def call_gemini_api(service, prompt: str) -> str:
    """Call Gemini API."""
    config = service.config
    api_key = config.api_key
    model = config.model

    if not api_key:
        raise TranslationError(
            "Gemini API key not configured. Set it in config/config.json or the GEMINI_API_KEY environment variable",
            code=NOT_CONFIGURED,
        )

    url = f"{config.api_url.rstrip('/')}/{model}:generateContent"

    body = {
        "contents": [{
            "parts": [{
                "text": prompt
            }]
        }],
        "generationConfig": dict(GENERATION_CONFIG),
    }

    logger.debug(f"Calling Gemini API: {model}")

    try:
        httpx_timeout = get_httpx_timeout(config.timeout)
        with httpx.Client(timeout=httpx_timeout, transport=service.transport) as client:
            response = client.post(url, params={"key": api_key}, json=body)
            response.raise_for_status()

            try:
                result = response.json()
            except ValueError as e:
                raise TranslationError(
                    f"Failed to parse Gemini response: {e}. Raw data: {response.text[:500]}",
                    code=NO_CANDIDATE_FAILURE,
                )

            usage_metadata = result.get('usageMetadata', {}) if isinstance(result, dict) else {}
            if usage_metadata:
                logger.debug(f"Gemini usageMetadata: {usage_metadata}")

            text = extract_candidate_text(result)
            if not text.strip():
                finish_reason = None
                candidates = result.get('candidates') if isinstance(result, dict) else None
                if candidates and isinstance(candidates, list) and isinstance(candidates[0], dict):
                    finish_reason = candidates[0].get('finishReason')
                feedback = result.get('promptFeedback') if isinstance(result, dict) else None
                block_reason = feedback.get('blockReason') if isinstance(feedback, dict) else None
                reason = block_reason or finish_reason or "empty generation"
                raise TranslationError(
                    f"Gemini returned no usable translation ({reason})",
                    code=NO_CANDIDATE_FAILURE,
                    details={"reason": reason},
                )
            return text

    except httpx.HTTPStatusError as e:
        logger.error(f"Gemini API HTTP error: {e.response.status_code} - {e.response.text[:500]}")
        handle_http_error(e, "Gemini")
    except httpx.TimeoutException:
        raise TranslationError("Gemini API request timeout", code=TRANSPORT_FAILURE)
    except httpx.TransportError as e:
        raise TranslationError(f"Gemini request failed: {e}", code=TRANSPORT_FAILURE)
