"""Background job API routes."""

from __future__ import annotations

from flask import Blueprint, jsonify

from arb_extractor.web.tasks import get_job, serialize_job

jobs_bp = Blueprint("jobs", __name__)


@jobs_bp.get("/<job_id>")
def get_job_status(job_id: str):
    """Return the state, progress and result of a background job."""
    job = get_job(job_id)
    if not job:
        return jsonify({"error": "Job not found", "code": "job_not_found"}), 404
    return jsonify(serialize_job(job))
