"""
Background jobs for the part of an extraction that may take long:
translation into every target language and the post-extraction command.
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from arb_extractor.core.extraction import ExtractionResult, ExtractionService
from arb_extractor.logger import get_logger
from arb_extractor.translation.progress import TranslationProgress

logger = get_logger(__name__)


@dataclass
class JobState:
    """In-memory representation of an asynchronous job."""

    job_id: str
    key: str
    state: str = "pending"  # pending|running|completed|failed
    created_at: float = field(default_factory=time.time)
    started_at: Optional[float] = None
    finished_at: Optional[float] = None
    progress: Dict[str, Any] = field(default_factory=dict)
    progress_history: List[Dict[str, Any]] = field(default_factory=list)
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    last_update: float = field(default_factory=time.time)

    @property
    def finished(self) -> bool:
        return self.state in ("completed", "failed")

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["finished"] = self.finished
        return payload


_jobs: Dict[str, JobState] = {}
_jobs_lock = threading.Lock()
_JOB_RETENTION_SECONDS = 600  # Retain job info for 10 minutes after completion


def create_extraction_job(service: ExtractionService, extraction: ExtractionResult) -> JobState:
    """
    Launch translation and the post-extraction command for a written value.

    Args:
        service: Service that performed the extraction
        extraction: Result of ExtractionService.extract with status 'extracted'

    Returns:
        JobState for the new job (already registered and running in background).
    """
    job_id = uuid.uuid4().hex
    job_state = JobState(job_id=job_id, key=extraction.key)

    with _jobs_lock:
        _cleanup_jobs_locked()
        _jobs[job_id] = job_state

    thread = threading.Thread(
        target=_run_extraction_job,
        args=(job_state, service, extraction),
        name=f"extraction-job-{job_id}",
        daemon=True,
    )
    thread.start()
    logger.info(f"Extraction job {job_id} started for key \"{extraction.key}\"")
    return job_state


def get_job(job_id: str) -> Optional[JobState]:
    """Fetch a job by ID (if still retained)."""
    with _jobs_lock:
        job = _jobs.get(job_id)
        if job and job.finished_at and (time.time() - job.finished_at) > _JOB_RETENTION_SECONDS:
            # Expired; remove
            _jobs.pop(job_id, None)
            return None
        return job


def serialize_job(job: JobState) -> Dict[str, Any]:
    """Convert JobState into JSON-safe dict."""
    with _jobs_lock:
        return job.to_dict()


def _run_extraction_job(job: JobState, service: ExtractionService, extraction: ExtractionResult):
    """Worker function executed in a background thread."""
    job.state = "running"
    job.started_at = time.time()
    job.last_update = job.started_at

    def on_progress(progress: TranslationProgress):
        with _jobs_lock:
            serialized = progress.to_dict()
            job.progress = serialized
            job.progress_history.append(serialized)
            job.last_update = time.time()

    try:
        result = service.finish(extraction, progress_callback=on_progress)
        with _jobs_lock:
            job.result = result.to_dict()
            job.state = "completed"
            job.finished_at = time.time()
            job.last_update = job.finished_at
        logger.info(f"Extraction job {job.job_id} finished for key \"{job.key}\"")
    except Exception as exc:
        error_type = type(exc).__name__
        with _jobs_lock:
            job.state = "failed"
            job.error = f"{error_type}: {exc}"
            job.finished_at = time.time()
            job.last_update = job.finished_at
        logger.exception(f"✗ Extraction job {job.job_id} failed for key \"{job.key}\": {error_type}: {exc}")


def _cleanup_jobs_locked():
    """Remove completed jobs that exceeded retention period (call with lock held)."""
    now = time.time()
    expired = [
        job_id
        for job_id, job in _jobs.items()
        if job.finished_at and (now - job.finished_at) > _JOB_RETENTION_SECONDS
    ]
    for job_id in expired:
        _jobs.pop(job_id, None)
