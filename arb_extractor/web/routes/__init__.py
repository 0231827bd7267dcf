"""Route blueprints for the web application."""

from .extraction import extraction_bp
from .languages import languages_bp
from .jobs import jobs_bp

__all__ = [
    "extraction_bp",
    "languages_bp",
    "jobs_bp",
]
