"""Post-extraction command runner (e.g. 'flutter gen-l10n')."""

import subprocess
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

from arb_extractor.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    command: str
    success: bool
    returncode: Optional[int]
    stdout: str = ""
    stderr: str = ""
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def run_post_extraction_command(command: str, cwd: Path, timeout: Optional[float] = None) -> CommandResult:
    """
    Run a shell command in the workspace root and capture its output.

    Never raises for command failures; the result carries success and output.
    """
    logger.info(f"Running command in {cwd}: {command}")
    try:
        completed = subprocess.run(
            command,
            shell=True,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.error(f"Command execution error: {e}")
        return CommandResult(command=command, success=False, returncode=None,
                             error=f"Command \"{command}\" failed: {e}")

    if completed.stdout:
        logger.debug(f"Command stdout:\n{completed.stdout}")
    if completed.stderr:
        logger.debug(f"Command stderr:\n{completed.stderr}")

    if completed.returncode != 0:
        error = (f"Command \"{command}\" failed with exit code {completed.returncode}. "
                 f"Stderr: {completed.stderr.strip() or 'N/A'}")
        logger.error(error)
        return CommandResult(command=command, success=False, returncode=completed.returncode,
                             stdout=completed.stdout, stderr=completed.stderr, error=error)

    logger.info(f"Command \"{command}\" executed successfully.")
    return CommandResult(command=command, success=True, returncode=0,
                         stdout=completed.stdout, stderr=completed.stderr)
