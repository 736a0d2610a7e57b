"""Failure kinds of an initialization run and the exit status of each.

Every error carries operator-facing remediation hints. Hints never contain
the token itself.
"""

from enum import IntEnum
from pathlib import Path


class ExitStatus(IntEnum):
    """Process exit codes.

    A cancellation exits 3 rather than 0 so wrapper scripts can tell "operator
    said no" apart from a finished run. Shell callers using ``set -e`` or ``&&``
    therefore see it as a failure; the console message stays neutral.
    """

    SUCCESS = 0
    FAILURE = 1
    ACQUISITION_EXHAUSTED = 2
    USER_CANCELLED = 3


class VpsInitError(Exception):
    """Base class for fatal errors surfaced to the operator."""

    exit_status = ExitStatus.FAILURE

    def __init__(self, message: str, hints: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.hints = list(hints or [])


class AcquisitionExhausted(VpsInitError):
    exit_status = ExitStatus.ACQUISITION_EXHAUSTED

    def __init__(self, attempts: int):
        super().__init__(
            f"No valid GitHub token after {attempts} attempts",
            hints=[
                "Check that the token has not expired or been revoked",
                "The token needs the 'repo' scope (full control of private repositories)",
                "Create the token while logged in with the admin account",
            ],
        )
        self.attempts = attempts


class PrerequisiteError(VpsInitError):
    pass


class TokenFileError(VpsInitError):
    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot read stored token {path} ({reason})",
            hints=[
                "The file is not a plain-text UTF-8 token",
                "Remove it (or fix its content) and run again:",
                f"  rm {path}",
            ],
        )
        self.path = path


class DownloadError(VpsInitError):
    def __init__(self, url: str, status: int | None = None, reason: str = ""):
        detail = f"HTTP {status}" if status is not None else (reason or "network error")
        super().__init__(
            f"Failed to download management script ({detail})",
            hints=[
                "Invalid GitHub token",
                "Token lacks 'repo' scope",
                "Network connectivity issues",
                "Repository URL changed",
                f"URL: {url}",
            ],
        )
        self.url = url
        self.status = status


class DeploymentError(VpsInitError):
    def __init__(self, returncode: int, manual_command: str):
        super().__init__(
            f"Deployment failed with exit code {returncode}",
            hints=[
                "The management script was kept for a manual retry:",
                f"  {manual_command}",
            ],
        )
        self.returncode = returncode


class UserCancelled(Exception):
    """The operator declined or aborted a prompt. Not an error."""

    exit_status = ExitStatus.USER_CANCELLED

    def __init__(self, message: str = "Initialization cancelled."):
        super().__init__(message)
        self.message = message
