"""Prerequisite checks and running the management script's deployment."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Callable

from credential import Credential
from errors import DeploymentError, PrerequisiteError
from report import manual_deploy_command


def _nearest_existing(path: Path) -> Path:
    for candidate in (path, *path.parents):
        if candidate.exists():
            return candidate
    return Path("/")


def missing_tools(tools: tuple[str, ...] | list[str]) -> list[str]:
    return [tool for tool in tools if shutil.which(tool) is None]


def unwritable_dirs(dirs: list[Path]) -> list[Path]:
    """Directories that cannot be created or written by this process."""
    return [d for d in dirs if not os.access(_nearest_existing(d), os.W_OK)]


def check_prerequisites(tools: tuple[str, ...] | list[str], dirs: list[Path]) -> None:
    """Raise PrerequisiteError listing everything that is missing."""
    missing = missing_tools(tools)
    if missing:
        raise PrerequisiteError(
            f"Missing required tools: {' '.join(missing)}",
            hints=[
                "Install missing tools:",
                "  sudo apt update",
                f"  sudo apt install -y {' '.join(missing)}",
            ],
        )

    blocked = unwritable_dirs(dirs)
    if blocked:
        raise PrerequisiteError(
            "No write access to: " + ", ".join(str(d) for d in blocked),
            hints=["Run the initializer with sudo privileges"],
        )


def run_deployment(
    script: Path,
    credential: Credential,
    work_dir: Path,
    token_file: Path,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> None:
    """Run ``<script> --deploy`` with the token in the child's environment.

    Raises:
        DeploymentError: the script exited non-zero
    """
    env = dict(os.environ)
    env["GITHUB_TOKEN"] = credential.value
    proc = runner([str(script), "--deploy"], cwd=str(work_dir), env=env, check=False)
    if proc.returncode != 0:
        raise DeploymentError(
            proc.returncode, manual_deploy_command(script, token_file),
        )


def cleanup_work_files(paths: list[Path]) -> list[Path]:
    """Remove temporary files left in the work directory."""
    removed = []
    for path in paths:
        if path.is_file():
            path.unlink()
            removed.append(path)
    return removed
