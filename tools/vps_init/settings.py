"""Paths, URLs and limits for a VPS initialization run.

Every default mirrors the layout the management script expects on the
server; each one can be overridden from the command line.
"""

import socket
from dataclasses import dataclass, field
from pathlib import Path

from credential import StorageLocation

PRIVATE_REPO_RAW = "https://raw.githubusercontent.com/kunterbunt-edv/server-scripts/main"
MANAGEMENT_SCRIPT_PATH = "/common/scripts/manage-kubu-vps.sh"

WORK_DIR = Path("/tmp")
TOKEN_DIR = Path("/srv/tokens")
SCRIPT_DIR = Path("/srv/scripts")
WELCOME_SCRIPT = Path("/etc/profile.d/kubu-vps-startup.sh")

TOKEN_PREFIX = "ghp_"
FALLBACK_TOKEN_FILENAME = ".github_token"
MAX_ATTEMPTS = 3
DEFAULT_TIMEOUT = 15.0
DEFAULT_RETRY_BACKOFF = 1.0
REQUIRED_TOOLS = ("git",)


@dataclass
class Settings:
    raw_base_url: str = PRIVATE_REPO_RAW
    script_path: str = MANAGEMENT_SCRIPT_PATH
    work_dir: Path = WORK_DIR
    token_dir: Path = TOKEN_DIR
    script_dir: Path = SCRIPT_DIR
    welcome_script: Path = WELCOME_SCRIPT
    hostname: str = field(default_factory=socket.gethostname)
    token_prefix: str = TOKEN_PREFIX
    max_attempts: int = MAX_ATTEMPTS
    timeout: float = DEFAULT_TIMEOUT
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    proxy: str | None = None
    assume_yes: bool = False
    skip_deploy: bool = False

    @property
    def script_url(self) -> str:
        return self.raw_base_url.rstrip("/") + "/" + self.script_path.lstrip("/")

    @property
    def script_name(self) -> str:
        return self.script_path.rsplit("/", 1)[-1]

    @property
    def token_filename(self) -> str:
        return f".{self.hostname}_token"

    @property
    def scratch_token_path(self) -> Path:
        return self.work_dir / self.token_filename

    @property
    def durable_token_path(self) -> Path:
        return self.token_dir / self.token_filename

    @property
    def downloaded_script_path(self) -> Path:
        return self.work_dir / self.script_name

    @property
    def installed_script_path(self) -> Path:
        return self.script_dir / self.script_name

    def search_locations(self, cwd: Path | None = None) -> list[StorageLocation]:
        """Token discovery order: secure dir, cwd, scratch dir.

        Inside each directory the host-scoped name wins over the fallback.
        """
        cwd = cwd if cwd is not None else Path.cwd()
        locations = []
        for directory in (self.token_dir, cwd, self.work_dir):
            for filename in (self.token_filename, FALLBACK_TOKEN_FILENAME):
                locations.append(StorageLocation(
                    directory=directory,
                    filename=filename,
                    trusted=directory == self.token_dir,
                ))
        return locations
