"""Store a confirmed token where the next steps and later runs can find it.

Two copies are kept:
- scratch: ``<work_dir>/.<hostname>_token``, read by the download step and
  removed right after it
- durable: ``<token_dir>/.<hostname>_token``, kept across runs; the
  directory is mode 700 and the file is written atomically

Both files are mode 600.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from credential import Credential, clean_token

FILE_MODE = 0o600
DIR_MODE = 0o700


@dataclass
class PersistedPaths:
    scratch: Path
    durable: Path


def replace_file(path: Path, data: bytes, mode: int = FILE_MODE, sync: bool = False) -> None:
    """Write ``data`` to a fresh temp file beside ``path``, then rename over it.

    The temp name is unpredictable and created exclusively, and the rename
    replaces whatever sits at ``path`` (a planted symlink included) instead of
    writing through it.
    """
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=".", suffix=".tmp")
    try:
        try:
            os.fchmod(fd, mode)
            os.write(fd, data)
            if sync:
                os.fsync(fd)
        finally:
            os.close(fd)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def _write_private(path: Path, value: str) -> None:
    replace_file(path, (value + "\n").encode())


def _write_atomically(path: Path, value: str) -> None:
    replace_file(path, (value + "\n").encode(), sync=True)


def _holds(path: Path, value: str) -> bool:
    try:
        return clean_token(path.read_text(encoding="utf-8", errors="replace")) == value
    except FileNotFoundError:
        return False


class SecurePersistor:
    def __init__(self, scratch_path: Path, durable_path: Path):
        self.scratch_path = scratch_path
        self.durable_path = durable_path

    def ensure_secure_dir(self) -> Path:
        directory = self.durable_path.parent
        directory.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        os.chmod(directory, DIR_MODE)
        return directory

    def persist(self, credential: Credential) -> PersistedPaths:
        """Write the scratch copy and, unless it came from there, the durable one."""
        self.scratch_path.parent.mkdir(parents=True, exist_ok=True)
        _write_private(self.scratch_path, credential.value)

        if not (credential.trusted and credential.source == self.durable_path):
            self.ensure_secure_dir()
            _write_atomically(self.durable_path, credential.value)

        return PersistedPaths(scratch=self.scratch_path, durable=self.durable_path)

    def remove_scratch(self) -> bool:
        """Delete the scratch copy. Returns True if a file was removed."""
        try:
            self.scratch_path.unlink()
        except FileNotFoundError:
            return False
        return True

    def discard(self, credential: Credential) -> list[Path]:
        """Delete every stored copy of a rejected token.

        Only files holding exactly this token are removed, so a different
        token saved by an earlier run survives.
        """
        removed = []
        candidates = [self.scratch_path, self.durable_path]
        if credential.source is not None and credential.source not in candidates:
            candidates.append(credential.source)

        for path in candidates:
            if _holds(path, credential.value):
                path.unlink(missing_ok=True)
                removed.append(path)
        return removed
