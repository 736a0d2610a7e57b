"""Token value types shared by discovery, validation and persistence."""

from dataclasses import dataclass, field
from pathlib import Path

# Characters stripped from a token wherever it appears, like `tr -d '\n\r '`
_STRIP_TABLE = str.maketrans("", "", "\n\r ")


def clean_token(raw: str) -> str:
    """Remove newlines, carriage returns and spaces. Nothing else changes."""
    return raw.translate(_STRIP_TABLE)


def mask_token(value: str) -> str:
    """Short, non-secret rendering of a token for console output."""
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}…{value[-4:]}"


@dataclass(frozen=True)
class Credential:
    value: str
    source: Path | None = None
    trusted: bool = False

    def __repr__(self) -> str:
        return (
            f"Credential(value={mask_token(self.value)!r}, "
            f"source={self.source!r}, trusted={self.trusted})"
        )

    def has_prefix(self, prefix: str) -> bool:
        return self.value.startswith(prefix)

    @property
    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"token {self.value}"}


@dataclass(frozen=True)
class StorageLocation:
    directory: Path
    filename: str
    # Files in the secure directory were written only after a successful run
    trusted: bool = False

    @property
    def path(self) -> Path:
        return self.directory / self.filename


@dataclass
class AttemptCounter:
    ceiling: int = 3
    count: int = 0
    failures: list[str] = field(default_factory=list)

    @property
    def exhausted(self) -> bool:
        return self.count >= self.ceiling

    @property
    def remaining(self) -> int:
        return max(0, self.ceiling - self.count)

    def record_failure(self, reason: str = "") -> None:
        self.count += 1
        self.failures.append(reason)
