"""Find a previously stored GitHub token on disk.

Search order:
1. Secure token directory (/srv/tokens), written after a successful run
2. Current working directory
3. Scratch directory (/tmp)

In each directory the host-scoped ``.<hostname>_token`` is tried before
the generic ``.github_token``.
"""

from credential import Credential, StorageLocation, clean_token
from errors import TokenFileError


class TokenLocator:
    def __init__(self, locations: list[StorageLocation]):
        self.locations = list(locations)

    def find(self) -> Credential | None:
        """Return the first stored token with non-empty content, or None.

        A missing or blank file is skipped. Errors reading a file that does
        exist (permission denied, unreadable directory) are not caught; content
        that is not UTF-8 text raises TokenFileError naming the file.
        """
        for location in self.locations:
            path = location.path
            if not path.is_file():
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                raise TokenFileError(path, "not UTF-8 text") from e
            value = clean_token(text)
            if value:
                return Credential(value, source=path, trusted=location.trusted)
        return None
