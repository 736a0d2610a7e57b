"""Download the management script from the private repository.

The token is read from the scratch file written by the persistor, the
script is saved to the work directory and made executable, and a copy is
installed into the scripts directory.
"""

import asyncio
import shutil
import stat
from pathlib import Path

import aiohttp

from credential import Credential, clean_token
from errors import DownloadError
from persistor import replace_file
from token_validator import make_connector

EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
SCRIPT_MODE = 0o755


def _make_executable(path: Path) -> None:
    path.chmod(path.stat().st_mode | EXEC_BITS)


async def fetch_script(
    token_file: Path,
    url: str,
    target: Path,
    timeout: float = 15.0,
    proxy: str | None = None,
) -> Path:
    """GET the script with the token from ``token_file`` and write it to ``target``.

    Raises:
        DownloadError: non-2xx response, connection error or timeout
    """
    credential = Credential(clean_token(token_file.read_text(encoding="utf-8")))
    target.parent.mkdir(parents=True, exist_ok=True)

    try:
        async with aiohttp.ClientSession(connector=make_connector(proxy)) as session:
            async with session.get(
                url,
                headers=credential.auth_headers,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise DownloadError(url, status=resp.status)
                body = await resp.read()
    except asyncio.TimeoutError:
        raise DownloadError(url, reason="timeout") from None
    except aiohttp.ClientError as e:
        raise DownloadError(url, reason=str(e) or type(e).__name__) from e

    replace_file(target, body, mode=SCRIPT_MODE)
    return target


def download_management_script(
    token_file: Path,
    url: str,
    target: Path,
    timeout: float = 15.0,
    proxy: str | None = None,
) -> Path:
    return asyncio.run(fetch_script(token_file, url, target, timeout, proxy))


def install_script(script: Path, script_dir: Path) -> Path:
    """Copy the downloaded script into ``script_dir`` and mark it executable."""
    script_dir.mkdir(parents=True, exist_ok=True)
    installed = script_dir / script.name
    shutil.copy2(script, installed)
    _make_executable(installed)
    return installed
