"""Check that a GitHub token can read the private repository.

Each probe:
1. Sends a HEAD request for the management script with the token header
2. Treats any 2xx as valid
3. Treats any other status, a connection error or a timeout as invalid

Nothing on the remote side is modified, and a probe never retries.
"""

import asyncio
from dataclasses import dataclass

import aiohttp
from aiohttp_socks import ProxyConnector

from credential import Credential


@dataclass
class ValidationResult:
    valid: bool = False
    status: int | None = None
    error: str = ""

    def describe(self) -> str:
        if self.status is not None:
            return f"HTTP {self.status}"
        return self.error or "unknown error"


def make_connector(proxy: str | None) -> aiohttp.BaseConnector | None:
    """SOCKS/HTTP proxy connector when a proxy URL is configured."""
    if proxy:
        return ProxyConnector.from_url(proxy)
    return None


async def probe(
    credential: Credential,
    url: str,
    timeout: float = 15.0,
    proxy: str | None = None,
) -> ValidationResult:
    """Issue one authenticated HEAD request and classify the response.

    Args:
        credential: Token to present
        url: Resource the token must be able to read
        timeout: Max seconds for the whole request
        proxy: Optional socks5:// or http:// proxy URL
    """
    result = ValidationResult()
    try:
        async with aiohttp.ClientSession(connector=make_connector(proxy)) as session:
            async with session.head(
                url,
                headers=credential.auth_headers,
                allow_redirects=True,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                result.status = resp.status
                result.valid = 200 <= resp.status < 300
    except asyncio.TimeoutError:
        result.error = "timeout"
    except aiohttp.ClientError as e:
        result.error = str(e) or type(e).__name__
    return result


class TokenValidator:
    def __init__(self, url: str, timeout: float = 15.0, proxy: str | None = None):
        self.url = url
        self.timeout = timeout
        self.proxy = proxy

    def validate(self, credential: Credential) -> ValidationResult:
        return asyncio.run(probe(credential, self.url, self.timeout, self.proxy))
