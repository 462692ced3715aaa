"""HTTPX client factory for the upstream abuse-contact directory."""

import dataclasses

import httpx


USER_AGENT = "findabuse-doh (+https://findabuse.email)"


def _default_headers() -> dict[str, str]:
    return {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }


@dataclasses.dataclass(slots=True)
class HttpConnectionOptions:
    """Options for configuring the HTTPX AsyncClient."""

    timeout: int = 5
    connect_timeout: int = 5
    read_timeout: int = 5
    max_connections: int = 20
    max_keepalive: int = 10
    keep_alive_expiry: int = 15
    follow_redirects: bool = False
    headers: dict[str, str] = dataclasses.field(default_factory=_default_headers)

    @classmethod
    def with_timeout(cls, timeout: int) -> "HttpConnectionOptions":
        return cls(timeout=timeout, connect_timeout=timeout, read_timeout=timeout)

    @property
    def httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            self.timeout,
            connect=self.connect_timeout,
            read=self.read_timeout,
        )

    @property
    def httpx_limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_keepalive,
            keepalive_expiry=self.keep_alive_expiry,
        )


def make_client(
    options: HttpConnectionOptions,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the shared AsyncClient.

    Args:
        options: Timeouts, limits and default headers.
        transport: Optional transport override (e.g. httpx.MockTransport).

    Returns:
        httpx.AsyncClient: Client the caller is responsible for closing.
    """
    return httpx.AsyncClient(
        timeout=options.httpx_timeout,
        headers=options.headers,
        limits=options.httpx_limits,
        follow_redirects=options.follow_redirects,
        transport=transport,
    )
