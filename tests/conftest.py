"""pytest fixtures for testing."""

import base64

import dns.message
import httpx
import pytest
from fastapi.testclient import TestClient


class FakeUpstream:
    """Stand-in for the abuse-contact API behind an httpx.MockTransport.

    Responses are keyed by address; unknown addresses get an empty JSON
    object (no entry for the address).
    """

    def __init__(self):
        self.responses: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def set_contacts(self, address: str, contacts: list[str], success: bool = True):
        self.responses[address] = {
            address: {"success": success, "contacts": {"abuse": contacts}}
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        address = request.url.path.rsplit("/", 1)[-1]
        response = self.responses.get(address, {})
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def config():
    """Configuration pointing at a test upstream host."""
    from src.config import Config

    return Config(
        upstream_host="api.findabuse.test",
        upstream_timeout=5,
        listen_host="127.0.0.1",
        listen_port=8080,
        verbose=False,
    )


@pytest.fixture
def upstream():
    """Fake abuse-contact API."""
    return FakeUpstream()


@pytest.fixture
def doh_client(config, upstream):
    """TestClient for the application, wired to the fake upstream."""
    from src.main import create_app

    app = create_app(config, transport=upstream.transport)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def encode_query():
    """Encode a dnspython message as an unpadded base64url ?dns= value."""

    def _encode(message: dns.message.Message) -> str:
        return base64.urlsafe_b64encode(message.to_wire()).rstrip(b"=").decode("ascii")

    return _encode


@pytest.fixture
def txt_answers():
    """Flatten the TXT answers of a parsed reply to (name, ttl, data) tuples."""

    def _answers(reply: dns.message.Message) -> list[tuple[str, int, str]]:
        return [
            (
                rrset.name.to_text(omit_final_dot=True),
                rrset.ttl,
                b"".join(rdata.strings).decode("utf-8"),
            )
            for rrset in reply.answer
            for rdata in rrset
        ]

    return _answers
