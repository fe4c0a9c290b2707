import httpx
import pytest


class RecordingTransport(httpx.MockTransport):
    """Mock transport that records every request and replies with a canned response."""

    def __init__(self, response: httpx.Response | None = None):
        self.requests: list[httpx.Request] = []
        self.response = response or httpx.Response(200)
        self._error: Exception | None = None
        super().__init__(self._handle)

    def simulate_error(self, error: Exception) -> None:
        """Raise ``error`` instead of answering."""
        self._error = error

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return self.response

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport(
        httpx.Response(200, json={"access_token": "abc", "token_type": "bearer"})
    )


@pytest.fixture
async def http_client(transport: RecordingTransport):
    async with httpx.AsyncClient(transport=transport) as client:
        yield client
