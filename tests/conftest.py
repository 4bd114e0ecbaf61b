"""
Shared fixtures: an httpx client whose transport is a recording stub.
"""
import httpx
import pytest


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests = []

        def recording_handler(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    @property
    def call_count(self):
        return len(self.requests)


@pytest.fixture
def make_client():
    """Build an AsyncClient backed by a RecordingTransport around *handler*."""

    def _make(handler):
        transport = RecordingTransport(handler)
        return httpx.AsyncClient(transport=transport), transport

    return _make
