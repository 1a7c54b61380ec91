"""
Shared pytest fixtures for DockWatch tests.

Fixtures provided:
- make_container: Factory for ContainerInfo snapshots
- mock_docker_client: Mock Docker SDK client
- fake_response: FakeResponse class for canned HTTP responses
- fake_session: Factory for a fake aiohttp session (token GET + manifest HEAD)

Note: Containers come from the Docker API and registry digests from the
network. Both are replaced here so tests never touch a daemon or registry.
"""

import json

import aiohttp
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from multidict import CIMultiDict

from models.container_models import ContainerInfo, ImageInfo


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse used as an async context manager"""

    def __init__(self, status: int = 200, body="", headers: dict = None, content_type: str = "application/json"):
        self.status = status
        # str or raw bytes; bytes are decoded as UTF-8 like aiohttp does for JSON bodies
        self._body = body
        self.headers = CIMultiDict(headers or {})
        self.content_type = content_type

    async def text(self, errors: str = "strict"):
        if isinstance(self._body, bytes):
            return self._body.decode("utf-8", errors)
        return self._body

    async def json(self):
        if self.content_type != "application/json":
            raise aiohttp.ContentTypeError(MagicMock(), (), message=f"unexpected mimetype: {self.content_type}")
        return json.loads(await self.text())

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """
    Records requests and replays canned responses.

    get() serves the token endpoint, head() the manifest endpoint.
    Passing an exception instance makes the call raise it.
    """

    def __init__(self, token_response=None, head_response=None):
        self.token_response = token_response
        self.head_response = head_response
        self.get_calls = []
        self.head_calls = []

    def get(self, url, params=None, headers=None):
        self.get_calls.append({"url": url, "params": params, "headers": headers})
        if isinstance(self.token_response, BaseException):
            raise self.token_response
        return self.token_response

    def head(self, url, headers=None):
        self.head_calls.append({"url": url, "headers": headers})
        if isinstance(self.head_response, BaseException):
            raise self.head_response
        return self.head_response


@pytest.fixture
def fake_response():
    """FakeResponse class, for building canned token/manifest responses"""
    return FakeResponse


@pytest.fixture
def fake_session():
    """
    Factory for FakeSession.

    Defaults to a valid token and a manifest HEAD carrying a digest.
    """
    def _make(token_response=None, head_response=None):
        if token_response is None:
            token_response = FakeResponse(200, '{"token": "test-token"}')
        if head_response is None:
            head_response = FakeResponse(200, headers={"Docker-Content-Digest": "sha256:latest"})
        return FakeSession(token_response, head_response)

    return _make


@pytest.fixture
def make_container():
    """
    Factory for container snapshots as produced by the inventory.

    Returns:
        Callable building a ContainerInfo with no update verdict
    """
    def _make(
        name: str = "web",
        repo_tags=("app:1.0",),
        digests=("app@sha256:aaa",),
        container_id: str = None,
        status: str = "running",
    ) -> ContainerInfo:
        return ContainerInfo(
            id=container_id or f"{name}-0123456789abcdef",
            name=f"/{name}",
            image=repo_tags[0] if repo_tags else "sha256:deadbeef",
            build_at=datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
            status=status,
            image_info=ImageInfo(
                id="sha256:0123456789abcdef",
                repo_tags=list(repo_tags),
                digests=list(digests),
                created="2024-01-10T08:30:00.000000000Z",
            ),
        )

    return _make


@pytest.fixture
def mock_docker_client():
    """
    Mock Docker SDK client for testing without real Docker daemon.

    Returns a MagicMock with the SDK methods DockWatch calls stubbed.
    """
    client = MagicMock()

    client.containers.list = MagicMock(return_value=[])

    mock_image = MagicMock()
    mock_image.attrs = {
        'Id': 'sha256:0123456789abcdef',
        'RepoTags': ['nginx:1.25'],
        'RepoDigests': ['nginx@sha256:aaa'],
        'Created': '2024-01-10T08:30:00.000000000Z',
    }
    client.images.get = MagicMock(return_value=mock_image)

    registry_data = MagicMock()
    registry_data.id = 'sha256:fallback'
    client.images.get_registry_data = MagicMock(return_value=registry_data)

    return client
