"""Pytest configuration and shared fixtures for the editor2docx test suite.

This module registers the suite's markers and provides fixtures for image
output directories and for mocking the HTTP layer used by image downloads.
"""

import logging
from pathlib import Path
from typing import Callable, Generator

import httpx
import pytest
from utils import MINIMAL_PNG_BYTES

from editor2docx.constants import ENV_DISABLE_NETWORK


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "docx: Tests that build or read .docx files with python-docx")
    config.addinivalue_line("markers", "network: Tests exercising the image download path (mocked)")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def _network_enabled(monkeypatch):
    """Keep a developer's EDITOR2DOCX_DISABLE_NETWORK out of the tests."""
    monkeypatch.delenv(ENV_DISABLE_NETWORK, raising=False)


@pytest.fixture
def files_dir(tmp_path) -> Path:
    """Provide a not-yet-existing directory for materialized images.

    Returns
    -------
    Path
        ``<tmp_path>/files``

    """
    return tmp_path / "files"


@pytest.fixture
def mock_http(monkeypatch) -> Generator[Callable, None, None]:
    """Route image downloads through an ``httpx.MockTransport``.

    The fixture yields an installer taking a request handler. Every client
    created by ``editor2docx.images.create_http_client`` afterwards uses that
    handler. The handler receives ``httpx.Request`` objects and returns
    ``httpx.Response`` objects. Requests seen are recorded on the installer's
    ``requests`` attribute.

    Examples
    --------
        >>> def test_download(mock_http):
        ...     mock_http(lambda request: httpx.Response(200, content=b"png"))

    """
    seen: list[httpx.Request] = []

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> None:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        def fake_client(timeout, verify, user_agent=None):
            install.client_args = {"timeout": timeout, "verify": verify, "user_agent": user_agent}
            return httpx.Client(transport=httpx.MockTransport(recording_handler), follow_redirects=True)

        monkeypatch.setattr("editor2docx.images.create_http_client", fake_client)

    install.requests = seen
    install.client_args = None
    yield install


@pytest.fixture
def png_server(mock_http):
    """Serve MINIMAL_PNG_BYTES for every request."""
    mock_http(lambda request: httpx.Response(200, content=MINIMAL_PNG_BYTES, headers={"Content-Type": "image/png"}))
    return mock_http


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Undo configure_logging() changes to the root and HTTP client loggers."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.NOTSET)
