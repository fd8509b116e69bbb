#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_images.py
"""Unit tests for image materialization.

Downloads never touch the network: ``create_http_client`` is replaced by a
client backed by ``httpx.MockTransport`` (see the ``mock_http`` fixture).

"""

from pathlib import Path

import httpx
import pytest
from utils import MINIMAL_PNG_BYTES, MINIMAL_PNG_DATA_URI, MINIMAL_PNG_FILENAME

from editor2docx.constants import ENV_DISABLE_NETWORK
from editor2docx.exceptions import ImageResolutionError
from editor2docx.images import (
    create_http_client,
    filename_from_source,
    get_files_path,
    is_data_source,
    is_network_disabled,
    materialize_image,
    secure_url,
)
from editor2docx.options import ConverterOptions


@pytest.mark.unit
class TestFilesPath:
    """Tests for get_files_path."""

    def test_default(self):
        assert get_files_path(None) == Path("files")
        assert get_files_path("") == Path("files")

    def test_directory(self):
        assert get_files_path("out/images") == Path("out/images")

    def test_file_path_uses_parent(self):
        assert get_files_path("out/report.docx") == Path("out")

    def test_pathlike(self, tmp_path):
        assert get_files_path(tmp_path / "imgs") == tmp_path / "imgs"


@pytest.mark.unit
class TestFilenameFromSource:
    """Tests for filename_from_source."""

    def test_data_uri(self):
        assert filename_from_source(MINIMAL_PNG_DATA_URI) == MINIMAL_PNG_FILENAME

    def test_data_uri_slashes_replaced(self):
        assert filename_from_source("data:image/jpeg;base64,ab/cd/efgh") == "ab_cd_e.jpeg"

    def test_data_uri_without_base64(self):
        with pytest.raises(ImageResolutionError):
            filename_from_source("data:image/svg+xml,<svg/>")

    def test_data_uri_without_payload(self):
        with pytest.raises(ImageResolutionError):
            filename_from_source("data:image/png;base64,")

    def test_url(self):
        assert filename_from_source("https://cdn.example.com/a/b/photo.jpg") == "photo.jpg"

    def test_url_query_and_fragment(self):
        assert filename_from_source("https://example.com/img/pic.png?size=large") == "pic.png"
        assert filename_from_source("https://example.com/img/pic.png#top") == "pic.png"

    def test_url_without_filename(self):
        with pytest.raises(ImageResolutionError):
            filename_from_source("https://example.com/img/")


@pytest.mark.unit
class TestSecureUrl:
    """Tests for secure_url."""

    def test_http_upgraded(self):
        assert secure_url("http://example.com/a.png") == "https://example.com/a.png"

    def test_https_unchanged(self):
        assert secure_url("https://example.com/a.png?x=1") == "https://example.com/a.png?x=1"

    def test_protocol_relative(self):
        assert secure_url("//example.com/a.png") == "https://example.com/a.png"

    def test_host_containing_http_is_not_mangled(self):
        assert secure_url("https://httpbin.example/a.png") == "https://httpbin.example/a.png"

    def test_relative_url_rejected(self):
        with pytest.raises(ImageResolutionError):
            secure_url("images/a.png")

    def test_other_scheme_rejected(self):
        with pytest.raises(ImageResolutionError):
            secure_url("ftp://example.com/a.png")

    def test_malformed_url_rejected(self):
        with pytest.raises(ImageResolutionError) as exc_info:
            secure_url("http://[::1/a.png")
        assert isinstance(exc_info.value.original_error, ValueError)


@pytest.mark.unit
class TestHelpers:
    """Tests for small helpers."""

    def test_is_data_source(self):
        assert is_data_source(MINIMAL_PNG_DATA_URI)
        assert not is_data_source("https://example.com/a.png")

    @pytest.mark.parametrize("value, expected", [("1", True), ("true", True), ("YES", True), ("0", False), ("", False)])
    def test_is_network_disabled(self, monkeypatch, value, expected):
        monkeypatch.setenv(ENV_DISABLE_NETWORK, value)
        assert is_network_disabled() is expected

    def test_create_http_client(self, monkeypatch):
        monkeypatch.delenv("EDITOR2DOCX_USER_AGENT", raising=False)
        with create_http_client(5.0, verify=False) as client:
            assert client.follow_redirects
            assert client.timeout.read == 5.0
            assert client.headers["User-Agent"] == "editor2docx-fetcher/1.0"

    def test_create_http_client_user_agent_env(self, monkeypatch):
        monkeypatch.setenv("EDITOR2DOCX_USER_AGENT", "custom/2.0")
        with create_http_client(5.0, verify=True) as client:
            assert client.headers["User-Agent"] == "custom/2.0"


@pytest.mark.unit
class TestMaterializeDataUri:
    """Tests for inline images."""

    def test_writes_decoded_bytes(self, files_dir):
        path = materialize_image(MINIMAL_PNG_DATA_URI, files_dir)

        assert Path(path).is_absolute()
        assert Path(path).name == MINIMAL_PNG_FILENAME
        assert Path(path).read_bytes() == MINIMAL_PNG_BYTES

    def test_creates_nested_directory(self, tmp_path):
        target = tmp_path / "a" / "b"
        materialize_image(MINIMAL_PNG_DATA_URI, target)
        assert (target / MINIMAL_PNG_FILENAME).exists()

    def test_file_path_output_dir(self, tmp_path):
        path = materialize_image(MINIMAL_PNG_DATA_URI, tmp_path / "report.docx")
        assert Path(path).parent == tmp_path.resolve()

    def test_default_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = materialize_image(MINIMAL_PNG_DATA_URI)
        assert Path(path) == (tmp_path / "files" / MINIMAL_PNG_FILENAME).resolve()

    def test_invalid_base64(self, files_dir):
        with pytest.raises(ImageResolutionError):
            materialize_image("data:image/png;base64,abcde", files_dir)

    def test_missing_source(self, files_dir):
        with pytest.raises(ImageResolutionError):
            materialize_image(None, files_dir)
        with pytest.raises(ImageResolutionError):
            materialize_image("", files_dir)

    def test_same_source_overwrites(self, files_dir):
        first = materialize_image(MINIMAL_PNG_DATA_URI, files_dir)
        second = materialize_image(MINIMAL_PNG_DATA_URI, files_dir)
        assert first == second
        assert len(list(files_dir.iterdir())) == 1


@pytest.mark.unit
@pytest.mark.network
class TestMaterializeUrl:
    """Tests for downloaded images."""

    def test_download(self, files_dir, png_server):
        path = materialize_image("http://example.com/images/logo.png?v=2", files_dir)

        assert Path(path).name == "logo.png"
        assert Path(path).read_bytes() == MINIMAL_PNG_BYTES
        assert len(png_server.requests) == 1
        request = png_server.requests[0]
        assert request.url.scheme == "https"
        assert request.url.host == "example.com"
        assert request.url.path == "/images/logo.png"

    def test_client_settings_from_options(self, files_dir, png_server):
        options = ConverterOptions(verify_tls=True, network_timeout=3.0, user_agent="agent/1")
        materialize_image("https://example.com/a.png", files_dir, options)
        assert png_server.client_args == {"timeout": 3.0, "verify": True, "user_agent": "agent/1"}

    def test_tls_verification_off_by_default(self, files_dir, png_server):
        materialize_image("https://example.com/a.png", files_dir)
        assert png_server.client_args["verify"] is False

    def test_redirect_followed(self, files_dir, mock_http):
        def handler(request):
            if request.url.path == "/old.png":
                return httpx.Response(302, headers={"Location": "https://example.com/new.png"})
            return httpx.Response(200, content=MINIMAL_PNG_BYTES)

        mock_http(handler)
        path = materialize_image("https://example.com/old.png", files_dir)

        assert Path(path).name == "old.png"
        assert Path(path).read_bytes() == MINIMAL_PNG_BYTES
        assert [request.url.path for request in mock_http.requests] == ["/old.png", "/new.png"]

    def test_error_status_removes_file(self, files_dir, mock_http):
        mock_http(lambda request: httpx.Response(404, content=b"not found"))

        with pytest.raises(ImageResolutionError) as exc_info:
            materialize_image("https://example.com/missing.png", files_dir)

        assert exc_info.value.source == "https://example.com/missing.png"
        assert isinstance(exc_info.value.original_error, httpx.HTTPStatusError)
        assert not (files_dir / "missing.png").exists()

    def test_connection_error(self, files_dir, mock_http):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        mock_http(handler)
        with pytest.raises(ImageResolutionError, match="HTTP request failed"):
            materialize_image("https://example.com/a.png", files_dir)
        assert not (files_dir / "a.png").exists()

    def test_non_http_error_is_wrapped(self, files_dir, mock_http):
        def handler(request):
            raise httpx.InvalidURL("bad host")

        mock_http(handler)
        with pytest.raises(ImageResolutionError, match="Failed to download") as exc_info:
            materialize_image("https://example.com/a.png", files_dir)
        assert isinstance(exc_info.value.original_error, httpx.InvalidURL)
        assert not (files_dir / "a.png").exists()

    def test_network_disabled(self, files_dir, png_server, monkeypatch):
        monkeypatch.setenv(ENV_DISABLE_NETWORK, "1")

        with pytest.raises(ImageResolutionError, match="disabled"):
            materialize_image("https://example.com/a.png", files_dir)
        assert png_server.requests == []

    def test_relative_url(self, files_dir, png_server):
        with pytest.raises(ImageResolutionError):
            materialize_image("images/a.png", files_dir)
        assert png_server.requests == []
