#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/editor2docx/images.py
"""Image materialization.

Resolves the ``src`` of an ``<img>`` to a file on disk so the DOCX assembler
can embed it. Two kinds of sources are supported:

- ``data:<mime>;base64,<payload>`` URIs, decoded and written directly;
- URLs, downloaded over HTTPS with httpx and streamed to disk.

File names are derived from the source (the first characters of the payload,
or the last URL path segment), not made unique per conversion: conversions
sharing an output directory may overwrite each other's images.

Notes
-----
TLS certificate verification for downloads is controlled by
``ConverterOptions.verify_tls`` and is **disabled by default**, matching the
editor backend this converter was written for. That default is security
sensitive; enable verification whenever the image hosts allow it.

"""

from __future__ import annotations

import base64
import binascii
import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit, urlunsplit

from editor2docx.constants import (
    BASE64_MARKER,
    DATA_URI_NAME_LENGTH,
    DATA_URI_PREFIX,
    DEFAULT_FILES_DIR,
    DEFAULT_USER_AGENT,
    DEPS_NETWORK,
    ENV_DISABLE_NETWORK,
    ENV_USER_AGENT,
    FILES_DIR_MODE,
    STREAM_CHUNK_SIZE,
)
from editor2docx.exceptions import ImageResolutionError
from editor2docx.options import ConverterOptions
from editor2docx.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


def _short(source: str, limit: int = 60) -> str:
    return source if len(source) <= limit else f"{source[:limit]}..."


def is_data_source(source: str) -> bool:
    """Return True if ``source`` is an inline (``data...``) image."""
    return source.startswith(DATA_URI_PREFIX)


def is_network_disabled() -> bool:
    """Check if network access is globally disabled via environment variable."""
    return os.getenv(ENV_DISABLE_NETWORK, "").lower() in ("true", "1", "yes", "on")


def get_files_path(path: str | os.PathLike[str] | None) -> Path:
    """Return the directory images are written to.

    ``None`` or an empty string gives ``files``. A path whose last component
    contains a dot is taken to be a file (e.g. the target ``.docx``) and its
    parent directory is returned.
    """
    files_path = Path(path) if path else Path(DEFAULT_FILES_DIR)
    if "." in files_path.name:
        return files_path.parent
    return files_path


def filename_from_source(source: str) -> str:
    """Derive the on-disk file name of an image from its source.

    Parameters
    ----------
    source : str
        A ``data:`` URI or a URL.

    Returns
    -------
    str
        For data URIs, the first seven payload characters (``/`` replaced by
        ``_``) plus the MIME subtype as extension, e.g. ``iVBORw0.png``. For
        URLs, the last path segment without query string or fragment.

    Raises
    ------
    ImageResolutionError
        If no file name can be derived.

    """
    if is_data_source(source):
        header, marker, payload = source.partition(BASE64_MARKER)
        mime_type = header.split(":", 1)[-1]
        if not marker or "/" not in mime_type or not payload:
            raise ImageResolutionError(f"Unsupported data URI: {_short(source)}", source=_short(source))
        extension = mime_type.split("/", 1)[1]
        name = payload[:DATA_URI_NAME_LENGTH].replace("/", "_")
        return f"{name}.{extension}"

    filename = source.split("/")[-1].split("#")[0].split("?")[0]
    if not filename:
        raise ImageResolutionError(f"Cannot derive a file name from image URL: {source}", source=source)
    return filename


def secure_url(source: str) -> str:
    """Force an image URL onto HTTPS.

    ``http://`` becomes ``https://`` and protocol-relative ``//host/...``
    URLs get the ``https:`` scheme.

    Raises
    ------
    ImageResolutionError
        For malformed or relative URLs, or schemes other than http(s).

    """
    try:
        parts = urlsplit(source)
    except ValueError as e:
        raise ImageResolutionError(f"Malformed image URL: {source}", source=source, original_error=e) from e
    if not parts.netloc:
        raise ImageResolutionError(f"Image URL has no host: {source}", source=source)
    if parts.scheme not in ("", "http", "https"):
        raise ImageResolutionError(f"Unsupported image URL scheme '{parts.scheme}': {source}", source=source)
    return urlunsplit(parts._replace(scheme="https"))


def _ensure_directory(directory: Path) -> None:
    try:
        directory.mkdir(mode=FILES_DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise ImageResolutionError(
            f"Cannot create image directory {directory}: {e}", file_path=str(directory), original_error=e
        ) from e


def _write_data_uri(source: str, file_path: Path) -> None:
    payload = source.partition(BASE64_MARKER)[2]
    try:
        image_data = base64.b64decode(payload)
    except (ValueError, binascii.Error) as e:
        raise ImageResolutionError(
            f"Invalid base64 image data: {e}", source=_short(source), file_path=str(file_path), original_error=e
        ) from e

    try:
        file_path.write_bytes(image_data)
    except OSError as e:
        file_path.unlink(missing_ok=True)
        raise ImageResolutionError(
            f"Failed to write image {file_path}: {e}", source=_short(source), file_path=str(file_path), original_error=e
        ) from e


def create_http_client(timeout: float, verify: bool, user_agent: str | None = None) -> Any:
    """Create the httpx client used for image downloads.

    Parameters
    ----------
    timeout : float
        Request timeout in seconds
    verify : bool
        Whether TLS certificates are verified
    user_agent : str or None
        User-Agent header; falls back to ``EDITOR2DOCX_USER_AGENT``, then to
        the built-in default

    Returns
    -------
    httpx.Client
        Client following redirects, no retries

    """
    import httpx

    effective_user_agent = user_agent or os.getenv(ENV_USER_AGENT) or DEFAULT_USER_AGENT
    return httpx.Client(
        timeout=timeout,
        verify=verify,
        follow_redirects=True,
        headers={"User-Agent": effective_user_agent},
    )


@requires_dependencies("network", DEPS_NETWORK)
def download_image(url: str, file_path: Path, options: ConverterOptions) -> None:
    """Stream the body of an HTTPS GET for ``url`` into ``file_path``.

    Raises
    ------
    ImageResolutionError
        If network access is disabled, the request fails, the server answers
        with an error status, the file cannot be written, or the download
        fails in any other way.

    """
    from httpx import HTTPError

    if is_network_disabled():
        raise ImageResolutionError(
            f"Network access is disabled via {ENV_DISABLE_NETWORK}; cannot fetch {url}", source=url
        )

    if not options.verify_tls:
        logger.debug(f"Fetching {url} without TLS certificate verification")

    try:
        with create_http_client(options.network_timeout, options.verify_tls, options.user_agent) as client:
            with client.stream("GET", url) as response:
                response.raise_for_status()
                with open(file_path, "wb") as fh:
                    for chunk in response.iter_bytes(chunk_size=STREAM_CHUNK_SIZE):
                        fh.write(chunk)
    except HTTPError as e:
        file_path.unlink(missing_ok=True)
        raise ImageResolutionError(
            f"HTTP request failed for {url}: {e}", source=url, file_path=str(file_path), original_error=e
        ) from e
    except OSError as e:
        file_path.unlink(missing_ok=True)
        raise ImageResolutionError(
            f"Failed to write image {file_path}: {e}", source=url, file_path=str(file_path), original_error=e
        ) from e
    except Exception as e:
        file_path.unlink(missing_ok=True)
        raise ImageResolutionError(
            f"Failed to download {url}: {e}", source=url, file_path=str(file_path), original_error=e
        ) from e


def materialize_image(
    source: str | None,
    output_dir: str | os.PathLike[str] | None = None,
    options: ConverterOptions | None = None,
) -> str:
    """Resolve an image source to a file on disk.

    Parameters
    ----------
    source : str
        The ``src`` of the image: a ``data:`` URI with a base64 payload, or a
        URL.
    output_dir : str, PathLike or None
        Destination, interpreted by ``get_files_path``. Created if missing.
    options : ConverterOptions, optional
        Network settings for downloads.

    Returns
    -------
    str
        Absolute path of the written file.

    Raises
    ------
    ImageResolutionError
        If the source is missing or malformed, or it cannot be written or
        downloaded.

    """
    if not source:
        raise ImageResolutionError("Image element has no src attribute")

    options = options or ConverterOptions()
    directory = get_files_path(output_dir)
    _ensure_directory(directory)
    file_path = directory / filename_from_source(source)

    if is_data_source(source):
        _write_data_uri(source, file_path)
        logger.debug(f"Wrote inline image to {file_path}")
    else:
        download_image(secure_url(source), file_path, options)
        logger.debug(f"Downloaded {source} to {file_path}")

    return str(file_path.resolve())


__all__ = [
    "create_http_client",
    "download_image",
    "filename_from_source",
    "get_files_path",
    "is_data_source",
    "is_network_disabled",
    "materialize_image",
    "secure_url",
]
