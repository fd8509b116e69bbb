#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the editor2docx library.

Every failure during a conversion surfaces as one of these exceptions; a
conversion never produces a partial document.

Exception Hierarchy
-------------------
- Editor2DocxError (base exception)

  - ValidationError (parameter/option validation)

  - ParseError (HTML input could not be turned into a node tree)

  - ImageResolutionError (image download or write failures)

  - SerializationError (DOCX assembly failures, build-state misuse)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class Editor2DocxError(Exception):
    """Base exception class for all editor2docx-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Editor2DocxError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ParseError(Editor2DocxError):
    """Exception raised when the HTML input cannot be parsed into a node tree.

    Parameters
    ----------
    message : str
        Description of the parsing error
    parsing_stage : str, optional
        Stage where parsing failed (e.g., "tokenizing", "tree_building")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parse error."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage


class ImageResolutionError(Editor2DocxError):
    """Exception raised when an image cannot be materialized on disk.

    Covers network failures for remote sources and filesystem failures for
    both remote and inline (base64) sources.

    Parameters
    ----------
    message : str
        Description of the failure
    source : str, optional
        The image source (URL or truncated data URI)
    file_path : str, optional
        Destination path the image was being written to
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        file_path: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the image resolution error."""
        super().__init__(message, original_error=original_error)
        self.source = source
        self.file_path = file_path


class SerializationError(Editor2DocxError):
    """Exception raised when the accumulated blocks cannot be written as DOCX.

    Parameters
    ----------
    message : str
        Description of the failure
    rendering_stage : str, optional
        Stage where serialization failed (e.g., "styles", "blocks", "save")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the serialization error."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage


class DependencyError(Editor2DocxError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    component_name : str
        Conversion stage requiring the packages ("html", "docx", "network")
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The import error that triggered this exception

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        if message is None:
            message_parts = []
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{component_name} requires the following packages: {pkg_list}")
            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{component_name} has version mismatches: {mismatch_str}")
            message = "\n".join(message_parts)

            all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
            if all_packages:
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message, original_error=original_import_error)
        self.component_name = component_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.original_import_error = original_import_error


__all__ = [
    "Editor2DocxError",
    "ValidationError",
    "ParseError",
    "ImageResolutionError",
    "SerializationError",
    "DependencyError",
]
