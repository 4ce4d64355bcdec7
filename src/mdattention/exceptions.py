#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdattention library.

This module defines specialized exception classes for the error conditions
that can occur while configuring attention extensions and while running the
markdown, HTML and serializer hosts they plug into.

Exception Hierarchy
-------------------
- MdAttentionError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidConfigurationError (bad attention options)
    - InvalidOptionsError (wrong options class for a host)

  - ParsingError (token stream / HTML conversion failures)

  - RenderingError (markdown serialization failures)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class MdAttentionError(Exception):
    """Base exception class for all mdattention-specific errors.

    Catching this will catch all library-specific errors.

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


class ValidationError(MdAttentionError):
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

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

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


class InvalidConfigurationError(ValidationError):
    """Exception raised when attention options are missing or malformed.

    Raised at construction time, before any extension object is handed out,
    so that a bad node name or delimiter never reaches a host pipeline.

    Parameters
    ----------
    parameter_name : str
        Name of the offending option field
    parameter_value : any
        The rejected value
    message : str, optional
        Custom error message. If not provided, a generic one is generated

    """

    def __init__(self, parameter_name: str, parameter_value: Any, message: str | None = None):
        """Initialize the configuration error."""
        if message is None:
            message = f"Invalid attention option '{parameter_name}': {parameter_value!r}"
        super().__init__(message, parameter_name=parameter_name, parameter_value=parameter_value)


class InvalidOptionsError(ValidationError):
    """Exception raised when incorrect options class is provided to a host.

    Parameters
    ----------
    converter_name : str
        Name of the host that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(MdAttentionError):
    """Exception raised when a host cannot build an AST.

    The markdown bridge raises it when enter and exit events do not pair up,
    which always points at a tokenizer or extension fault rather than at the
    document.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        Where it happened (``"exit"`` for an unmatched close, ``"compile"``
        for nodes still open at the end of the document)
    construct : str, optional
        Construct name of the offending event
    original_error : Exception, optional
        The underlying exception, if any

    """

    def __init__(
        self,
        message: str,
        parsing_stage: str | None = None,
        construct: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage
        self.construct = construct


class RenderingError(MdAttentionError):
    """Exception raised when an AST cannot be serialized to markdown.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        ``"handle"`` for a node without handler, ``"construct"`` for a
        construct closed out of order
    node_type : str, optional
        Type of the node (or name of the construct) involved
    original_error : Exception, optional
        The underlying exception, if any

    """

    def __init__(
        self,
        message: str,
        rendering_stage: str | None = None,
        node_type: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage
        self.node_type = node_type


class DependencyError(MdAttentionError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the host requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The first ImportError encountered

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name.upper()} host requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name.upper()} host has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
