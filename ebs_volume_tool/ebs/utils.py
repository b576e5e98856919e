"""
Utility functions for EBS commands.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import json
from typing import Any, NoReturn

import click

from .constants import EXIT_ERROR, EXIT_NOT_FOUND, EXIT_TIMEOUT, EXIT_VALIDATION, NAME_TAG
from .exceptions import (
    AmbiguousResultError,
    CredentialsError,
    DecodeError,
    NotFoundError,
    RemoteError,
    ResourceFailedError,
    TransportError,
    ValidationError,
    WaitTimeoutError,
)
from .models import TagItem


def name_tags(name: str) -> list[TagItem]:
    """
    Build the tag list that identifies a named volume.

    Args:
        name: Value of the Name tag

    Returns:
        Single-element tag list
    """
    return [TagItem(NAME_TAG, name)]


def parse_tag(raw: str) -> TagItem:
    """
    Parse a KEY=VALUE tag argument.

    Args:
        raw: Tag in KEY=VALUE form

    Returns:
        Parsed tag

    Raises:
        ValidationError: If the tag has no '=' or an empty key
    """
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise ValidationError(f"Invalid tag '{raw}', expected KEY=VALUE")
    return TagItem(key, value)


def output_json(data: dict[str, Any] | list[Any], quiet: bool = False) -> None:
    """
    Output JSON to stdout.

    Args:
        data: Data to output as JSON
        quiet: If True, suppress output
    """
    if not quiet:
        click.echo(json.dumps(data, default=str))


def output_text(message: str, quiet: bool = False) -> None:
    """
    Output text to stdout.

    Args:
        message: Message to output
        quiet: If True, suppress output
    """
    if not quiet:
        click.echo(message)


def error_json(error: str, solution: str, exit_code: int) -> str:
    """
    Format error as a JSON line.

    Args:
        error: Error message
        solution: Solution suggestion
        exit_code: Exit code

    Returns:
        JSON-encoded error object
    """
    return json.dumps({"error": error, "solution": solution, "exit_code": exit_code})


def error_text(error: str, solution: str) -> str:
    """
    Format error as human-readable text.

    Args:
        error: Error message
        solution: Solution suggestion

    Returns:
        Formatted error message
    """
    return f"Error: {error}\n\nSolution: {solution}"


def exit_code_for(error: Exception) -> int:
    """Map an exception to the CLI exit code."""
    if isinstance(error, (ValidationError, CredentialsError)):
        return EXIT_VALIDATION
    if isinstance(error, NotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(error, WaitTimeoutError):
        return EXIT_TIMEOUT
    return EXIT_ERROR


def solution_for(error: Exception) -> str:
    """Suggest a next step for an exception."""
    if isinstance(error, CredentialsError):
        return "Configure AWS credentials (AWS_PROFILE or AWS_ACCESS_KEY_ID)"
    if isinstance(error, ValidationError):
        return "Check the command arguments"
    if isinstance(error, AmbiguousResultError):
        return "Make the Name tag unique or remove the duplicate volumes"
    if isinstance(error, NotFoundError):
        return "Check the name or id and the endpoint region"
    if isinstance(error, WaitTimeoutError):
        return "Re-run the command; the resource may still be provisioning"
    if isinstance(error, ResourceFailedError):
        return "Inspect the resource in the EC2 console and re-run"
    if isinstance(error, TransportError):
        return "Check network connectivity and the --endpoint URL"
    if isinstance(error, RemoteError):
        return "Check the request parameters and IAM permissions"
    if isinstance(error, DecodeError):
        return "Check that --endpoint points at an EC2 API"
    return "Re-run with -vv for details"


def exit_with_error(ctx: click.Context, error: Exception, text_format: bool = False) -> NoReturn:
    """
    Write an error to stderr and exit with the matching code.

    Args:
        ctx: Click context
        error: The raised exception
        text_format: If True, output as text; otherwise JSON
    """
    exit_code = exit_code_for(error)
    solution = solution_for(error)
    if text_format:
        click.echo(error_text(str(error), solution), err=True)
    else:
        click.echo(error_json(str(error), solution, exit_code), err=True)
    ctx.exit(exit_code)
