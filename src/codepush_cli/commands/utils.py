"""Shared plumbing for command implementations."""

import functools
from typing import Any, Callable, Optional, TypeVar

import typer
from rich.markup import escape

from ..config import settings
from ..core.constants import OUTPUT_FORMATS
from ..deployments.api_client import AppReference, DeploymentAPIClient
from ..exceptions import CLIError, ErrorCode
from ..utils.ux import print_error

F = TypeVar("F", bound=Callable[..., Any])


def handle_command_errors(func: F) -> F:
    """Turn a CLIError raised by a command into an error message and exit code."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except CLIError as e:
            print_error(e.message)
            raise typer.Exit(e.exit_code) from e

    return wrapper  # type: ignore[return-value]


def validate_output_format(format: Optional[str]) -> None:
    if format not in OUTPUT_FORMATS:
        raise CLIError(
            f"Invalid format '{escape(str(format))}'. Valid options are: {', '.join(OUTPUT_FORMATS)}",
            ErrorCode.INVALID_PARAMETER,
        )


def resolve_app(app: Optional[str]) -> AppReference:
    """Parse the --app option, which must look like owner/appname."""
    app_ref = AppReference.parse(app or "")
    if app_ref is None:
        raise CLIError(
            f"Invalid app '{escape(str(app))}'. Provide it in the form owner/appname with -a|--app option",
            ErrorCode.INVALID_PARAMETER,
        )
    return app_ref


def setup_authenticated_client(
    api_url: Optional[str] = None, api_key: Optional[str] = None
) -> DeploymentAPIClient:
    """Create a deployments client from CLI options, falling back to settings."""
    effective_api_key = api_key or settings.API_KEY
    if not effective_api_key:
        raise CLIError(
            "Must be logged in. Set the CODEPUSH_API_KEY environment variable or specify --api-key option.",
            ErrorCode.NOT_LOGGED_IN,
        )

    return DeploymentAPIClient(
        api_url=api_url or settings.API_BASE_URL, api_key=effective_api_key
    )
