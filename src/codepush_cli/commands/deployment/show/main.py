"""Deployment show command implementation."""

import json
import logging
from typing import List, Optional, Sequence, Union

import httpx
import typer
import yaml
from rich.markup import escape

from ....config import settings
from ....core.concurrency import promise_map
from ....core.constants import (
    ENV_API_BASE_URL,
    ENV_API_KEY,
    ENV_APP,
    METRICS_FETCH_CONCURRENCY,
    SCRIPT_NAME,
)
from ....core.utils import run_async
from ....deployments.api_client import AppReference, Deployment, DeploymentAPIClient
from ....deployments.metrics import (
    NO_INSTALLS_RECORDED,
    NO_UPDATES_RELEASED,
    aggregate_metrics,
    find_release_metric,
    generate_metadata_string,
    generate_metrics_string,
    total_active,
)
from ....exceptions import CLIError, ErrorCode
from ....utils.ux import console, print_table, progress
from ...utils import (
    handle_command_errors,
    resolve_app,
    setup_authenticated_client,
    validate_output_format,
)

logger = logging.getLogger("codepush-cli")

TABLE_TITLES = ["Name", "Update Metadata", "Install Metrics"]

DISPLAY_KEY_NOTE = "Note: To display deployment keys add -k|--displayKey option"


@handle_command_errors
def show_deployment(
    deployment_name: str = typer.Option(
        ...,
        "--deploymentName",
        "-d",
        help="Specifies the deployment name",
    ),
    display_key: bool = typer.Option(
        False,
        "--displayKey",
        "-k",
        help="Specifies whether to display the deployment key",
    ),
    app: Optional[str] = typer.Option(
        settings.APP,
        "--app",
        "-a",
        help="App to act on, in the form owner/appname. Defaults to CODEPUSH_APP environment variable.",
        envvar=ENV_APP,
    ),
    format: Optional[str] = typer.Option(
        "text", "--format", help="Output format (text|json|yaml)"
    ),
    api_url: Optional[str] = typer.Option(
        settings.API_BASE_URL,
        "--api-url",
        help="API base URL. Defaults to CODEPUSH_API_BASE_URL environment variable.",
        envvar=ENV_API_BASE_URL,
    ),
    api_key: Optional[str] = typer.Option(
        settings.API_KEY,
        "--api-key",
        help="API token for authentication. Defaults to CODEPUSH_API_KEY environment variable.",
        envvar=ENV_API_KEY,
    ),
) -> None:
    """Show a deployment of an app with its latest release and install metrics.

    Examples:

        codepush deployment show -a contoso/app -d Staging

        codepush deployment show -a contoso/app -d Production --displayKey

        codepush deployment show -a contoso/app -d Production --format json
    """
    validate_output_format(format)
    app_ref = resolve_app(app)
    client = setup_authenticated_client(api_url, api_key)
    run_async(
        get_deployment_by_name(
            client, app_ref, deployment_name, display_key=display_key, format=format
        )
    )


async def get_deployment_by_name(
    client: DeploymentAPIClient,
    app: AppReference,
    deployment_name: Optional[str],
    display_key: bool = False,
    format: str = "text",
) -> None:
    """Print the key, the summary table or the record of one deployment.

    Raises:
        CLIError: If the name is missing, no deployment has that name, or the
            API could not be reached.
    """
    # Reported with the generic EXCEPTION code, not INVALID_PARAMETER.
    if deployment_name is None or len(deployment_name) == 0:
        raise CLIError(
            "Deployment name is missing provide a value for -d|--deploymentName option"
        )

    try:
        with progress("Getting CodePush deployments..."):
            deployments = await client.list_deployments(app)
    except Exception as e:
        raise _fetch_error(app, e) from e

    deployment = next((d for d in deployments if d.name == deployment_name), None)
    if deployment is None:
        raise CLIError(
            "Deployment not found, please check the value of -d|--deploymentName option"
        )

    if display_key:
        print(deployment.key)
        return

    try:
        with progress("Getting CodePush deployments metrics..."):
            info = await generate_info(client, app, [deployment], format)
    except Exception as e:
        raise _fetch_error(app, e) from e

    if format == "json":
        print(json.dumps([d.model_dump(mode="json") for d in info], indent=2))
    elif format == "yaml":
        print(
            yaml.dump(
                [d.model_dump(mode="json") for d in info],
                default_flow_style=False,
                sort_keys=False,
            )
        )
    else:  # text format
        console.print(DISPLAY_KEY_NOTE)
        print_table(TABLE_TITLES, info)


async def generate_info(
    client: DeploymentAPIClient,
    app: AppReference,
    deployments: Sequence[Deployment],
    format: str = "text",
) -> List[Union[Deployment, List[str]]]:
    """Build one table row per deployment, or a record with metrics attached.

    Metrics requests run concurrently, at most METRICS_FETCH_CONCURRENCY at once.
    """

    async def _generate(deployment: Deployment) -> Union[Deployment, List[str]]:
        release = deployment.latestRelease

        if format != "text":
            if release is None:
                return deployment
            metrics = await client.get_deployment_metrics(app, deployment.name)
            return deployment.model_copy(
                update={
                    "latestRelease": release.model_copy(
                        update={"metrics": aggregate_metrics(metrics)}
                    )
                }
            )

        if release is None:
            return [escape(deployment.name), NO_UPDATES_RELEASED, NO_INSTALLS_RECORDED]

        metrics = await client.get_deployment_metrics(app, deployment.name)
        release_metric = find_release_metric(metrics, release.label)
        return [
            escape(deployment.name),
            generate_metadata_string(release),
            generate_metrics_string(release_metric, total_active(metrics)),
        ]

    return await promise_map(deployments, _generate, METRICS_FETCH_CONCURRENCY)


def _fetch_error(app: AppReference, error: Exception) -> CLIError:
    logger.debug(f"Failed to get list of CodePush deployments - {error!r}")

    if (
        isinstance(error, httpx.HTTPStatusError)
        and error.response.status_code == 404
    ):
        return CLIError(
            f"The app {escape(app.identifier)} does not exist. Please double check the name, "
            "and provide it in the form owner/appname. \n"
            f"Run the command [bold]{SCRIPT_NAME} apps list[/bold] to see what apps you have access to.",
            ErrorCode.INVALID_PARAMETER,
        )

    return CLIError("Failed to get list of deployments for the app")
