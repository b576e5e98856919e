"""
Detach command for EBS volumes.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from ..core.client import create_gateway
from ..core.lifecycle_operations import detach_named_volume
from ..exceptions import EBSToolError
from ..logging_config import get_logger, setup_logging
from ..utils import exit_with_error, output_json, output_text

logger = get_logger(__name__)


@click.command("detach")
@click.option(
    "--name", envvar="EBS_DETACH_NAME", required=True, help="Name tag of volume to detach"
)
@click.option("--wait", is_flag=True, help="Wait until the volume is detached")
@click.option("--json", "as_json", is_flag=True, help="Output result as JSON")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG)",
)
@click.pass_context
def detach_command(
    ctx: click.Context,
    name: str,
    wait: bool,
    as_json: bool,
    verbose: int,
) -> None:
    """Detach a volume from its instance.

    Exactly one volume must carry the Name tag. Detaching is asynchronous;
    the printed status is normally 'detaching' unless --wait is given.

    Examples:

    \b
        # Detach and return immediately
        ebs-volume-tool ebs detach --name db-data

    \b
        # Detach and wait until the volume is available again
        ebs-volume-tool ebs detach --name db-data --wait

    \b
    Output Format:
        Attachment status, e.g. detaching
        With --json:
        {"name": "db-data", "status": "detaching"}
    """
    setup_logging(verbose)

    try:
        logger.info(f"Detaching volume '{name}'")
        gateway = create_gateway(**(ctx.obj or {}))
        status = detach_named_volume(gateway, name, wait=wait)

        if as_json:
            output_json({"name": name, "status": status.value})
        else:
            output_text(status.value)

    except EBSToolError as e:
        logger.debug("detach failed", exc_info=True)
        exit_with_error(ctx, e, text_format=not as_json)
