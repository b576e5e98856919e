"""
Elastic IP commands.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from ..core.address_operations import associate_address
from ..core.client import create_gateway
from ..exceptions import EBSToolError
from ..logging_config import get_logger, setup_logging
from ..utils import exit_with_error, output_json, output_text

logger = get_logger(__name__)


@click.command("associate")
@click.option("--instance", envvar="EIP_INSTANCE", required=True, help="Instance id")
@click.option("--ip", "public_ip", envvar="EIP_ADDRESS", required=True, help="Elastic IP")
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG)",
)
@click.pass_context
def associate_command(
    ctx: click.Context,
    instance: str,
    public_ip: str,
    text: bool,
    verbose: int,
) -> None:
    """Associate an Elastic IP with an instance.

    The address is taken over even if another instance currently holds it.

    Examples:

    \b
        ebs-volume-tool eip associate --instance i-0abc --ip 203.0.113.10

    \b
    Output Format:
        Returns JSON:
        {"public_ip": "203.0.113.10", "instance_id": "i-0abc",
         "allocation_id": "eipalloc-1", "previous_instance_id": null}
    """
    setup_logging(verbose)

    try:
        gateway = create_gateway(**(ctx.obj or {}))
        previous = associate_address(gateway, instance, public_ip)

        if text:
            output_text(f"{public_ip} -> {instance}")
        else:
            output_json(
                {
                    "public_ip": public_ip,
                    "instance_id": instance,
                    "allocation_id": previous.allocation_id,
                    "previous_instance_id": previous.instance_id,
                }
            )

    except EBSToolError as e:
        logger.debug("associate failed", exc_info=True)
        exit_with_error(ctx, e, text_format=text)
