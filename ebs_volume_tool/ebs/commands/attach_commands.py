"""
Attach command for EBS volumes.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from ..constants import DEFAULT_VOLUME_SIZE
from ..core.client import create_gateway
from ..core.lifecycle_operations import ensure_volume_attached
from ..exceptions import EBSToolError
from ..logging_config import get_logger, setup_logging
from ..models import AttachRequest
from ..utils import exit_with_error, output_json, output_text

logger = get_logger(__name__)


@click.command("attach")
@click.option(
    "--name", envvar="EBS_ATTACH_NAME", required=True, help="Name tag of volume to attach"
)
@click.option(
    "--size",
    envvar="EBS_ATTACH_SIZE",
    type=int,
    default=DEFAULT_VOLUME_SIZE,
    show_default=True,
    help="Size of volume in GiB",
)
@click.option("--ssd", envvar="EBS_ATTACH_SSD", is_flag=True, help="Use SSD storage")
@click.option(
    "--piops",
    envvar="EBS_ATTACH_PIOPS",
    type=int,
    default=0,
    help="Number of provisioned IOPS to request (requires --ssd)",
)
@click.option(
    "--snapshot",
    envvar="EBS_ATTACH_SNAPSHOT",
    help="Snapshot to use if the volume does not already exist",
)
@click.option(
    "--instance", envvar="EBS_ATTACH_INSTANCE", required=True, help="Instance id to attach to"
)
@click.option(
    "--az",
    envvar="EBS_ATTACH_AZ",
    required=True,
    help="Availability Zone in which the instance is running",
)
@click.option("--json", "as_json", is_flag=True, help="Output result as JSON")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG)",
)
@click.pass_context
def attach_command(
    ctx: click.Context,
    name: str,
    size: int,
    ssd: bool,
    piops: int,
    snapshot: str | None,
    instance: str,
    az: str,
    as_json: bool,
    verbose: int,
) -> None:
    """Attach a named volume, creating or migrating it when needed.

    Looks the volume up by its Name tag. A volume in the instance's zone is
    reused; a volume in another zone is moved through a snapshot; a missing
    volume is created. The device path is printed on success.

    Examples:

    \b
        # Attach (or create) a 10 GiB magnetic volume
        ebs-volume-tool ebs attach --name db-data --instance i-0abc --az eu-west-1a

    \b
        # 100 GiB provisioned IOPS SSD volume
        ebs-volume-tool ebs attach --name db-data --size 100 --ssd --piops 1000 \\
            --instance i-0abc --az eu-west-1a

    \b
        # Mount the result
        mount "$(ebs-volume-tool ebs attach --name db-data ...)" /data

    \b
    Output Format:
        Device path, e.g. /dev/sdf
        With --json:
        {"device": "/dev/sdf", "volume_id": "vol-1", "action": "created"}
    """
    setup_logging(verbose)

    try:
        logger.info(f"Ensuring volume '{name}' is attached to {instance} in {az}")
        gateway = create_gateway(**(ctx.obj or {}))
        request = AttachRequest(
            name=name,
            instance_id=instance,
            availability_zone=az,
            size=size,
            ssd=ssd,
            piops=piops,
            snapshot_id=snapshot or None,
        )
        result = ensure_volume_attached(gateway, request)

        if as_json:
            output_json(
                {
                    "device": result.device,
                    "volume_id": result.volume_id,
                    "action": result.action.value,
                    "snapshot_id": result.snapshot_id,
                }
            )
        else:
            output_text(result.device)

    except EBSToolError as e:
        logger.debug("attach failed", exc_info=True)
        exit_with_error(ctx, e, text_format=not as_json)
