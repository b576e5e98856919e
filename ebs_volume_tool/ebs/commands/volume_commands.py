"""
Volume and snapshot inspection commands.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any

import click

from ..core.client import create_gateway
from ..core.polling import wait_until
from ..core.snapshot_operations import create_snapshot, delete_snapshot, snapshot_by_id
from ..core.volume_operations import volumes_by_tags
from ..exceptions import EBSToolError, ResourceFailedError
from ..logging_config import get_logger, setup_logging
from ..models import Snapshot, SnapshotStatus, Volume
from ..utils import exit_with_error, output_json, output_text, parse_tag

logger = get_logger(__name__)


def volume_to_dict(volume: Volume) -> dict[str, Any]:
    """Convert a volume to a JSON-serializable dict."""
    return {
        "volume_id": volume.id,
        "availability_zone": volume.availability_zone,
        "status": volume.status.value,
        "size": volume.size,
        "volume_type": volume.volume_type,
        "created_at": volume.created_at.isoformat() if volume.created_at else None,
        "attachments": [
            {
                "instance_id": attachment.instance_id,
                "device": attachment.device,
                "status": attachment.status.value,
            }
            for attachment in volume.attachments
        ],
        "tags": {tag.key: tag.value for tag in volume.tags},
    }


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, Any]:
    """Convert a snapshot to a JSON-serializable dict."""
    return {
        "snapshot_id": snapshot.id,
        "volume_id": snapshot.volume_id,
        "status": snapshot.status.value,
        "description": snapshot.description,
        "progress": snapshot.progress,
    }


@click.command("volumes")
@click.option("--tag", "tags", multiple=True, help="Filter by tag KEY=VALUE (repeatable)")
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG)",
)
@click.pass_context
def volumes_command(
    ctx: click.Context,
    tags: tuple[str, ...],
    text: bool,
    verbose: int,
) -> None:
    """List volumes matching all given tags.

    Examples:

    \b
        # Volumes named db-data
        ebs-volume-tool ebs volumes --tag Name=db-data

    \b
        # Volumes of one stack in one role
        ebs-volume-tool ebs volumes --tag Stack=prod --tag Role=db

    \b
    Output Format:
        Returns JSON list:
        [{"volume_id": "vol-1", "availability_zone": "eu-west-1a", "status": "in-use", ...}]
    """
    setup_logging(verbose)

    try:
        tag_items = [parse_tag(raw) for raw in tags]
        gateway = create_gateway(**(ctx.obj or {}))
        volumes = volumes_by_tags(gateway, tag_items)
        logger.info(f"Found {len(volumes)} volume(s)")

        if text:
            for volume in volumes:
                name = volume.get_tag("Name", "")
                output_text(
                    f"{volume.id}\t{volume.availability_zone}\t{volume.status.value}\t{name}"
                )
        else:
            output_json([volume_to_dict(volume) for volume in volumes])

    except EBSToolError as e:
        logger.debug("volumes failed", exc_info=True)
        exit_with_error(ctx, e, text_format=text)


@click.command("snapshot")
@click.argument("volume_id")
@click.option("--description", default="", help="Snapshot description")
@click.option("--wait", is_flag=True, help="Wait until the snapshot completes")
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG)",
)
@click.pass_context
def snapshot_command(
    ctx: click.Context,
    volume_id: str,
    description: str,
    wait: bool,
    text: bool,
    verbose: int,
) -> None:
    """Create a snapshot of a volume.

    Examples:

    \b
        # Start a snapshot
        ebs-volume-tool ebs snapshot vol-0abc --description nightly

    \b
        # Block until it completes
        ebs-volume-tool ebs snapshot vol-0abc --wait

    \b
    Output Format:
        Returns JSON:
        {"snapshot_id": "snap-1", "volume_id": "vol-0abc", "status": "pending", ...}
    """
    setup_logging(verbose)

    try:
        gateway = create_gateway(**(ctx.obj or {}))
        snapshot = create_snapshot(gateway, volume_id, description)

        if wait:
            snapshot_id = snapshot.id
            snapshot = wait_until(
                lambda: snapshot_by_id(gateway, snapshot_id),
                _snapshot_finished,
                f"snapshot {snapshot_id} to complete",
            )
            if snapshot.status is SnapshotStatus.ERROR:
                raise ResourceFailedError(f"Snapshot {snapshot.id} failed")

        if text:
            output_text(f"{snapshot.id}\t{snapshot.status.value}")
        else:
            output_json(snapshot_to_dict(snapshot))

    except EBSToolError as e:
        logger.debug("snapshot failed", exc_info=True)
        exit_with_error(ctx, e, text_format=text)


@click.command("snapshot-delete")
@click.argument("snapshot_id")
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG)",
)
@click.pass_context
def snapshot_delete_command(
    ctx: click.Context,
    snapshot_id: str,
    text: bool,
    verbose: int,
) -> None:
    """Delete a snapshot.

    Examples:

    \b
        ebs-volume-tool ebs snapshot-delete snap-0abc

    \b
    Output Format:
        Returns JSON:
        {"snapshot_id": "snap-0abc", "deleted": true}
    """
    setup_logging(verbose)

    try:
        gateway = create_gateway(**(ctx.obj or {}))
        delete_snapshot(gateway, snapshot_id)

        if text:
            output_text(f"Deleted {snapshot_id}")
        else:
            output_json({"snapshot_id": snapshot_id, "deleted": True})

    except EBSToolError as e:
        logger.debug("snapshot-delete failed", exc_info=True)
        exit_with_error(ctx, e, text_format=text)


def _snapshot_finished(snapshot: Snapshot) -> bool:
    return snapshot.status in (SnapshotStatus.COMPLETED, SnapshotStatus.ERROR)
