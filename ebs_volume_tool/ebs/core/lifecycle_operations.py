"""
Volume lifecycle workflow: keep a named volume attached to an instance.

A run resolves the volume by its Name tag and then reuses it, migrates it to
the instance's availability zone through a snapshot, or creates it, before
attaching. Nothing is persisted between runs; a failed run is retried from
the start by whoever invoked it.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from ..constants import MIGRATION_SNAPSHOT_DESCRIPTION
from ..exceptions import AmbiguousResultError, EBSToolError, NotFoundError, ResourceFailedError
from ..logging_config import get_logger
from ..models import (
    AttachAction,
    AttachmentStatus,
    AttachRequest,
    AttachResult,
    Snapshot,
    SnapshotStatus,
    Volume,
    VolumeStatus,
)
from ..utils import name_tags
from .client import EC2Gateway
from .polling import PollSettings, wait_until
from .snapshot_operations import create_snapshot, snapshot_by_id
from .volume_operations import (
    attach_volume,
    create_volume,
    delete_volume,
    detach_volume,
    volume_by_id,
    volumes_by_tags,
)

logger = get_logger(__name__)


def find_named_volume(gateway: EC2Gateway, name: str) -> Volume | None:
    """
    Resolve a volume by its Name tag.

    Args:
        gateway: EC2 gateway
        name: Value of the Name tag

    Returns:
        The volume, or None if none carries the name

    Raises:
        AmbiguousResultError: If several volumes carry the name
    """
    volumes = volumes_by_tags(gateway, name_tags(name))
    if len(volumes) > 1:
        raise AmbiguousResultError(f"More than one volume exist with the name {name}")
    return volumes[0] if volumes else None


def ensure_volume_attached(
    gateway: EC2Gateway,
    request: AttachRequest,
    poll: PollSettings = PollSettings(),
) -> AttachResult:
    """
    Make sure the named volume is attached to the instance.

    Args:
        gateway: EC2 gateway
        request: Volume name, target instance/zone and creation parameters
        poll: Interval and timeout for snapshot/volume status waits

    Returns:
        Device path, volume id and what was done

    Raises:
        AmbiguousResultError: If the name matches several volumes
        WaitTimeoutError: If a snapshot or new volume is not ready in time
        ResourceFailedError: If a snapshot or new volume ends in error
        EBSToolError: Any failure of the underlying operations
    """
    existing = find_named_volume(gateway, request.name)
    snapshot_id = request.snapshot_id
    action = AttachAction.CREATED

    volume: Volume | None = None
    if existing is not None and existing.availability_zone == request.availability_zone:
        logger.info(f"Re-used volume from same AZ {existing.id}")
        volume = existing
        action = AttachAction.REUSED
    elif existing is not None:
        snapshot = migrate_volume(gateway, existing, poll)
        snapshot_id = snapshot.id
        action = AttachAction.MIGRATED

    if volume is None:
        volume = create_named_volume(gateway, request, snapshot_id, poll)

    attachment = volume.active_attachment(request.instance_id)
    if attachment is not None and attachment.device:
        logger.info(f"Volume {volume.id} already attached to {request.instance_id}")
        return AttachResult(
            attachment.device, volume.id, AttachAction.ALREADY_ATTACHED, snapshot_id
        )

    device = attach_volume(gateway, volume.id, request.instance_id)
    return AttachResult(device, volume.id, action, snapshot_id)


def migrate_volume(gateway: EC2Gateway, volume: Volume, poll: PollSettings) -> Snapshot:
    """
    Snapshot a volume from another zone and delete the old volume.

    The snapshot must complete within the poll timeout. Deleting the old
    volume afterwards is best-effort: the snapshot already holds the data, so
    a failed delete is logged and the workflow continues.

    Args:
        gateway: EC2 gateway
        volume: Volume in the wrong availability zone
        poll: Interval and timeout for the snapshot wait

    Returns:
        The completed snapshot
    """
    logger.info(f"Migrating volume {volume.id} out of {volume.availability_zone}")
    snapshot = create_snapshot(gateway, volume.id, MIGRATION_SNAPSHOT_DESCRIPTION)
    # TODO: prune migration snapshots once the new volume is attached
    snapshot_id = snapshot.id
    snapshot = wait_until(
        lambda: snapshot_by_id(gateway, snapshot_id),
        _snapshot_completed,
        f"snapshot {snapshot_id} to complete",
        poll,
    )
    logger.info(f"Created snapshot {snapshot.id}")

    # Best-effort cleanup
    try:
        delete_volume(gateway, volume.id)
    except EBSToolError as e:
        logger.warning(f"Was not able to delete old volume {volume.id}: {e}")

    return snapshot


def create_named_volume(
    gateway: EC2Gateway,
    request: AttachRequest,
    snapshot_id: str | None,
    poll: PollSettings,
) -> Volume:
    """
    Create the named volume and wait until it is available.

    Args:
        gateway: EC2 gateway
        request: Creation parameters
        snapshot_id: Snapshot to seed the volume from (optional)
        poll: Interval and timeout for the availability wait

    Returns:
        The available volume
    """
    volume = create_volume(
        gateway,
        request.size,
        request.piops,
        request.ssd,
        request.availability_zone,
        snapshot_id,
        name_tags(request.name),
    )
    volume_id = volume.id
    volume = wait_until(
        lambda: volume_by_id(gateway, volume_id),
        _volume_available,
        f"volume {volume_id} to become available",
        poll,
    )
    logger.info(f"Created volume {volume.id}")
    return volume


def detach_named_volume(
    gateway: EC2Gateway,
    name: str,
    wait: bool = False,
    poll: PollSettings = PollSettings(),
) -> AttachmentStatus:
    """
    Detach the volume carrying a Name tag.

    Args:
        gateway: EC2 gateway
        name: Value of the Name tag
        wait: Wait until the volume is available again
        poll: Interval and timeout for the wait

    Returns:
        Attachment status after the request ('detached' once waited for)

    Raises:
        NotFoundError: If no volume carries the name
        AmbiguousResultError: If several volumes carry the name
    """
    volume = find_named_volume(gateway, name)
    if volume is None:
        raise NotFoundError(f"Expected exactly one volume by the name {name}")

    status = detach_volume(gateway, volume.id)
    if wait:
        wait_until(
            lambda: volume_by_id(gateway, volume.id),
            _volume_available,
            f"volume {volume.id} to detach",
            poll,
        )
        status = AttachmentStatus.DETACHED
    return status


def _snapshot_completed(snapshot: Snapshot) -> bool:
    if snapshot.status is SnapshotStatus.ERROR:
        raise ResourceFailedError(f"Snapshot {snapshot.id} failed")
    return snapshot.status is SnapshotStatus.COMPLETED


def _volume_available(volume: Volume) -> bool:
    if volume.status is VolumeStatus.ERROR:
        raise ResourceFailedError(f"Volume {volume.id} failed")
    return volume.status is VolumeStatus.AVAILABLE
