"""
Snapshot operations for EBS.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from ..codec import decode_snapshot, decode_snapshot_set, require_return
from ..exceptions import AmbiguousResultError, NotFoundError
from ..logging_config import get_logger
from ..models import Snapshot
from .client import EC2Gateway

logger = get_logger(__name__)


def create_snapshot(gateway: EC2Gateway, volume_id: str, description: str = "") -> Snapshot:
    """
    Start a snapshot of a volume.

    Args:
        gateway: EC2 gateway
        volume_id: Volume to snapshot
        description: Snapshot description

    Returns:
        The snapshot, normally in 'pending' state
    """
    snapshot = decode_snapshot(
        gateway.send("CreateSnapshot", {"Description": description, "VolumeId": volume_id})
    )
    logger.info(f"Started snapshot {snapshot.id} of volume {volume_id}")
    return snapshot


def snapshot_by_id(gateway: EC2Gateway, snapshot_id: str) -> Snapshot:
    """
    Get the snapshot with the given id.

    Args:
        gateway: EC2 gateway
        snapshot_id: Snapshot id

    Returns:
        The snapshot

    Raises:
        NotFoundError: If no snapshot matches
        AmbiguousResultError: If more than one snapshot matches
    """
    snapshots = decode_snapshot_set(
        gateway.send("DescribeSnapshots", {"SnapshotId.1": snapshot_id})
    )
    if not snapshots:
        raise NotFoundError(f"Could not find snapshot {snapshot_id}")
    if len(snapshots) > 1:
        raise AmbiguousResultError(
            f"Expected one snapshot for {snapshot_id}, got {len(snapshots)}"
        )
    return snapshots[0]


def delete_snapshot(gateway: EC2Gateway, snapshot_id: str) -> None:
    """
    Delete a snapshot.

    Args:
        gateway: EC2 gateway
        snapshot_id: Snapshot id

    Raises:
        RemoteError: If the service does not confirm the deletion
    """
    body = gateway.send("DeleteSnapshot", {"SnapshotId": snapshot_id})
    require_return("DeleteSnapshot", body)
    logger.info(f"Deleted snapshot {snapshot_id}")
