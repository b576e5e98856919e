"""
Volume operations for EBS.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from collections.abc import Sequence

from ..codec import (
    decode_attachment,
    decode_device_mappings,
    decode_volume,
    decode_volume_set,
    require_return,
)
from ..constants import VOLUME_TYPE_MAGNETIC, VOLUME_TYPE_PIOPS, VOLUME_TYPE_SSD
from ..exceptions import AmbiguousResultError, NotFoundError, ValidationError
from ..logging_config import get_logger
from ..models import AttachmentStatus, DeviceMapping, TagItem, Volume
from .client import EC2Gateway
from .device_allocator import next_device_path

logger = get_logger(__name__)


def volumes_by_tags(gateway: EC2Gateway, tags: Sequence[TagItem]) -> list[Volume]:
    """
    Find volumes carrying all of the given tags.

    Args:
        gateway: EC2 gateway
        tags: Tags to match; the service ANDs the filters

    Returns:
        Matching volumes (possibly empty)
    """
    params: dict[str, str] = {}
    for n, tag in enumerate(tags, start=1):
        params[f"Filter.{n}.Name"] = f"tag:{tag.key}"
        params[f"Filter.{n}.Value"] = tag.value

    return decode_volume_set(gateway.send("DescribeVolumes", params))


def volume_by_id(gateway: EC2Gateway, volume_id: str) -> Volume:
    """
    Get the volume with the given id.

    Args:
        gateway: EC2 gateway
        volume_id: Volume id

    Returns:
        The volume

    Raises:
        NotFoundError: If no volume matches
        AmbiguousResultError: If more than one volume matches
    """
    volumes = decode_volume_set(gateway.send("DescribeVolumes", {"VolumeId.1": volume_id}))
    if not volumes:
        raise NotFoundError(f"Could not find volume {volume_id}")
    if len(volumes) > 1:
        raise AmbiguousResultError(f"Expected one volume for {volume_id}, got {len(volumes)}")
    return volumes[0]


def select_volume_type(piops: int, ssd: bool) -> str:
    """
    Pick the volume type for the requested performance.

    Args:
        piops: Provisioned IOPS (0 for none)
        ssd: Whether SSD storage is requested

    Returns:
        EC2 volume type name

    Raises:
        ValidationError: If provisioned IOPS are requested without SSD
    """
    if piops > 0:
        if not ssd:
            raise ValidationError("Provisioned IOPS volumes are only available as SSD")
        return VOLUME_TYPE_PIOPS
    if ssd:
        return VOLUME_TYPE_SSD
    return VOLUME_TYPE_MAGNETIC


def create_volume(
    gateway: EC2Gateway,
    size: int,
    piops: int,
    ssd: bool,
    availability_zone: str,
    snapshot_id: str | None = None,
    tags: Sequence[TagItem] = (),
) -> Volume:
    """
    Create a volume and tag it.

    Tagging is a second request. If it fails the error propagates, but the
    volume has already been created and is left untagged; it is not deleted.

    Args:
        gateway: EC2 gateway
        size: Size in GiB
        piops: Provisioned IOPS (0 for none, requires ssd)
        ssd: Use SSD storage
        availability_zone: Zone to create the volume in
        snapshot_id: Snapshot to seed the volume from (optional)
        tags: Tags to apply after creation

    Returns:
        The new volume, as reported by CreateVolume (status 'creating')

    Raises:
        ValidationError: If the arguments are inconsistent; no request is sent
    """
    if size <= 0:
        raise ValidationError(f"Volume size must be positive, got {size}")
    if piops < 0:
        raise ValidationError(f"Provisioned IOPS cannot be negative, got {piops}")
    volume_type = select_volume_type(piops, ssd)

    params = {
        "Size": str(size),
        "AvailabilityZone": availability_zone,
        "VolumeType": volume_type,
    }
    if snapshot_id:
        params["SnapshotId"] = snapshot_id
    if volume_type == VOLUME_TYPE_PIOPS:
        params["Iops"] = str(piops)

    volume = decode_volume(gateway.send("CreateVolume", params))
    logger.info(f"Created {volume_type} volume {volume.id} in {availability_zone}")

    if tags:
        tag_resource(gateway, volume.id, tags)
        volume.tags = list(tags)
    return volume


def tag_resource(gateway: EC2Gateway, resource_id: str, tags: Sequence[TagItem]) -> None:
    """
    Apply tags to a resource.

    Args:
        gateway: EC2 gateway
        resource_id: Volume, snapshot or instance id
        tags: Tags to apply

    Raises:
        RemoteError: If the service does not confirm the tagging
    """
    params = {"ResourceId.1": resource_id}
    for n, tag in enumerate(tags, start=1):
        params[f"Tag.{n}.Key"] = tag.key
        params[f"Tag.{n}.Value"] = tag.value

    require_return("CreateTags", gateway.send("CreateTags", params))


def delete_volume(gateway: EC2Gateway, volume_id: str) -> None:
    """
    Delete a volume.

    Args:
        gateway: EC2 gateway
        volume_id: Volume id

    Raises:
        RemoteError: If the service does not confirm the deletion
    """
    body = gateway.send("DeleteVolume", {"VolumeId": volume_id})
    require_return("DeleteVolume", body)
    logger.info(f"Deleted volume {volume_id}")


def describe_block_device_mapping(gateway: EC2Gateway, instance_id: str) -> list[DeviceMapping]:
    """
    Get the block devices currently mapped on an instance.

    Args:
        gateway: EC2 gateway
        instance_id: Instance id

    Returns:
        Device mappings in service order
    """
    body = gateway.send(
        "DescribeInstanceAttribute",
        {"InstanceId": instance_id, "Attribute": "blockDeviceMapping"},
    )
    return decode_device_mappings(body)


def attach_volume(gateway: EC2Gateway, volume_id: str, instance_id: str) -> str:
    """
    Attach a volume to an instance at the next free device path.

    Args:
        gateway: EC2 gateway
        volume_id: Volume id
        instance_id: Instance id

    Returns:
        Device path the volume was attached under
    """
    device = next_device_path(describe_block_device_mapping(gateway, instance_id))

    gateway.send(
        "AttachVolume",
        {"InstanceId": instance_id, "VolumeId": volume_id, "Device": device},
    )
    logger.info(f"Attaching volume {volume_id} to {instance_id} as {device}")
    return device


def detach_volume(
    gateway: EC2Gateway,
    volume_id: str,
    instance_id: str | None = None,
    force: bool = False,
) -> AttachmentStatus:
    """
    Detach a volume. The service detaches asynchronously.

    Args:
        gateway: EC2 gateway
        volume_id: Volume id
        instance_id: Only detach from this instance (optional)
        force: Force detachment (optional)

    Returns:
        Attachment status reported by the service, normally 'detaching'
    """
    params = {"VolumeId": volume_id}
    if instance_id:
        params["InstanceId"] = instance_id
    if force:
        params["Force"] = "true"

    attachment = decode_attachment(gateway.send("DetachVolume", params))
    logger.info(f"Detach of volume {volume_id}: {attachment.status}")
    return attachment.status
