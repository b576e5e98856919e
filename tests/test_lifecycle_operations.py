"""Tests for ebs_volume_tool/ebs/core/lifecycle_operations.py"""

from __future__ import annotations

import pytest

from ebs_volume_tool.ebs.core.lifecycle_operations import (
    detach_named_volume,
    ensure_volume_attached,
    find_named_volume,
)
from ebs_volume_tool.ebs.exceptions import (
    AmbiguousResultError,
    NotFoundError,
    RemoteError,
    ResourceFailedError,
    ValidationError,
    WaitTimeoutError,
)
from ebs_volume_tool.ebs.models import AttachAction, AttachmentStatus, AttachRequest
from tests import ec2_responses

INSTANCE = "i-1a2b3c4d"
NEW_VOLUME = "vol-842b078f"
SNAPSHOT = "snap-1a2b3c4d"


@pytest.fixture(name="request_")
def fixture_request():
    return AttachRequest(name="db-data", instance_id=INSTANCE, availability_zone="eu-west-1a")


def script_attach(gateway, *devices: str, device: str = "/dev/sdf") -> None:
    gateway.script(
        "DescribeInstanceAttribute",
        ec2_responses.block_device_mapping(*devices, instance_id=INSTANCE),
    )
    gateway.script("AttachVolume", ec2_responses.attach_volume(NEW_VOLUME, INSTANCE, device))


def script_create(gateway, *lookups: bytes, final_status: str = "available") -> None:
    """Name lookup responses followed by the new volume's status polls."""
    gateway.script(
        "DescribeVolumes",
        *lookups,
        ec2_responses.describe_volumes(ec2_responses.volume_item(NEW_VOLUME, status="creating")),
        ec2_responses.describe_volumes(ec2_responses.volume_item(NEW_VOLUME, status=final_status)),
    )
    gateway.script("CreateVolume", ec2_responses.create_volume(NEW_VOLUME))
    gateway.script("CreateTags", ec2_responses.return_true("CreateTags"))


def named_volume(**kwargs) -> bytes:
    kwargs.setdefault("tags", {"Name": "db-data"})
    return ec2_responses.describe_volumes(ec2_responses.volume_item(**kwargs))


def test_find_named_volume_filters_on_name_tag(gateway):
    gateway.script("DescribeVolumes", named_volume(volume_id="vol-1"))

    volume = find_named_volume(gateway, "db-data")

    assert volume.id == "vol-1"
    assert gateway.params_for("DescribeVolumes") == {
        "Filter.1.Name": "tag:Name",
        "Filter.1.Value": "db-data",
    }


def test_find_named_volume_none(gateway):
    gateway.script("DescribeVolumes", ec2_responses.describe_volumes())

    assert find_named_volume(gateway, "db-data") is None


def test_reuses_volume_in_same_zone(gateway, request_, fast_poll):
    gateway.script("DescribeVolumes", named_volume(volume_id="vol-1", zone="eu-west-1a"))
    script_attach(gateway, "/dev/xvda", "/dev/sdf", device="/dev/sdg")

    result = ensure_volume_attached(gateway, request_, fast_poll)

    assert result.device == "/dev/sdg"
    assert result.volume_id == "vol-1"
    assert result.action is AttachAction.REUSED
    assert gateway.actions == ["DescribeVolumes", "DescribeInstanceAttribute", "AttachVolume"]
    assert gateway.params_for("AttachVolume")["VolumeId"] == "vol-1"


def test_already_attached_volume_is_not_attached_again(gateway, request_, fast_poll):
    gateway.script(
        "DescribeVolumes",
        named_volume(
            volume_id="vol-1",
            status="in-use",
            attachments=[(INSTANCE, "/dev/sdf", "attached")],
        ),
    )

    result = ensure_volume_attached(gateway, request_, fast_poll)

    assert result.device == "/dev/sdf"
    assert result.action is AttachAction.ALREADY_ATTACHED
    assert gateway.actions == ["DescribeVolumes"]


def test_creates_missing_volume(gateway, request_, fast_poll):
    script_create(gateway, ec2_responses.describe_volumes())
    script_attach(gateway, "/dev/xvda")

    result = ensure_volume_attached(gateway, request_, fast_poll)

    assert result.device == "/dev/sdf"
    assert result.volume_id == NEW_VOLUME
    assert result.action is AttachAction.CREATED
    assert result.snapshot_id is None
    assert gateway.params_for("CreateVolume") == {
        "Size": "10",
        "AvailabilityZone": "eu-west-1a",
        "VolumeType": "standard",
    }
    assert gateway.params_for("CreateTags") == {
        "ResourceId.1": NEW_VOLUME,
        "Tag.1.Key": "Name",
        "Tag.1.Value": "db-data",
    }
    actions = gateway.actions
    assert actions.index("CreateTags") < actions.index("AttachVolume")
    assert actions[-1] == "AttachVolume"


def test_creates_missing_volume_from_requested_snapshot(gateway, fast_poll):
    script_create(gateway, ec2_responses.describe_volumes())
    script_attach(gateway)
    request = AttachRequest(
        name="db-data",
        instance_id=INSTANCE,
        availability_zone="eu-west-1a",
        size=100,
        ssd=True,
        piops=1000,
        snapshot_id="snap-seed",
    )

    result = ensure_volume_attached(gateway, request, fast_poll)

    assert result.snapshot_id == "snap-seed"
    assert gateway.params_for("CreateVolume") == {
        "Size": "100",
        "AvailabilityZone": "eu-west-1a",
        "VolumeType": "io1",
        "SnapshotId": "snap-seed",
        "Iops": "1000",
    }


def test_migrates_volume_from_other_zone(gateway, request_, fast_poll):
    script_create(gateway, named_volume(volume_id="vol-old", zone="eu-west-1b"))
    gateway.script("CreateSnapshot", ec2_responses.create_snapshot(SNAPSHOT, "vol-old"))
    gateway.script(
        "DescribeSnapshots",
        ec2_responses.describe_snapshots(ec2_responses.snapshot_item(SNAPSHOT, status="pending")),
        ec2_responses.describe_snapshots(ec2_responses.snapshot_item(SNAPSHOT)),
    )
    gateway.script("DeleteVolume", ec2_responses.return_true("DeleteVolume"))
    script_attach(gateway)

    result = ensure_volume_attached(gateway, request_, fast_poll)

    assert result.action is AttachAction.MIGRATED
    assert result.volume_id == NEW_VOLUME
    assert result.snapshot_id == SNAPSHOT
    assert gateway.params_for("CreateSnapshot") == {
        "Description": "migrate_zone",
        "VolumeId": "vol-old",
    }
    assert gateway.params_for("DeleteVolume") == {"VolumeId": "vol-old"}
    assert gateway.params_for("CreateVolume")["SnapshotId"] == SNAPSHOT
    assert gateway.params_for("CreateVolume")["AvailabilityZone"] == "eu-west-1a"

    actions = gateway.actions
    assert (
        actions.index("CreateSnapshot")
        < actions.index("DescribeSnapshots")
        < actions.index("DeleteVolume")
        < actions.index("CreateVolume")
        < actions.index("AttachVolume")
    )


def test_migration_continues_when_old_volume_delete_fails(gateway, request_, fast_poll):
    script_create(gateway, named_volume(volume_id="vol-old", zone="eu-west-1b"))
    gateway.script("CreateSnapshot", ec2_responses.create_snapshot(SNAPSHOT, "vol-old"))
    gateway.script(
        "DescribeSnapshots", ec2_responses.describe_snapshots(ec2_responses.snapshot_item(SNAPSHOT))
    )
    gateway.script("DeleteVolume", RemoteError("DeleteVolume", 400, "VolumeInUse"))
    script_attach(gateway)

    result = ensure_volume_attached(gateway, request_, fast_poll)

    assert result.action is AttachAction.MIGRATED
    assert "CreateVolume" in gateway.actions
    assert gateway.actions[-1] == "AttachVolume"


def test_failed_migration_snapshot_stops_workflow(gateway, request_, fast_poll):
    gateway.script("DescribeVolumes", named_volume(volume_id="vol-old", zone="eu-west-1b"))
    gateway.script("CreateSnapshot", ec2_responses.create_snapshot(SNAPSHOT, "vol-old"))
    gateway.script(
        "DescribeSnapshots",
        ec2_responses.describe_snapshots(ec2_responses.snapshot_item(SNAPSHOT, status="error")),
    )

    with pytest.raises(ResourceFailedError, match=SNAPSHOT):
        ensure_volume_attached(gateway, request_, fast_poll)

    assert "DeleteVolume" not in gateway.actions
    assert "CreateVolume" not in gateway.actions


def test_migration_snapshot_timeout_keeps_old_volume(gateway, request_, fast_poll):
    gateway.script("DescribeVolumes", named_volume(volume_id="vol-old", zone="eu-west-1b"))
    gateway.script("CreateSnapshot", ec2_responses.create_snapshot(SNAPSHOT, "vol-old"))
    gateway.script(
        "DescribeSnapshots",
        ec2_responses.describe_snapshots(ec2_responses.snapshot_item(SNAPSHOT, status="pending")),
    )

    with pytest.raises(WaitTimeoutError):
        ensure_volume_attached(gateway, request_, fast_poll)

    assert "DeleteVolume" not in gateway.actions


def test_ambiguous_name_fails_before_any_change(gateway, request_, fast_poll):
    gateway.script(
        "DescribeVolumes",
        ec2_responses.describe_volumes(
            ec2_responses.volume_item("vol-1", tags={"Name": "db-data"}),
            ec2_responses.volume_item("vol-2", tags={"Name": "db-data"}),
        ),
    )

    with pytest.raises(AmbiguousResultError, match="More than one volume exist with the name"):
        ensure_volume_attached(gateway, request_, fast_poll)

    assert gateway.actions == ["DescribeVolumes"]


def test_new_volume_never_available_times_out_without_attaching(gateway, request_, fast_poll):
    script_create(gateway, ec2_responses.describe_volumes(), final_status="creating")

    with pytest.raises(WaitTimeoutError):
        ensure_volume_attached(gateway, request_, fast_poll)

    assert "AttachVolume" not in gateway.actions


def test_new_volume_in_error_state(gateway, request_, fast_poll):
    script_create(gateway, ec2_responses.describe_volumes(), final_status="error")

    with pytest.raises(ResourceFailedError, match=NEW_VOLUME):
        ensure_volume_attached(gateway, request_, fast_poll)

    assert "AttachVolume" not in gateway.actions


def test_invalid_creation_parameters_send_no_create(gateway, fast_poll):
    gateway.script("DescribeVolumes", ec2_responses.describe_volumes())
    request = AttachRequest(
        name="db-data", instance_id=INSTANCE, availability_zone="eu-west-1a", piops=1000
    )

    with pytest.raises(ValidationError):
        ensure_volume_attached(gateway, request, fast_poll)

    assert gateway.actions == ["DescribeVolumes"]


def test_detach_named_volume(gateway):
    gateway.script("DescribeVolumes", named_volume(volume_id="vol-1", status="in-use"))
    gateway.script("DetachVolume", ec2_responses.detach_volume("vol-1"))

    status = detach_named_volume(gateway, "db-data")

    assert status is AttachmentStatus.DETACHING
    assert gateway.params_for("DetachVolume") == {"VolumeId": "vol-1"}


def test_detach_named_volume_waits_until_available(gateway, fast_poll):
    gateway.script(
        "DescribeVolumes",
        named_volume(volume_id="vol-1", status="in-use"),
        named_volume(volume_id="vol-1", status="in-use"),
        named_volume(volume_id="vol-1", status="available"),
    )
    gateway.script("DetachVolume", ec2_responses.detach_volume("vol-1"))

    status = detach_named_volume(gateway, "db-data", wait=True, poll=fast_poll)

    assert status is AttachmentStatus.DETACHED
    assert gateway.actions.count("DescribeVolumes") == 3
    assert gateway.calls[-1] == ("DescribeVolumes", {"VolumeId.1": "vol-1"})


def test_detach_unknown_name(gateway):
    gateway.script("DescribeVolumes", ec2_responses.describe_volumes())

    with pytest.raises(NotFoundError, match="db-data"):
        detach_named_volume(gateway, "db-data")

    assert "DetachVolume" not in gateway.actions


def test_detach_ambiguous_name(gateway):
    gateway.script(
        "DescribeVolumes",
        ec2_responses.describe_volumes(
            ec2_responses.volume_item("vol-1"), ec2_responses.volume_item("vol-2")
        ),
    )

    with pytest.raises(AmbiguousResultError):
        detach_named_volume(gateway, "db-data")

    assert "DetachVolume" not in gateway.actions


def test_migration_continues_when_old_volume_delete_is_unconfirmed(gateway, request_, fast_poll):
    script_create(gateway, named_volume(volume_id="vol-old", zone="eu-west-1b"))
    gateway.script("CreateSnapshot", ec2_responses.create_snapshot(SNAPSHOT, "vol-old"))
    gateway.script(
        "DescribeSnapshots", ec2_responses.describe_snapshots(ec2_responses.snapshot_item(SNAPSHOT))
    )
    gateway.script("DeleteVolume", ec2_responses.return_false("DeleteVolume"))
    script_attach(gateway)

    result = ensure_volume_attached(gateway, request_, fast_poll)

    assert result.action is AttachAction.MIGRATED
    assert gateway.actions[-1] == "AttachVolume"
