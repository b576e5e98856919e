"""
Type models for EBS operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class _OpenStatus(str, Enum):
    """String-backed status that tolerates values the service adds later.

    Unrecognized strings become an UNKNOWN pseudo-member carrying the raw
    value instead of raising ValueError.
    """

    @classmethod
    def _missing_(cls, value: object) -> Any:
        if not isinstance(value, str):
            return None
        member = str.__new__(cls, value)
        member._name_ = "UNKNOWN"
        member._value_ = value
        return member

    @property
    def is_known(self) -> bool:
        return self._name_ != "UNKNOWN"

    def __str__(self) -> str:
        return str(self.value)


class VolumeStatus(_OpenStatus):
    """Lifecycle states of an EBS volume."""

    CREATING = "creating"
    AVAILABLE = "available"
    IN_USE = "in-use"
    DELETING = "deleting"
    DELETED = "deleted"
    ERROR = "error"


class AttachmentStatus(_OpenStatus):
    """States of a volume/instance attachment."""

    ATTACHING = "attaching"
    ATTACHED = "attached"
    DETACHING = "detaching"
    DETACHED = "detached"


class SnapshotStatus(_OpenStatus):
    """States of an EBS snapshot."""

    PENDING = "pending"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class TagItem:
    """Key/value tag on a resource."""

    key: str
    value: str


@dataclass
class AttachmentRecord:
    """Attachment of a volume to an instance."""

    volume_id: str
    instance_id: str
    device: str
    status: AttachmentStatus
    attach_time: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status in (AttachmentStatus.ATTACHING, AttachmentStatus.ATTACHED)


@dataclass
class Volume:
    """EBS volume as reported by the service at query time."""

    id: str
    availability_zone: str
    status: VolumeStatus
    created_at: datetime | None = None
    attachments: list[AttachmentRecord] = field(default_factory=list)
    tags: list[TagItem] = field(default_factory=list)
    size: int | None = None
    volume_type: str | None = None
    snapshot_id: str | None = None
    iops: int | None = None

    def get_tag(self, key: str, default: str | None = None) -> str | None:
        for tag in self.tags:
            if tag.key == key:
                return tag.value
        return default

    def active_attachment(self, instance_id: str) -> AttachmentRecord | None:
        """Return the attaching/attached record for an instance, if any."""
        for attachment in self.attachments:
            if attachment.instance_id == instance_id and attachment.is_active:
                return attachment
        return None


@dataclass
class Snapshot:
    """EBS snapshot as reported by the service at query time."""

    id: str
    volume_id: str
    status: SnapshotStatus
    description: str = ""
    start_time: datetime | None = None
    progress: str | None = None
    volume_size: int | None = None


@dataclass
class DeviceMapping:
    """Block device currently mapped on an instance."""

    device: str
    volume_id: str
    status: AttachmentStatus
    attach_time: datetime | None = None
    delete_on_termination: bool = False


@dataclass
class ElasticAddress:
    """Elastic IP address and its current binding."""

    public_ip: str
    allocation_id: str | None = None
    instance_id: str | None = None
    association_id: str | None = None


class AttachAction(Enum):
    """How the lifecycle workflow arrived at an attached volume."""

    REUSED = "reused"
    MIGRATED = "migrated"
    CREATED = "created"
    ALREADY_ATTACHED = "already-attached"


@dataclass
class AttachRequest:
    """Desired state: a named volume attached to an instance."""

    name: str
    instance_id: str
    availability_zone: str
    size: int = 10
    ssd: bool = False
    piops: int = 0
    snapshot_id: str | None = None


@dataclass
class AttachResult:
    """Outcome of the lifecycle workflow."""

    device: str
    volume_id: str
    action: AttachAction
    snapshot_id: str | None = None
