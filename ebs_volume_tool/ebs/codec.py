"""
Decoding of EC2 Query API XML responses into EBS models.

Responses are parsed with xmltodict. Every ``item`` element is forced into a
list so single-element and empty sets decode the same way. Namespaces are
ignored.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar
from xml.parsers.expat import ExpatError

import xmltodict

from .exceptions import DecodeError, RemoteError
from .models import (
    AttachmentRecord,
    AttachmentStatus,
    DeviceMapping,
    ElasticAddress,
    Snapshot,
    SnapshotStatus,
    TagItem,
    Volume,
    VolumeStatus,
)

T = TypeVar("T")


def parse_response(body: bytes) -> dict[str, Any]:
    """
    Parse a response document and return the content of its root element.

    Args:
        body: Raw XML bytes

    Returns:
        Mapping of the root element's children

    Raises:
        DecodeError: If the body is not well-formed XML with an element root
    """
    try:
        document = xmltodict.parse(body, process_namespaces=False, force_list=("item",))
    except ExpatError as e:
        raise DecodeError(f"Malformed XML response: {e}") from e

    if not isinstance(document, dict) or len(document) != 1:
        raise DecodeError("Response has no single root element")
    root = next(iter(document.values()))
    if root is None:
        return {}
    if not isinstance(root, dict):
        raise DecodeError("Response root element has no children")
    return root


def decode_volume_set(body: bytes) -> list[Volume]:
    """Decode a DescribeVolumes response."""
    root = parse_response(body)
    return _decode_items(root, "volumeSet", _volume)


def decode_volume(body: bytes) -> Volume:
    """Decode a CreateVolume response."""
    return _decode_entity(parse_response(body), _volume)


def decode_snapshot_set(body: bytes) -> list[Snapshot]:
    """Decode a DescribeSnapshots response."""
    root = parse_response(body)
    return _decode_items(root, "snapshotSet", _snapshot)


def decode_snapshot(body: bytes) -> Snapshot:
    """Decode a CreateSnapshot response."""
    return _decode_entity(parse_response(body), _snapshot)


def decode_attachment(body: bytes) -> AttachmentRecord:
    """Decode an AttachVolume or DetachVolume response."""
    return _decode_entity(parse_response(body), _attachment)


def decode_device_mappings(body: bytes) -> list[DeviceMapping]:
    """Decode a DescribeInstanceAttribute(blockDeviceMapping) response."""
    root = parse_response(body)
    return _decode_items(root, "blockDeviceMapping", _device_mapping)


def decode_address_set(body: bytes) -> list[ElasticAddress]:
    """Decode a DescribeAddresses response."""
    root = parse_response(body)
    return _decode_items(root, "addressesSet", _address)


def decode_return(body: bytes) -> bool:
    """Decode the <return> flag of CreateTags, Delete* and AssociateAddress."""
    root = parse_response(body)
    return _text(root, "return") == "true"


def require_return(action: str, body: bytes) -> None:
    """
    Check the <return> flag of a successful response.

    Args:
        action: Query API action that produced the body
        body: Raw XML bytes

    Raises:
        RemoteError: If the service answered but did not report success
        DecodeError: If the body is not well-formed XML
    """
    if not decode_return(body):
        raise RemoteError(action, 200, body.decode("utf-8", errors="replace"))


def _decode_items(
    node: dict[str, Any], key: str, decode: Callable[[dict[str, Any]], T]
) -> list[T]:
    return [_decode_entity(item, decode) for item in _items(node, key)]


def _decode_entity(node: Any, decode: Callable[[dict[str, Any]], T]) -> T:
    if not isinstance(node, dict):
        raise DecodeError(f"Expected an element, got {type(node).__name__}")
    try:
        return decode(node)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Unexpected response structure: {e!r}") from e


def _items(node: dict[str, Any], key: str) -> list[Any]:
    container = node.get(key)
    if container is None:
        return []
    if not isinstance(container, dict):
        raise DecodeError(f"Expected <{key}> to contain <item> elements")
    items = container.get("item") or []
    return list(items)


def _text(node: dict[str, Any], key: str) -> str | None:
    value = node.get(key)
    if value is None:
        return None
    if isinstance(value, dict):
        # Element with attributes only, e.g. <snapshotId xsi:nil="true"/>
        value = value.get("#text")
        if value is None:
            return None
    if not isinstance(value, str):
        raise DecodeError(f"Expected text in <{key}>")
    return value


def _required(node: dict[str, Any], key: str) -> str:
    value = _text(node, key)
    if not value:
        raise DecodeError(f"Missing required element <{key}>")
    return value


def _int(node: dict[str, Any], key: str) -> int | None:
    value = _text(node, key)
    return int(value) if value else None


def _bool(node: dict[str, Any], key: str) -> bool:
    return _text(node, key) == "true"


def _timestamp(node: dict[str, Any], key: str) -> datetime | None:
    value = _text(node, key)
    if not value:
        return None
    # fromisoformat only accepts a trailing Z from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _tags(node: dict[str, Any]) -> list[TagItem]:
    return [
        TagItem(_required(item, "key"), _text(item, "value") or "")
        for item in _items(node, "tagSet")
    ]


def _attachment(node: dict[str, Any]) -> AttachmentRecord:
    return AttachmentRecord(
        volume_id=_required(node, "volumeId"),
        instance_id=_text(node, "instanceId") or "",
        device=_text(node, "device") or "",
        status=AttachmentStatus(_text(node, "status") or ""),
        attach_time=_timestamp(node, "attachTime"),
    )


def _volume(node: dict[str, Any]) -> Volume:
    return Volume(
        id=_required(node, "volumeId"),
        availability_zone=_text(node, "availabilityZone") or "",
        status=VolumeStatus(_text(node, "status") or ""),
        created_at=_timestamp(node, "createTime"),
        attachments=[_decode_entity(item, _attachment) for item in _items(node, "attachmentSet")],
        tags=_tags(node),
        size=_int(node, "size"),
        volume_type=_text(node, "volumeType"),
        snapshot_id=_text(node, "snapshotId"),
        iops=_int(node, "iops"),
    )


def _snapshot(node: dict[str, Any]) -> Snapshot:
    return Snapshot(
        id=_required(node, "snapshotId"),
        volume_id=_text(node, "volumeId") or "",
        status=SnapshotStatus(_text(node, "status") or ""),
        description=_text(node, "description") or "",
        start_time=_timestamp(node, "startTime"),
        progress=_text(node, "progress"),
        volume_size=_int(node, "volumeSize"),
    )


def _device_mapping(node: dict[str, Any]) -> DeviceMapping:
    ebs = node.get("ebs") or {}
    if not isinstance(ebs, dict):
        raise DecodeError("Expected <ebs> element in block device mapping")
    return DeviceMapping(
        device=_required(node, "deviceName"),
        volume_id=_text(ebs, "volumeId") or "",
        status=AttachmentStatus(_text(ebs, "status") or ""),
        attach_time=_timestamp(ebs, "attachTime"),
        delete_on_termination=_bool(ebs, "deleteOnTermination"),
    )


def _address(node: dict[str, Any]) -> ElasticAddress:
    return ElasticAddress(
        public_ip=_required(node, "publicIp"),
        allocation_id=_text(node, "allocationId"),
        instance_id=_text(node, "instanceId") or None,
        association_id=_text(node, "associationId"),
    )
