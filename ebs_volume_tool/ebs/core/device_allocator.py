"""
Device path allocation for data volumes.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from collections.abc import Iterable

from ..constants import DATA_DEVICE_PREFIX, FIRST_DATA_DEVICE, LAST_DATA_DEVICE
from ..logging_config import get_logger
from ..models import DeviceMapping

logger = get_logger(__name__)


def next_device_path(mappings: Iterable[DeviceMapping]) -> str:
    """
    Compute the next unused data device path for an instance.

    Starts at /dev/sdf and, for every mapped /dev/sd* device that sorts at or
    after the current candidate, moves the candidate one past that device by
    incrementing its last character. The last character is bumped without
    carry, so past /dev/sdz the result continues with /dev/sd{, /dev/sd|, ...
    Those names are not valid device names; callers relying on the single
    letter convention get at most 21 data volumes (f..z).

    Args:
        mappings: Current block device mapping of the instance (any order)

    Returns:
        Device path not present in the mapping
    """
    device = FIRST_DATA_DEVICE
    for mapping in mappings:
        if not mapping.device.startswith(DATA_DEVICE_PREFIX):
            continue
        if mapping.device >= device:
            device = mapping.device[:-1] + chr(ord(mapping.device[-1]) + 1)

    if device > LAST_DATA_DEVICE:
        logger.warning(f"Allocated device {device} is past {LAST_DATA_DEVICE}")
    return device
