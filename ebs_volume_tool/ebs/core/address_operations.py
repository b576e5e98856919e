"""
Elastic IP operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from ..codec import decode_address_set, require_return
from ..exceptions import AmbiguousResultError, NotFoundError, ValidationError
from ..logging_config import get_logger
from ..models import ElasticAddress
from .client import EC2Gateway

logger = get_logger(__name__)


def describe_address(gateway: EC2Gateway, public_ip: str) -> ElasticAddress:
    """
    Look up an Elastic IP by its public address.

    Args:
        gateway: EC2 gateway
        public_ip: Public IP address

    Returns:
        The address record

    Raises:
        NotFoundError: If the address is not allocated to the account
        AmbiguousResultError: If more than one record matches
    """
    addresses = decode_address_set(gateway.send("DescribeAddresses", {"PublicIp.1": public_ip}))
    if not addresses:
        raise NotFoundError(f"Could not find the address {public_ip}")
    if len(addresses) > 1:
        raise AmbiguousResultError(f"Expected one address for {public_ip}, got {len(addresses)}")
    return addresses[0]


def associate_address(gateway: EC2Gateway, instance_id: str, public_ip: str) -> ElasticAddress:
    """
    Associate an Elastic IP with an instance.

    Reassociation is always allowed: an address bound to another instance is
    moved to this one.

    Args:
        gateway: EC2 gateway
        instance_id: Instance to bind the address to
        public_ip: Public IP address

    Returns:
        The address record as it was before association

    Raises:
        ValidationError: If the address has no allocation id (EC2-Classic)
    """
    address = describe_address(gateway, public_ip)
    # Allocation id is required for VPC addresses
    if not address.allocation_id:
        raise ValidationError(f"Address {public_ip} has no allocation id")

    if address.instance_id and address.instance_id != instance_id:
        logger.info(f"Moving {public_ip} from {address.instance_id} to {instance_id}")

    body = gateway.send(
        "AssociateAddress",
        {
            "AllocationId": address.allocation_id,
            "InstanceId": instance_id,
            "AllowReassociation": "true",
        },
    )
    require_return("AssociateAddress", body)
    logger.info(f"Associated {public_ip} with {instance_id}")
    return address
