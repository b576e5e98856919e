"""
Request signing for the EC2 Query API.

Signers are injected into the gateway and called with the prepared request
immediately before it is sent. They mutate the request in place.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any, Protocol
from urllib.parse import urlsplit

import boto3
import requests
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.exceptions import BotoCoreError

from ..constants import DEFAULT_REGION, SIGNING_SERVICE
from ..exceptions import CredentialsError


class RequestSigner(Protocol):
    """Anything that can sign an outbound request in place."""

    def sign(self, request: requests.PreparedRequest) -> None: ...


class PassthroughSigner:
    """Signer that leaves requests untouched. Used against local test endpoints."""

    def sign(self, request: requests.PreparedRequest) -> None:
        return None


class SigV4Signer:
    """Sign requests with AWS Signature Version 4 via botocore."""

    def __init__(self, credentials: Any, region: str, service: str = SIGNING_SERVICE):
        """
        Initialize signer.

        Args:
            credentials: botocore credentials (frozen or refreshable)
            region: Region used in the credential scope
            service: Service name used in the credential scope
        """
        self.credentials = credentials
        self.region = region
        self.service = service

    @classmethod
    def from_session(
        cls,
        profile: str | None = None,
        region: str | None = None,
        endpoint: str | None = None,
    ) -> "SigV4Signer":
        """
        Build a signer from the standard boto3 credential chain.

        Args:
            profile: AWS profile (optional, uses SDK default)
            region: AWS region (optional, derived from endpoint or session)
            endpoint: Endpoint URL used to derive the signing region

        Returns:
            Configured signer

        Raises:
            CredentialsError: If no credentials can be resolved or the profile is unusable
        """
        try:
            session = boto3.Session(profile_name=profile, region_name=region)
            credentials = session.get_credentials()
        except BotoCoreError as e:
            raise CredentialsError(f"Could not load AWS credentials: {e}") from e
        if credentials is None:
            raise CredentialsError(
                "No AWS credentials found; configure a profile or set AWS_ACCESS_KEY_ID"
            )
        signing_region = (
            region or region_from_endpoint(endpoint) or session.region_name or DEFAULT_REGION
        )
        return cls(credentials, signing_region)

    def sign(self, request: requests.PreparedRequest) -> None:
        aws_request = AWSRequest(
            method=request.method,
            url=request.url,
            headers=dict(request.headers),
            data=request.body or b"",
        )
        SigV4Auth(self.credentials, self.service, self.region).add_auth(aws_request)
        request.headers.update(dict(aws_request.headers.items()))


def region_from_endpoint(endpoint: str | None) -> str | None:
    """
    Extract the region from an EC2 endpoint host.

    Args:
        endpoint: URL such as https://ec2.eu-west-1.amazonaws.com

    Returns:
        Region name, or None for the global endpoint and non-AWS hosts
    """
    if not endpoint:
        return None
    host = urlsplit(endpoint).hostname or ""
    parts = host.split(".")
    if len(parts) >= 4 and parts[0] == SIGNING_SERVICE and parts[-2] == "amazonaws":
        return parts[1]
    return None
