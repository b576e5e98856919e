"""
EC2 Query API gateway with signing and error handling.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from collections.abc import Mapping
from urllib.parse import urlsplit

import requests

from ..constants import API_VERSION, DEFAULT_ENDPOINT, HTTP_TIMEOUT
from ..exceptions import RemoteError, TransportError, ValidationError
from ..logging_config import get_logger
from .signing import PassthroughSigner, RequestSigner, SigV4Signer

logger = get_logger(__name__)


class EC2Gateway:
    """Sends signed Query API requests to an EC2 endpoint."""

    def __init__(
        self,
        endpoint: str | None = None,
        session: requests.Session | None = None,
        signer: RequestSigner | None = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        """
        Initialize gateway.

        Args:
            endpoint: Endpoint URL (optional, defaults to the global EC2 endpoint)
            session: HTTP session (optional, a new session is created)
            signer: Request signer (optional, requests are sent unsigned)
            timeout: Per-request timeout in seconds

        Raises:
            ValidationError: If the endpoint is not an http(s) URL
        """
        endpoint = endpoint or DEFAULT_ENDPOINT
        parts = urlsplit(endpoint)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValidationError(f"Invalid endpoint '{endpoint}'")

        self._endpoint = endpoint
        self._session = session or requests.Session()
        self._signer = signer or PassthroughSigner()
        self._timeout = timeout

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def send(self, action: str, params: Mapping[str, str] | None = None) -> bytes:
        """
        Send a signed GET request for an action.

        Args:
            action: Query API action name (e.g. 'DescribeVolumes')
            params: Action parameters

        Returns:
            Raw response body

        Raises:
            TransportError: If no response was received
            RemoteError: If the response status is not 2xx
        """
        query = [("Action", action)]
        query.extend((key, str(value)) for key, value in (params or {}).items())
        query.append(("Version", API_VERSION))

        try:
            prepared = self._session.prepare_request(
                requests.Request("GET", self._endpoint, params=query)
            )
        except requests.RequestException as e:
            raise TransportError(action, str(e)) from e

        self._signer.sign(prepared)
        logger.debug(f"Sending {action} to {self._endpoint}")

        try:
            response = self._session.send(prepared, timeout=self._timeout)
        except requests.RequestException as e:
            raise TransportError(action, str(e)) from e

        if not 200 <= response.status_code < 300:
            body = response.content.decode("utf-8", errors="replace")
            logger.debug(f"{action} failed with HTTP {response.status_code}")
            raise RemoteError(action, response.status_code, body)

        return response.content


def create_gateway(
    endpoint: str | None = None,
    profile: str | None = None,
    region: str | None = None,
) -> EC2Gateway:
    """
    Create a gateway that signs requests with SigV4 credentials.

    Args:
        endpoint: Endpoint URL (optional)
        profile: AWS profile (optional, uses SDK default)
        region: AWS region (optional, derived from the endpoint)

    Returns:
        Configured gateway

    Raises:
        CredentialsError: If no credentials can be resolved or the profile is unusable
        ValidationError: If the endpoint is invalid
    """
    endpoint = endpoint or DEFAULT_ENDPOINT
    signer = SigV4Signer.from_session(profile=profile, region=region, endpoint=endpoint)
    return EC2Gateway(endpoint, signer=signer)
