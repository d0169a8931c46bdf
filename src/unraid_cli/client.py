"""GraphQL client for the Unraid API"""

import logging
from typing import Any, Dict, List, Optional

import requests
import urllib3

from . import queries
from .containers import Container
from .exceptions import TransportError, DecodeError, GraphQLError, NoDataError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def decode_envelope(payload: Dict[str, Any]) -> Any:
    """Return the data of a GraphQL response envelope or raise its errors"""
    errors = payload.get('errors')
    if errors is not None and not isinstance(errors, list):
        raise DecodeError("Failed to parse GraphQL response: 'errors' is not a list")
    if errors:
        messages = [
            e.get('message', str(e)) if isinstance(e, dict) else str(e)
            for e in errors
        ]
        raise GraphQLError(messages)

    data = payload.get('data')
    if data is None:
        raise NoDataError()

    return data


def http_error(response: requests.Response) -> TransportError:
    return TransportError(
        f"Server returned HTTP {response.status_code}: {response.reason}",
        response.status_code
    )


class APIClient:
    """Client for an Unraid server's GraphQL endpoint.

    Certificate verification is off unless verify_ssl is set; Unraid servers
    ship with self-signed certificates.
    """

    def __init__(self, url: str, api_key: str, timeout: float = DEFAULT_TIMEOUT,
                 verify_ssl: bool = False):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.session = requests.Session()
        self.session.headers['Content-Type'] = 'application/json'
        self.session.headers['x-api-key'] = api_key

        if not verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.session.close()

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Any:
        """Send a query or mutation and return its data"""
        body = {'query': query, 'variables': variables or {}}
        logger.debug("POST %s (timeout=%ss, verify_ssl=%s)", self.url, self.timeout, self.verify_ssl)

        try:
            response = self.session.post(
                self.url,
                json=body,
                timeout=self.timeout,
                verify=self.verify_ssl
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Failed to send GraphQL request: {e}") from e

        logger.debug("Response status %s", response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            if not response.ok:
                raise http_error(response) from e
            raise DecodeError(f"Failed to parse GraphQL response: {e}") from e

        if not isinstance(payload, dict):
            if not response.ok:
                raise http_error(response)
            raise DecodeError("Failed to parse GraphQL response: expected a JSON object")

        if not response.ok and 'errors' not in payload and 'data' not in payload:
            raise http_error(response)

        return decode_envelope(payload)

    # Docker operations
    def list_containers(self) -> List[Container]:
        """List all containers, in server order"""
        data = self.execute(queries.LIST_CONTAINERS)
        try:
            return [Container.from_dict(c) for c in data['docker']['containers']]
        except (KeyError, TypeError) as e:
            raise DecodeError(f"Unexpected container list in response: {e}") from e

    def start_container(self, container_id: str) -> Any:
        """Start a container"""
        return self.execute(queries.START_CONTAINER, {'id': container_id})

    def stop_container(self, container_id: str) -> Any:
        """Stop a container"""
        return self.execute(queries.STOP_CONTAINER, {'id': container_id})

    def update_container(self, container_id: str) -> Any:
        """Pull the latest image for a container and recreate it"""
        return self.execute(queries.UPDATE_CONTAINER, {'id': container_id})
