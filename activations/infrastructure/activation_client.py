"""
Activation server client.

Registers issued licenses with the remote activation server. Credentials
are attached to each request; the client keeps no per-call state.
"""
import logging
from typing import Optional

import requests
from asgiref.sync import sync_to_async

from activations.domain.registration import RegistrationRecord, ServerCredentials, ServerResponse
from core.domain.exceptions import RegistrationTransportFailure
from core.domain.value_objects import InstallPolicy

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class ActivationRegistrationClient:
    """HTTP client for the activation server's insert endpoint."""

    def __init__(self, timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS):
        """
        Initialize client.

        Args:
            timeout: Seconds to wait for connect and read
        """
        self.timeout = timeout

    async def register(
        self,
        server_url: str,
        username: str,
        password: str,
        signature: bytes,
        install_policy: InstallPolicy,
    ) -> ServerResponse:
        """
        Register a license signature and its install policy.

        Args:
            server_url: Activation server base URL
            username: HTTP Basic username
            password: HTTP Basic password
            signature: License signature
            install_policy: Install policy to enforce

        Returns:
            ServerResponse with the raw status and body

        Raises:
            MissingCredentials: If url, username or password is blank
            MissingSignature: If signature is empty
            RegistrationTransportFailure: If the server cannot be reached
        """
        credentials = ServerCredentials(server_url, username, password)
        record = RegistrationRecord(signature=signature, install_policy=install_policy)
        return await sync_to_async(self._post, thread_sensitive=False)(credentials, record)

    def _post(self, credentials: ServerCredentials, record: RegistrationRecord) -> ServerResponse:
        """
        Send the registration request.

        Args:
            credentials: Server credentials
            record: Registration record

        Returns:
            ServerResponse
        """
        headers = {
            "Authorization": credentials.authorization_header(),
            "Accept": "application/json",
            "User-Agent": "License-Manager/1.0",
        }

        try:
            response = requests.post(
                credentials.insert_url,
                json=record.to_payload(),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Registration request to %s failed: %s", credentials.insert_url, e)
            raise RegistrationTransportFailure(
                f"Unable to reach the activation server: {e}"
            ) from e

        logger.info(
            "Registration request to %s completed with status %s",
            credentials.insert_url,
            response.status_code,
        )
        return ServerResponse(status_code=response.status_code, body=response.text)
