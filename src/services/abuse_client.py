"""Abuse-contact directory client."""

import logging

import httpx

from src.models.abuse_record import AbuseRecord, ContactLookup, LookupStatus
from src.services.logger import log_upstream_failure


logger = logging.getLogger(__name__)

DEFAULT_UPSTREAM_HOST = "api.findabuse.email"

# Caching hint passed to the transport for every lookup (seconds)
CACHE_TTL = 84600


class AbuseContactClient:
    """Looks up abuse contacts for an address in the upstream directory.

    Lookups never raise: every outcome is classified as FOUND, NO_DATA or
    UPSTREAM_ERROR. Failed lookups are not retried.
    """

    API_URL = "https://{host}/api/v1/{address}"

    def __init__(
        self,
        client: httpx.AsyncClient,
        upstream_host: str = DEFAULT_UPSTREAM_HOST,
    ):
        """Initialize client.

        Args:
            client: Shared HTTPX client (owned by the caller).
            upstream_host: Host name of the abuse-contact API.
        """
        self.client = client
        self.upstream_host = upstream_host

    def url_for(self, address: str) -> str:
        return self.API_URL.format(host=self.upstream_host, address=address)

    async def fetch(self, address: str) -> object:
        """Fetch the raw JSON document for an address.

        Args:
            address: Canonical IP address.

        Returns:
            object: Decoded JSON body.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status.
            ValueError: If the body is not JSON.
        """
        response = await self.client.get(
            self.url_for(address),
            headers={"Cache-Control": f"max-age={CACHE_TTL}"},
        )
        response.raise_for_status()
        return response.json()

    async def lookup(self, address: str) -> ContactLookup:
        """Look up abuse contacts for a canonical address.

        Args:
            address: Canonical IPv4 or IPv6 literal.

        Returns:
            ContactLookup: FOUND with contacts in upstream order, NO_DATA when
            the directory knows nothing, UPSTREAM_ERROR on any failure.
        """
        try:
            payload = await self.fetch(address)
            record = AbuseRecord.from_payload(payload, address)
        except httpx.HTTPError as e:
            reason = f"{type(e).__name__}: {e}"
            log_upstream_failure(address, reason)
            return ContactLookup(
                address, LookupStatus.UPSTREAM_ERROR, response_data=reason
            )
        except ValueError as e:
            # Covers JSON decode errors and malformed documents
            reason = f"invalid_response: {e}"
            log_upstream_failure(address, reason)
            return ContactLookup(
                address, LookupStatus.UPSTREAM_ERROR, response_data=reason
            )

        if record is None or not record.has_contacts():
            logger.debug(f"No abuse contacts known for {address}")
            return ContactLookup(address, LookupStatus.NO_DATA)

        return ContactLookup(address, LookupStatus.FOUND, contacts=record.abuse)
