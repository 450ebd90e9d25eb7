"""
GoDaddy registrar provider implementation.

This module talks to the GoDaddy v1 Domains API with requests. Every
call goes through a RateLimitedTransport shared by the client instance.
"""

import json
import logging
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote, urlparse

import requests

from ..core.records import Domain, DomainRecord, RecordType
from ..exceptions import APIError, ConfigurationError, NotFoundError, TransportError
from .base_provider import RegistrarProvider
from .transport import RateLimitedTransport

logger = logging.getLogger(__name__)

HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CUSTOMER_ID = "X-Shopper-Id"
MEDIA_TYPE_JSON = "application/json"

DEFAULT_BASE_URL = "https://api.godaddy.com"
DEFAULT_PAGE_SIZE = 500
# (connect, read) in seconds
DEFAULT_TIMEOUT = (10, 30)

PATH_DOMAINS = "{base}/v1/domains"
PATH_DOMAIN = "{base}/v1/domains/{domain}"
PATH_RECORDS = "{base}/v1/domains/{domain}/records"
PATH_RECORDS_BY_TYPE = "{base}/v1/domains/{domain}/records/{type}"
PATH_RECORDS_BY_TYPE_AND_NAME = "{base}/v1/domains/{domain}/records/{type}/{name}"


def normalize_base_url(base_url: str) -> str:
    """Reduce a base URL to ``scheme://host``."""
    try:
        parsed = urlparse((base_url or "").strip())
    except ValueError as e:
        raise ConfigurationError(f"invalid baseUrl: {e}") from e

    if not parsed.scheme or not parsed.hostname:
        raise ConfigurationError("invalid baseUrl. expected format: scheme://host")

    try:
        port = parsed.port
    except ValueError as e:
        raise ConfigurationError(f"invalid baseUrl: {e}") from e

    # Credentials embedded in the URL are dropped
    host = f"[{parsed.hostname}]" if ":" in parsed.hostname else parsed.hostname
    if port is not None:
        host = f"{host}:{port}"
    return f"{parsed.scheme}://{host}"


class GoDaddyClient(RegistrarProvider):
    """GoDaddy API client."""

    def __init__(
        self,
        base_url: str,
        key: str,
        secret: str,
        transport: Optional[RateLimitedTransport] = None,
        timeout: Tuple[float, float] = DEFAULT_TIMEOUT,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.base_url = normalize_base_url(base_url)
        self.key = (key or "").strip()
        self.secret = (secret or "").strip()
        if not self.key or not self.secret:
            raise ConfigurationError("GoDaddy API key and secret are required")

        self.transport = transport or RateLimitedTransport()
        self.timeout = timeout
        self.page_size = page_size

        logger.info(f"GoDaddy client configured for {self.base_url}")

    def list_domains(self, customer_id: str) -> List[Domain]:
        """List the domains of the account."""
        url = PATH_DOMAINS.format(base=self.base_url)
        payload = self._execute(customer_id, "GET", url)
        return [Domain.from_api(item) for item in payload or []]

    def get_domain(self, customer_id: str, name: str) -> Domain:
        """Fetch the details for a domain."""
        url = PATH_DOMAIN.format(base=self.base_url, domain=self._quote(name))
        payload = self._execute(customer_id, "GET", url)
        return Domain.from_api(payload or {})

    def list_records(self, customer_id: str, domain: str) -> List[DomainRecord]:
        """Fetch every record of a domain, one page at a time.

        The registrar's ``offset`` is a page index starting at 1; paging
        stops at the first empty page.
        """
        url = PATH_RECORDS.format(base=self.base_url, domain=self._quote(domain))
        records: List[DomainRecord] = []
        offset = 1

        while True:
            page = self._execute(
                customer_id,
                "GET",
                url,
                params={"limit": self.page_size, "offset": offset},
            )
            if not page:
                break
            records.extend(DomainRecord.from_api(item) for item in page)
            offset += 1

        logger.info(f"Retrieved {len(records)} records for {domain} in {offset} page requests")
        return records

    def add_records(
        self, customer_id: str, domain: str, record_type: RecordType, records: List[DomainRecord]
    ) -> None:
        """Add records without affecting existing ones (PATCH)."""
        url = PATH_RECORDS.format(base=self.base_url, domain=self._quote(domain))
        self._execute(customer_id, "PATCH", url, body=self._serialize(records))
        logger.info(f"Added {len(records)} {record_type} records to {domain}")

    def replace_records_by_type(
        self, customer_id: str, domain: str, record_type: RecordType, records: List[DomainRecord]
    ) -> None:
        """Replace every record of one type (PUT)."""
        url = PATH_RECORDS_BY_TYPE.format(
            base=self.base_url, domain=self._quote(domain), type=record_type.value
        )
        self._execute(customer_id, "PUT", url, body=self._serialize(records))
        logger.info(f"Replaced {record_type} records of {domain} with {len(records)} records")

    def replace_records_by_type_and_name(
        self,
        customer_id: str,
        domain: str,
        record_type: RecordType,
        name: str,
        records: List[DomainRecord],
    ) -> None:
        """Replace the records matching one type and name (PUT)."""
        url = PATH_RECORDS_BY_TYPE_AND_NAME.format(
            base=self.base_url,
            domain=self._quote(domain),
            type=record_type.value,
            name=self._quote(name),
        )
        self._execute(customer_id, "PUT", url, body=self._serialize(records))
        logger.info(
            f"Replaced {record_type} records named '{name}' of {domain} with {len(records)} records"
        )

    def close(self):
        self.transport.close()

    def _headers(self, customer_id: Optional[str]) -> Dict[str, str]:
        headers = {
            HEADER_ACCEPT: MEDIA_TYPE_JSON,
            HEADER_CONTENT_TYPE: MEDIA_TYPE_JSON,
            HEADER_AUTHORIZATION: f"sso-key {self.key}:{self.secret}",
        }
        if customer_id and customer_id.strip():
            headers[HEADER_CUSTOMER_ID] = customer_id.strip()
        return headers

    def _execute(
        self,
        customer_id: Optional[str],
        method: str,
        url: str,
        params: Optional[Dict] = None,
        body: Optional[List[Dict]] = None,
    ):
        """Send one request and decode its JSON body."""
        if body is not None:
            logger.debug(f"{method} {url} {json.dumps(body)}")
        else:
            logger.debug(f"{method} {url} {params or ''}")

        try:
            response = self.transport.request(
                method,
                url,
                headers=self._headers(customer_id),
                params=params,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        self._raise_for_status(response)

        logger.debug(f"{response.status_code} {response.text}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                response.status_code, "INVALID_BODY", f"could not decode response: {e}"
            ) from e

    def _raise_for_status(self, response: requests.Response) -> None:
        """Decode a non-2xx response into an APIError."""
        if 200 <= response.status_code < 300:
            return

        logger.debug(f"{response.status_code} {response.text}")
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            code = payload.get("code", "")
            message = payload.get("message", "")
            fields = payload.get("fields") or []
        else:
            code, message, fields = "", response.text, []

        error_class = NotFoundError if response.status_code == 404 else APIError
        raise error_class(response.status_code, code, message, fields)

    @staticmethod
    def _serialize(records: List[DomainRecord]) -> List[Dict]:
        return [record.to_api() for record in records]

    @staticmethod
    def _quote(value: str) -> str:
        return quote(value, safe="@")
