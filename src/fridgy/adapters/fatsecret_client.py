"""FatSecret Platform API client with OAuth 1.0a request signing."""

import logging
from dataclasses import dataclass, field
from typing import Literal, Protocol

import httpx

from fridgy.app_logging import mask_secret
from fridgy.errors import LookupTimeoutError, NetworkError, ParseError
from fridgy.oauth.authorizer import (
    RequestAuthorizer,
    append_query,
    authorization_header,
    encode_query,
    signed_query_params,
)
from fridgy.oauth.signature import Credential, RequestDescriptor

FORMAT = "json"

_logger = logging.getLogger(__name__)


class FatSecretClient(Protocol):
    """Interface for FatSecret API interactions."""

    async def find_id_for_barcode(
        self, barcode: str, region: str, language: str | None = None
    ) -> dict[str, object]:
        """Look up the food id for a GTIN-13 and return raw API data."""

    async def get_food(
        self, food_id: str, region: str, language: str | None = None
    ) -> dict[str, object]:
        """Fetch a food by FatSecret id and return raw API data."""


@dataclass
class HttpxFatSecretClient(FatSecretClient):
    """HTTPX-backed FatSecret client signing every request."""

    credential: Credential
    barcode_url: str
    food_url: str
    http_client: httpx.AsyncClient
    authorizer: RequestAuthorizer = field(default_factory=RequestAuthorizer)
    auth_mode: Literal["query", "header"] = "query"
    timeout_seconds: float = 7.0

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        credential: Credential,
        barcode_url: str,
        food_url: str,
        auth_mode: Literal["query", "header"] = "query",
        timeout_seconds: float = 7.0,
    ) -> "HttpxFatSecretClient":
        """Create a FatSecret client with a managed httpx session."""
        credential.require()
        return cls(
            credential=credential,
            barcode_url=barcode_url,
            food_url=food_url,
            http_client=httpx.AsyncClient(),
            auth_mode=auth_mode,
            timeout_seconds=timeout_seconds,
        )

    async def find_id_for_barcode(
        self, barcode: str, region: str, language: str | None = None
    ) -> dict[str, object]:
        """Look up the food id for a GTIN-13 barcode."""
        params = _query(barcode=barcode, region=region, language=language)
        return await self._get(self.barcode_url, params)

    async def get_food(
        self, food_id: str, region: str, language: str | None = None
    ) -> dict[str, object]:
        """Fetch a food by FatSecret id."""
        params = _query(food_id=food_id, region=region, language=language)
        return await self._get(self.food_url, params)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, url: str, params: dict[str, str]) -> dict[str, object]:
        """Sign and send a GET request, returning the decoded JSON object."""
        descriptor = RequestDescriptor.create(url, params)
        parameters = self.authorizer.authorize(descriptor, self.credential)
        if self.auth_mode == "header":
            query = list(descriptor.query_params)
            headers = authorization_header(parameters)
        else:
            query = signed_query_params(descriptor, parameters)
            headers = {}
        _logger.debug(
            "FatSecret GET %s (key=%s, mode=%s)",
            url,
            mask_secret(self.credential.consumer_key),
            self.auth_mode,
        )
        try:
            response = await self.http_client.get(
                append_query(url, encode_query(query)),
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            raise LookupTimeoutError(self.timeout_seconds) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"FatSecret request failed: {exc}") from exc

        if not response.is_success:
            raise NetworkError(
                f"FatSecret returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError("FatSecret returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise ParseError("FatSecret returned a non-object JSON body")
        return payload


def _query(region: str, language: str | None, **params: str) -> dict[str, str]:
    """Build the domain query parameters in wire order."""
    query = {**params, "format": FORMAT, "region": region}
    if language:
        query["language"] = language
    return query
