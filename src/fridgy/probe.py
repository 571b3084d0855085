"""
Command-line probe for FatSecret barcode lookups.

Signs a barcode lookup exactly as the API does, prints the outgoing request
with the consumer key and signature masked, and reports the outcome.

Usage:
    fridgy-probe [barcode] [--region US] [--language en]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from urllib.parse import parse_qsl, urlsplit

import httpx

from fridgy.adapters.fatsecret_client import HttpxFatSecretClient
from fridgy.app_logging import mask_secret
from fridgy.config import FatSecretSettings, load_credential
from fridgy.errors import FridgyError, NetworkError, ProviderError
from fridgy.oauth.authorizer import encode_query
from fridgy.services.cache import BoundedTtlCache
from fridgy.services.nutrition import NutritionService

DEFAULT_BARCODE = "0049000050103"

_MASKED_PARAMS = {"oauth_consumer_key", "oauth_signature"}

# Known FatSecret error codes and what usually causes them.
_ERROR_HINTS = {
    1: "barcode unknown in that region",
    5: "invalid consumer key, check FATSECRET_CONSUMER_KEY",
    14: "key not provisioned for the barcode scope",
}


def masked_url(url: httpx.URL) -> str:
    """Render a request URL with credential-bearing parameters masked."""
    parts = urlsplit(str(url))
    pairs = [
        (key, mask_secret(value) if key in _MASKED_PARAMS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    base = f"{parts.scheme}://{parts.netloc}{parts.path}"
    return f"{base}?{encode_query(pairs)}" if pairs else base


async def probe(
    service: NutritionService, barcode: str, region: str, language: str | None
) -> int:
    """Run one lookup and print the outcome; returns the exit code."""
    try:
        food_id = await service.lookup_food_identifier(barcode, region, language)
    except ProviderError as exc:
        hint = _ERROR_HINTS.get(exc.code)
        suffix = f" ({hint})" if hint else ""
        print(f"Error {exc.code}: {exc.message}{suffix}")
        return 1
    except NetworkError as exc:
        print(f"Network error: {exc}")
        return 1
    except FridgyError as exc:
        print(f"Lookup failed: {exc}")
        return 1
    if food_id is None:
        print("Returned food_id 0: no match in the database")
        return 1
    print(f"Success! food_id = {food_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the probe argument parser."""
    parser = argparse.ArgumentParser(
        prog="fridgy-probe",
        description="Probe the FatSecret barcode endpoint with a signed request",
    )
    parser.add_argument("barcode", nargs="?", default=DEFAULT_BARCODE)
    parser.add_argument("--region", default=None, help="Region code, e.g. US")
    parser.add_argument("--language", default=None, help="Language code, e.g. en")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``fridgy-probe``."""
    args = build_parser().parse_args(argv)
    settings = FatSecretSettings()
    try:
        credential = load_credential(settings)
    except FridgyError as exc:
        print(f"Error: {exc}")
        return 2

    async def show_request(request: httpx.Request) -> None:
        print(f"GET {masked_url(request.url)}")

    async def run() -> int:
        http_client = httpx.AsyncClient(event_hooks={"request": [show_request]})
        client = HttpxFatSecretClient(
            credential=credential,
            barcode_url=settings.fatsecret_barcode_url,
            food_url=settings.fatsecret_food_url,
            http_client=http_client,
            auth_mode=settings.fatsecret_auth_mode,
            timeout_seconds=settings.lookup_timeout_seconds,
        )
        service = NutritionService(client=client, cache=BoundedTtlCache())
        try:
            return await probe(
                service,
                args.barcode,
                args.region or settings.fatsecret_region,
                args.language or settings.fatsecret_language,
            )
        finally:
            await client.close()

    return asyncio.run(run())


if __name__ == "__main__":
    sys.exit(main())
