"""OAuth 1.0a HMAC-SHA1 signature construction (RFC 5849 section 3.4)."""

import base64
import hashlib
import hmac
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, urlsplit

from fridgy.errors import MissingCredentialError
from fridgy.oauth.encoding import percent_encode

HmacFunction = Callable[[str, str], bytes]

SIGNATURE_PARAM = "oauth_signature"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def hmac_sha1(message: str, key: str) -> bytes:
    """Return the raw HMAC-SHA1 digest of ``message`` keyed by ``key``."""
    return hmac.new(key.encode(), message.encode(), hashlib.sha1).digest()


@dataclass(frozen=True)
class Credential:
    """FatSecret consumer credential."""

    consumer_key: str
    consumer_secret: str = field(repr=False)

    def require(self) -> None:
        """Raise if either half of the credential is blank."""
        if not self.consumer_key:
            raise MissingCredentialError("consumer_key")
        if not self.consumer_secret:
            raise MissingCredentialError("consumer_secret")


@dataclass(frozen=True)
class RequestDescriptor:
    """A request to be signed: base URL, query parameters and method."""

    url: str
    query_params: tuple[tuple[str, str], ...] = ()
    method: str = "GET"

    @classmethod
    def create(
        cls, url: str, params: Mapping[str, str], method: str = "GET"
    ) -> "RequestDescriptor":
        """Build a descriptor from a mapping, keeping its insertion order."""
        return cls(
            url=url,
            query_params=tuple((key, str(value)) for key, value in params.items()),
            method=method,
        )


def base_string_uri(url: str) -> str:
    """Return the scheme, authority and path used in the base string."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if parts.port is not None and parts.port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{parts.port}"
    path = parts.path or "/"
    return f"{scheme}://{host}{path}"


def request_parameters(
    descriptor: RequestDescriptor, oauth_params: Mapping[str, str]
) -> list[tuple[str, str]]:
    """Collect every parameter covered by the signature."""
    params = parse_qsl(urlsplit(descriptor.url).query, keep_blank_values=True)
    params.extend(descriptor.query_params)
    params.extend(
        (key, value) for key, value in oauth_params.items() if key != SIGNATURE_PARAM
    )
    return params


def normalize_parameters(params: Iterable[tuple[str, str]]) -> str:
    """Encode, sort and join parameters (RFC 5849 section 3.4.1.3.2)."""
    encoded = sorted(
        (percent_encode(key), percent_encode(value)) for key, value in params
    )
    return "&".join(f"{key}={value}" for key, value in encoded)


def signature_base_string(
    method: str, url: str, params: Iterable[tuple[str, str]]
) -> str:
    """Build the signature base string (RFC 5849 section 3.4.1)."""
    return "&".join(
        (
            method.upper(),
            percent_encode(base_string_uri(url)),
            percent_encode(normalize_parameters(params)),
        )
    )


def signing_key(consumer_secret: str, token_secret: str = "") -> str:
    """Build the HMAC key from the consumer and token secrets."""
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"


@dataclass(frozen=True)
class SignatureEngine:
    """Computes HMAC-SHA1 signatures with a pluggable HMAC function."""

    hmac_function: HmacFunction = hmac_sha1

    def base_string(
        self, descriptor: RequestDescriptor, oauth_params: Mapping[str, str]
    ) -> str:
        """Return the base string that :meth:`sign` feeds to the HMAC."""
        return signature_base_string(
            descriptor.method,
            descriptor.url,
            request_parameters(descriptor, oauth_params),
        )

    def sign(
        self,
        descriptor: RequestDescriptor,
        oauth_params: Mapping[str, str],
        credential: Credential,
    ) -> str:
        """Return the base64 signature for a two-legged request."""
        credential.require()
        digest = self.hmac_function(
            self.base_string(descriptor, oauth_params),
            signing_key(credential.consumer_secret),
        )
        return base64.b64encode(digest).decode("ascii")
