"""Two-legged OAuth 1.0a request authorization."""

import secrets
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from fridgy.oauth.encoding import percent_encode
from fridgy.oauth.signature import Credential, RequestDescriptor, SignatureEngine

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"
NONCE_BYTES = 16
HEADER_SEPARATOR = ", "


def generate_nonce() -> str:
    """Return a fresh random nonce with 16 bytes of entropy."""
    return secrets.token_hex(NONCE_BYTES)


@dataclass(frozen=True)
class ProtocolParameters:
    """The six OAuth protocol parameters sent with a signed request."""

    consumer_key: str
    nonce: str
    signature_method: str
    timestamp: str
    version: str
    signature: str = field(repr=False)

    def as_oauth_params(self) -> dict[str, str]:
        """Return the parameters keyed by their ``oauth_*`` wire names."""
        return {
            "oauth_consumer_key": self.consumer_key,
            "oauth_nonce": self.nonce,
            "oauth_signature_method": self.signature_method,
            "oauth_timestamp": self.timestamp,
            "oauth_version": self.version,
            "oauth_signature": self.signature,
        }


@dataclass(frozen=True)
class RequestAuthorizer:
    """Generates nonce and timestamp and signs a request descriptor."""

    engine: SignatureEngine = field(default_factory=SignatureEngine)
    nonce_factory: Callable[[], str] = generate_nonce
    clock: Callable[[], float] = time.time

    def authorize(
        self, descriptor: RequestDescriptor, credential: Credential
    ) -> ProtocolParameters:
        """Return freshly signed protocol parameters for ``descriptor``."""
        credential.require()
        unsigned = {
            "oauth_consumer_key": credential.consumer_key,
            "oauth_nonce": self.nonce_factory(),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": str(int(self.clock())),
            "oauth_version": OAUTH_VERSION,
        }
        signature = self.engine.sign(descriptor, unsigned, credential)
        return ProtocolParameters(
            consumer_key=unsigned["oauth_consumer_key"],
            nonce=unsigned["oauth_nonce"],
            signature_method=SIGNATURE_METHOD,
            timestamp=unsigned["oauth_timestamp"],
            version=OAUTH_VERSION,
            signature=signature,
        )


def signed_query_params(
    descriptor: RequestDescriptor, parameters: ProtocolParameters
) -> list[tuple[str, str]]:
    """Merge domain and ``oauth_*`` parameters for query-string signing."""
    return [*descriptor.query_params, *parameters.as_oauth_params().items()]


def encode_query(pairs: Iterable[tuple[str, str]]) -> str:
    """Serialize query pairs with RFC 3986 percent-encoding."""
    return "&".join(
        f"{percent_encode(key)}={percent_encode(value)}" for key, value in pairs
    )


def append_query(url: str, query: str) -> str:
    """Append an encoded query, keeping any query the URL already carries."""
    if not query:
        return url
    separator = "&" if urlsplit(url).query else "?"
    return f"{url}{separator}{query}"


def signed_url(descriptor: RequestDescriptor, parameters: ProtocolParameters) -> str:
    """Return the descriptor URL with every signed parameter in its query."""
    query = encode_query(signed_query_params(descriptor, parameters))
    return append_query(descriptor.url, query)


def authorization_header(parameters: ProtocolParameters) -> dict[str, str]:
    """Return an ``Authorization`` header carrying the ``oauth_*`` parameters."""
    oauth_params = parameters.as_oauth_params()
    pairs = HEADER_SEPARATOR.join(
        f'{percent_encode(key)}="{percent_encode(oauth_params[key])}"'
        for key in sorted(oauth_params)
    )
    return {"Authorization": f"OAuth {pairs}"}
