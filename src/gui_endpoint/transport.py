from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping

from .models import EndpointConfig
from .resolver import EndpointResolver


@dataclass(frozen=True)
class ResolvedEndpoint:
    network: str
    address: str
    use_tls: bool
    url: str
    unix_socket_permissions: int
    overridden: bool
    auth_enabled: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def resolve(config: EndpointConfig, environ: Mapping[str, str] | None = None) -> ResolvedEndpoint:
    resolver = EndpointResolver(config, environ)
    return ResolvedEndpoint(
        network=resolver.network(),
        address=resolver.address(),
        use_tls=resolver.use_tls(),
        url=resolver.url(),
        unix_socket_permissions=resolver.unix_socket_permissions(),
        overridden=resolver.is_overridden(),
        auth_enabled=resolver.is_auth_enabled(),
    )
