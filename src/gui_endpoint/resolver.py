"""Effective GUI endpoint settings.

An ``EndpointResolver`` combines a persisted ``EndpointConfig`` with the
override variables of an environment (``STGUIADDRESS`` and ``STGUIAPIKEY`` by
default) and derives the values a listener, a TLS setup or a front-end needs.

Usage:
    resolver = EndpointResolver(config)                      # live os.environ
    resolver = EndpointResolver(config, {"STGUIADDRESS": "unix:///run/gui.sock"})
    resolver.network(), resolver.address(), resolver.url()

Nothing here raises on bad input: malformed overrides and permission strings
degrade to documented fallbacks and the next layer (bind, connect) reports
the real failure.
"""

import logging
import os
import secrets
from typing import Mapping, Optional

from .exceptions import URLParseError
from .internal.config import get_config_value
from .internal.urls import SplitURL, escape_host, split_url
from .models import AuthMode, EndpointConfig

logger = logging.getLogger(__name__)

UNIX_SCHEME_PREFIX = "unix"

# An override starting with the first prefix uses TLS iff it starts with the second.
TLS_PREFIXES = (
    ("http", "https:"),
    ("unix", "unixs:"),
)

# Bind-all host prefixes and their loopback replacement for browsable URLs.
LOOPBACK_SUBSTITUTIONS = (
    (":", "127.0.0.1:"),
    ("0.0.0.0:", "127.0.0.1:"),
    ("[::]:", "[::1]:"),
)

PERMISSION_MASK = 0o777
_OCTAL_DIGITS = frozenset("01234567")
_MAX_PERMISSION_VALUE = 2**32 - 1


class EndpointResolver:
    def __init__(self, config: EndpointConfig, environ: Optional[Mapping[str, str]] = None) -> None:
        self.config = config
        # None means "read os.environ on every call"
        self.environ = environ

    def _getenv(self, setting: str) -> str:
        environ = os.environ if self.environ is None else self.environ
        return environ.get(get_config_value(setting), "")

    def _address_override(self) -> str:
        return self._getenv("address_env")

    def _split_override(self, override: str) -> Optional[SplitURL]:
        try:
            return split_url(override)
        except URLParseError as e:
            logger.debug(f"Unparseable address override: {e}")
            return None

    def is_overridden(self) -> bool:
        return self._address_override() != ""

    def address(self) -> str:
        """Address to listen on: ``host:port`` or a Unix socket path.

        A slash in the override marks the ``scheme://host:port`` form, which
        is reduced to its host (or path, for ``unix*`` schemes). Without a
        slash the override is used as is.
        """
        override = self._address_override()
        if override:
            if "/" in override:
                parsed = self._split_override(override)
                if parsed is None:
                    return override
                if parsed.scheme.startswith(UNIX_SCHEME_PREFIX):
                    return parsed.path
                return parsed.host
            logger.debug(f"Using address override {override!r}")
            return override

        return self.config.raw_address

    def network(self) -> str:
        """Transport family, ``"tcp"`` or ``"unix"``.

        Only a slash-containing override with a ``unix*`` scheme, or a
        configured address starting with ``/``, selects ``"unix"``. A bare
        override never does, even when it is a socket path.
        """
        override = self._address_override()
        if "/" in override:
            parsed = self._split_override(override)
            if parsed is None:
                return "tcp"
            if parsed.scheme.startswith(UNIX_SCHEME_PREFIX):
                return "unix"
        if self.config.raw_address.startswith("/"):
            return "unix"
        return "tcp"

    def use_tls(self) -> bool:
        override = self._address_override()
        if override:
            for prefix, tls_prefix in TLS_PREFIXES:
                if override.startswith(prefix):
                    return override.startswith(tls_prefix)
        return self.config.raw_use_tls

    def unix_socket_permissions(self) -> int:
        """Permission bits for the socket file, 0 meaning "leave as created"."""
        raw = self.config.raw_unix_socket_permissions
        if not raw or not _OCTAL_DIGITS.issuperset(raw):
            if raw:
                logger.debug(f"Ignoring malformed unix socket permissions {raw!r}")
            return 0
        perm = int(raw, 8)
        if perm > _MAX_PERMISSION_VALUE:
            logger.debug(f"Ignoring out of range unix socket permissions {raw!r}")
            return 0
        return perm & PERMISSION_MASK

    def url(self) -> str:
        """URL for front-ends to display.

        Bind-all hosts are replaced by loopback so the link can be opened
        locally. A socket path in the record wins over any override.
        """
        if self.config.raw_address.startswith("/"):
            return "unix://" + self.config.raw_address

        scheme = "https" if self.use_tls() else "http"
        host = self.address()
        for prefix, loopback in LOOPBACK_SUBSTITUTIONS:
            if host.startswith(prefix):
                host = loopback + host[len(prefix) :]
                break

        return f"{scheme}://{escape_host(host)}/"

    def is_auth_enabled(self) -> bool:
        return self.config.auth_mode == AuthMode.LDAP or (
            len(self.config.user) > 0 and len(self.config.password) > 0
        )

    def is_valid_api_key(self, api_key: str) -> bool:
        """True when ``api_key`` matches the configured key or the override key."""
        if not api_key:
            return False

        # surrogatepass keeps undecodable environment bytes comparable
        candidate = api_key.encode("utf-8", "surrogatepass")
        for valid_key in (self.config.api_key, self._getenv("api_key_env")):
            if valid_key and secrets.compare_digest(candidate, valid_key.encode("utf-8", "surrogatepass")):
                return True
        return False

    def copy(self) -> EndpointConfig:
        return self.config.model_copy(deep=True)
