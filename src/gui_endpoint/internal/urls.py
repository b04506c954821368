"""URL splitting for endpoint override strings.

``urllib.parse.urlsplit`` accepts nearly anything, while override values are
expected to be rejected on the same inputs a strict RFC 3986 parser rejects:
control characters, a missing scheme before ``:``, bad ports and broken
percent escapes. ``split_url`` applies those rules and returns only the parts
the resolver needs.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from urllib.parse import unquote

from ..exceptions import URLParseError

_ALNUM = string.ascii_letters + string.digits
_HOST_SAFE = frozenset(_ALNUM + "-_.~!$&'()*+,;=:[]<>\"")
_USERINFO_SAFE = frozenset(_ALNUM + "-._:~!$&'()*+,;=%@")
_HEX = frozenset(string.hexdigits)

_PATH = "path"
_HOST = "host"
_ZONE = "zone"


@dataclass(frozen=True)
class SplitURL:
    scheme: str
    host: str
    path: str


def split_url(raw: str) -> SplitURL:
    """Split ``raw`` into scheme, host and path.

    The scheme is lower-cased, host and path are percent-decoded, and query
    and fragment are discarded. A scheme followed by anything other than
    ``/`` is an opaque URL with an empty host and path.

    Raises:
        URLParseError: if ``raw`` is not a valid URL reference.
    """
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in raw):
        raise URLParseError(raw, "invalid control character in URL")

    rest, _, fragment = raw.partition("#")
    _unescape(raw, fragment)

    scheme, rest = _split_scheme(raw, rest)
    rest, _, _ = rest.partition("?")

    if not rest.startswith("/"):
        if scheme:
            return SplitURL(scheme=scheme, host="", path="")
        segment = rest.partition("/")[0]
        if ":" in segment:
            raise URLParseError(raw, "first path segment in URL cannot contain colon")

    host = ""
    if rest.startswith("//") and (scheme or not rest.startswith("///")):
        authority, slash, path = rest[2:].partition("/")
        rest = slash + path
        host = _parse_authority(raw, authority)

    return SplitURL(scheme=scheme, host=host, path=_unescape(raw, rest))


def escape_host(host: str) -> str:
    """Percent-encode ``host`` for use in a serialized URL."""
    out = []
    for byte in _to_bytes(host):
        char = chr(byte)
        if byte < 0x80 and char in _HOST_SAFE:
            out.append(char)
        else:
            out.append(f"%{byte:02X}")
    return "".join(out)


def _split_scheme(raw: str, rest: str) -> tuple[str, str]:
    for i, char in enumerate(rest):
        if char.isascii() and char.isalpha():
            continue
        if char.isascii() and (char.isdigit() or char in "+-."):
            if i == 0:
                return "", rest
            continue
        if char == ":":
            if i == 0:
                raise URLParseError(raw, "missing protocol scheme")
            return rest[:i].lower(), rest[i + 1 :]
        return "", rest
    return "", rest


def _parse_authority(raw: str, authority: str) -> str:
    userinfo, at, hostport = authority.rpartition("@")
    host = _parse_host(raw, hostport)
    if at:
        if not all(c in _USERINFO_SAFE for c in userinfo):
            raise URLParseError(raw, "invalid userinfo")
        _unescape(raw, userinfo)
    return host


def _parse_host(raw: str, host: str) -> str:
    if host.startswith("["):
        end = host.rfind("]")
        if end < 0:
            raise URLParseError(raw, "missing ']' in host")
        port = host[end + 1 :]
        if not _valid_optional_port(port):
            raise URLParseError(raw, f"invalid port {port!r} after host")
        # RFC 6874 zone identifier, "[fe80::1%25en0]"
        zone = host.find("%25", 0, end)
        if zone >= 0:
            return (
                _unescape(raw, host[:zone], mode=_HOST)
                + _unescape(raw, host[zone:end], mode=_ZONE)
                + _unescape(raw, host[end:], mode=_HOST)
            )
    else:
        colon = host.rfind(":")
        port = host[colon:] if colon >= 0 else ""
        if not _valid_optional_port(port):
            raise URLParseError(raw, f"invalid port {port!r} after host")
    return _unescape(raw, host, mode=_HOST)


def _valid_optional_port(port: str) -> bool:
    if port == "":
        return True
    if port[0] != ":":
        return False
    return all(c in string.digits for c in port[1:])


def _unescape(raw: str, value: str, mode: str = _PATH) -> str:
    i = 0
    while i < len(value):
        char = value[i]
        if char == "%":
            escape = value[i : i + 3]
            if len(escape) < 3 or escape[1] not in _HEX or escape[2] not in _HEX:
                raise URLParseError(raw, f"invalid URL escape {escape!r}")
            # Hosts may only percent-encode non-ASCII bytes, and "%" itself.
            if mode == _HOST and int(escape[1], 16) < 8 and escape != "%25":
                raise URLParseError(raw, f"invalid URL escape {escape!r}")
            if mode == _ZONE:
                decoded = chr(int(escape[1:], 16))
                if escape != "%25" and decoded != " " and decoded not in _HOST_SAFE:
                    raise URLParseError(raw, f"invalid URL escape {escape!r}")
            i += 3
            continue
        if mode != _PATH and char.isascii() and char not in _HOST_SAFE:
            raise URLParseError(raw, f"invalid character {char!r} in host name")
        i += 1
    # Bytes that are not valid UTF-8 survive as surrogates, see _to_bytes.
    return unquote(value, errors="surrogateescape")


def _to_bytes(value: str) -> bytes:
    try:
        return value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return value.encode("utf-8", "surrogatepass")
