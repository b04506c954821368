import dataclasses

import pytest

from gui_endpoint import AuthMode, EndpointConfig, resolve


def test_resolve_tcp_defaults():
    endpoint = resolve(EndpointConfig(raw_address="0.0.0.0:8384"), {})

    assert endpoint.network == "tcp"
    assert endpoint.address == "0.0.0.0:8384"
    assert endpoint.use_tls is False
    assert endpoint.url == "http://127.0.0.1:8384/"
    assert endpoint.unix_socket_permissions == 0
    assert endpoint.overridden is False
    assert endpoint.auth_enabled is False


def test_resolve_unix_override():
    config = EndpointConfig(raw_unix_socket_permissions="660", auth_mode=AuthMode.LDAP)
    endpoint = resolve(config, {"STGUIADDRESS": "unixs:///run/gui.sock"})

    assert endpoint.network == "unix"
    assert endpoint.address == "/run/gui.sock"
    assert endpoint.use_tls is True
    assert endpoint.unix_socket_permissions == 0o660
    assert endpoint.overridden is True
    assert endpoint.auth_enabled is True


def test_resolved_endpoint_is_frozen():
    endpoint = resolve(EndpointConfig(), {})
    with pytest.raises(dataclasses.FrozenInstanceError):
        endpoint.address = "elsewhere"


def test_to_dict():
    data = resolve(EndpointConfig(raw_address="[::]:8384", raw_use_tls=True), {}).to_dict()

    assert data == {
        "network": "tcp",
        "address": "[::]:8384",
        "use_tls": True,
        "url": "https://[::1]:8384/",
        "unix_socket_permissions": 0,
        "overridden": False,
        "auth_enabled": False,
    }
