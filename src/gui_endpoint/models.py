from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .internal.config import get_config_value


class AuthMode(str, Enum):
    NONE = "none"
    STATIC = "static"
    LDAP = "ldap"


class EndpointConfig(BaseModel):
    """Persisted settings of the GUI/REST endpoint.

    Field names are the Python attributes; aliases are the serialized keys.
    Instances are frozen, so a record handed to a resolver is never changed
    behind its back.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    enabled: bool = True
    raw_address: str = Field(default_factory=lambda: get_config_value("default_address"), alias="address")
    raw_unix_socket_permissions: str = Field(default="", alias="unixSocketPermissions")
    user: str = ""
    password: str = Field(default="", repr=False)
    auth_mode: AuthMode = Field(default=AuthMode.NONE, alias="authMode")
    raw_use_tls: bool = Field(default=False, alias="useTLS")
    api_key: str = Field(default="", alias="apiKey", repr=False)
    insecure_admin_access: bool = Field(default=False, alias="insecureAdminAccess")
    theme: str = Field(default_factory=lambda: get_config_value("default_theme"))
    debugging: bool = False
    insecure_skip_host_check: bool = Field(default=False, alias="insecureSkipHostcheck")
    insecure_allow_frame_loading: bool = Field(default=False, alias="insecureAllowFrameLoading")
