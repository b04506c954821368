from .models import AuthMode, EndpointConfig
from .resolver import EndpointResolver
from .transport import ResolvedEndpoint, resolve

__all__ = ["AuthMode", "EndpointConfig", "EndpointResolver", "ResolvedEndpoint", "resolve"]
