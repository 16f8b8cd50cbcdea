from dogfinder_web.config import LoggingConfig, NetworkConfig, ServerConfig, load_server_config
from dogfinder_web.content_types import CONTENT_TYPES, DEFAULT_CONTENT_TYPE, content_type_for
from dogfinder_web.errors import (
    AssetNotFoundError,
    FallbackMissingError,
    PathTraversalError,
    StaticServeError,
)

__version__ = "0.1.0"

__all__ = [
    "AssetNotFoundError",
    "CONTENT_TYPES",
    "DEFAULT_CONTENT_TYPE",
    "FallbackMissingError",
    "LoggingConfig",
    "NetworkConfig",
    "PathTraversalError",
    "ServerConfig",
    "StaticServeError",
    "__version__",
    "content_type_for",
    "load_server_config",
]
