# Infrastructure module - Configuration and logging

from .logging import (
    get_logger, configure_logging, RequestContext,
    get_request_id, generate_request_id
)
from .config import PlunkConfig, load_config

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "RequestContext",
    "get_request_id",
    "generate_request_id",
    # Config
    "PlunkConfig",
    "load_config",
]
