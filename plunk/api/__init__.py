# API module - Plunk HTTP client
# One coroutine per endpoint, bearer auth, status codes mapped to errors

from .transport import HttpExecutor, Request, RequestMethod, Response, TokenAuthorizer
from .client import Plunk, map_response

__all__ = [
    "Plunk", "map_response",
    "HttpExecutor", "Request", "RequestMethod", "Response", "TokenAuthorizer",
]
