from .core import (
    RequestContext,
    ServiceOperation,
    ServiceRequest,
    ServiceResponse,
)

__all__ = [
    "RequestContext",
    "ServiceOperation",
    "ServiceRequest",
    "ServiceResponse",
]
