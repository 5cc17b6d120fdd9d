from typing import Any, NamedTuple, Optional, TypedDict

from botocore.model import OperationModel, ServiceModel

from slimaws.http import Request, Response


class ServiceRequest(TypedDict):
    pass


ServiceResponse = Any


class ServiceOperation(NamedTuple):
    service: str
    operation: str


class RequestContext:
    """
    Holds the state of a single call to a service: the operation being invoked, its input, and the HTTP exchange
    once it has happened.
    """

    service: Optional[ServiceModel]
    operation: Optional[OperationModel]
    region: Optional[str]
    endpoint: Optional[str]
    service_request: Optional[ServiceRequest]
    request: Optional[Request]
    response: Optional[Response]

    def __init__(self) -> None:
        super().__init__()
        self.service = None
        self.operation = None
        self.region = None
        self.endpoint = None
        self.service_request = None
        self.request = None
        self.response = None

    @property
    def service_operation(self) -> Optional[ServiceOperation]:
        if not self.service or not self.operation:
            return None
        return ServiceOperation(self.service.service_name, self.operation.name)
