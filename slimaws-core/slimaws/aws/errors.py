"""Maps error responses of AWS services to typed exceptions."""
import logging
from enum import Enum
from typing import Any, Dict, Optional

from botocore.model import OperationModel, StructureShape

from slimaws.aws.protocol.parser import parse_error
from slimaws.constants import HEADER_AMZN_REQUEST_ID
from slimaws.http import Response

LOG = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """The kinds of errors the services report, shared among all services."""

    ACCESS_DENIED = "AccessDenied"
    BAD_REQUEST = "BadRequest"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    STATEMENT_TIMEOUT = "StatementTimeout"
    INTERNAL_ERROR = "InternalError"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    CONFLICT = "Conflict"
    SERVICE_QUOTA_EXCEEDED = "ServiceQuotaExceeded"
    THROTTLING = "Throttling"
    VALIDATION = "Validation"
    INVALID_PARAMETER = "InvalidParameter"
    LIMIT_EXCEEDED = "LimitExceeded"
    KMS_ERROR = "KmsError"
    INVALID_BATCH_REQUEST = "InvalidBatchRequest"
    ENDPOINT_DISABLED = "EndpointDisabled"
    SERVICE_ERROR = "ServiceError"


# error shape name -> kind, for the error shapes of all bundled services
ERROR_KINDS: Dict[str, ErrorKind] = {
    "AccessDeniedException": ErrorKind.ACCESS_DENIED,
    "AuthorizationErrorException": ErrorKind.ACCESS_DENIED,
    "InvalidSecurityException": ErrorKind.ACCESS_DENIED,
    "BadRequestException": ErrorKind.BAD_REQUEST,
    "ForbiddenException": ErrorKind.FORBIDDEN,
    "NotFoundException": ErrorKind.NOT_FOUND,
    "ResourceNotFoundException": ErrorKind.NOT_FOUND,
    "StatementTimeoutException": ErrorKind.STATEMENT_TIMEOUT,
    "InternalServerErrorException": ErrorKind.INTERNAL_ERROR,
    "InternalServerException": ErrorKind.INTERNAL_ERROR,
    "InternalErrorException": ErrorKind.INTERNAL_ERROR,
    "ServiceUnavailableError": ErrorKind.SERVICE_UNAVAILABLE,
    "ConflictException": ErrorKind.CONFLICT,
    "ConcurrentAccessException": ErrorKind.CONFLICT,
    "StaleTagException": ErrorKind.CONFLICT,
    "InvalidStateException": ErrorKind.CONFLICT,
    "ServiceQuotaExceededException": ErrorKind.SERVICE_QUOTA_EXCEEDED,
    "ThrottlingException": ErrorKind.THROTTLING,
    "ValidationException": ErrorKind.VALIDATION,
    "TagPolicyException": ErrorKind.VALIDATION,
    "InvalidParameterException": ErrorKind.INVALID_PARAMETER,
    "InvalidParameterValueException": ErrorKind.INVALID_PARAMETER,
    "TopicLimitExceededException": ErrorKind.LIMIT_EXCEEDED,
    "SubscriptionLimitExceededException": ErrorKind.LIMIT_EXCEEDED,
    "FilterPolicyLimitExceededException": ErrorKind.LIMIT_EXCEEDED,
    "ReplayLimitExceededException": ErrorKind.LIMIT_EXCEEDED,
    "TagLimitExceededException": ErrorKind.LIMIT_EXCEEDED,
    "KMSAccessDeniedException": ErrorKind.KMS_ERROR,
    "KMSDisabledException": ErrorKind.KMS_ERROR,
    "KMSInvalidStateException": ErrorKind.KMS_ERROR,
    "KMSNotFoundException": ErrorKind.KMS_ERROR,
    "KMSOptInRequired": ErrorKind.KMS_ERROR,
    "KMSThrottlingException": ErrorKind.KMS_ERROR,
    "EndpointDisabledException": ErrorKind.ENDPOINT_DISABLED,
    "PlatformApplicationDisabledException": ErrorKind.ENDPOINT_DISABLED,
    "BatchEntryIdsNotDistinctException": ErrorKind.INVALID_BATCH_REQUEST,
    "BatchRequestTooLongException": ErrorKind.INVALID_BATCH_REQUEST,
    "EmptyBatchRequestException": ErrorKind.INVALID_BATCH_REQUEST,
    "InvalidBatchEntryIdException": ErrorKind.INVALID_BATCH_REQUEST,
    "TooManyEntriesInBatchRequestException": ErrorKind.INVALID_BATCH_REQUEST,
}


class ServiceError(Exception):
    """
    An error response of a service operation.

    Attributes:
        kind            The kind of the error, ``ErrorKind.SERVICE_ERROR`` if the operation does not declare the code
        code            The error code as sent by the service
        message         The error message as sent by the service
        status_code     The HTTP status code of the response
        sender_fault    Whether the error was caused by the request (instead of the service)
        operation_name  The name of the operation that failed
        request_id      The id of the failed request, if the service sent one
        details         Additional members of the modeled error (f.e. ``dbConnectionId``)
    """

    kind: ErrorKind
    code: str
    message: str
    status_code: int
    sender_fault: bool
    operation_name: Optional[str]
    request_id: Optional[str]
    details: Dict[str, Any]

    def __init__(
        self,
        kind: ErrorKind,
        code: str,
        message: str = "",
        status_code: int = 400,
        sender_fault: bool = False,
        operation_name: str = None,
        request_id: str = None,
        details: Dict[str, Any] = None,
    ):
        self.kind = kind
        self.code = code
        self.message = message
        self.status_code = status_code
        self.sender_fault = sender_fault
        self.operation_name = operation_name
        self.request_id = request_id
        self.details = details or {}
        super().__init__(str(self))

    def __str__(self):
        return "An error occurred (%s) when calling the %s operation: %s" % (
            self.code,
            self.operation_name,
            self.message,
        )


class ClientError(ServiceError):
    """An error response with a status code below 500."""

    pass


class ServerError(ServiceError):
    """An error response with a status code of 500 or above."""

    pass


def error_kind_for_shape(shape: StructureShape) -> ErrorKind:
    return ERROR_KINDS.get(shape.name, ErrorKind.SERVICE_ERROR)


class ErrorMapper:
    """
    Creates the exceptions for the error responses of an operation. Only the error codes the operation declares are
    mapped to their kind, any other code results in an error of kind ``ErrorKind.SERVICE_ERROR`` which keeps the
    original code and message.
    """

    def __init__(self, operation: OperationModel):
        self.operation = operation
        self._kinds = {shape.error_code: error_kind_for_shape(shape) for shape in operation.error_shapes}

    def kind_for_code(self, code: str) -> ErrorKind:
        return self._kinds.get(code, ErrorKind.SERVICE_ERROR)

    def from_response(self, response: Response) -> ServiceError:
        """
        Parses the given error response and creates the matching exception. The exception is not raised.

        :param response: an HTTP response with a status code >= 300
        :return: a ClientError or a ServerError
        """
        parsed = parse_error(self.operation, response)
        error = parsed["Error"]
        code = error["Code"]
        kind = self.kind_for_code(code)
        if kind is ErrorKind.SERVICE_ERROR:
            LOG.debug("error code %s is not declared by %s", code, self.operation.name)

        details = {
            key: value
            for key, value in parsed.items()
            if key not in ("Error", "ResponseMetadata") and key.lower() not in ("code", "message", "type")
        }
        request_id = response.headers.get(HEADER_AMZN_REQUEST_ID) or parsed.get(
            "ResponseMetadata", {}
        ).get("RequestId")

        error_cls = ServerError if response.status_code >= 500 else ClientError
        return error_cls(
            kind=kind,
            code=code,
            message=error.get("Message") or "",
            status_code=response.status_code,
            sender_fault=error.get("Type") == "Sender" or response.status_code < 500,
            operation_name=self.operation.name,
            request_id=request_id,
            details=details,
        )
