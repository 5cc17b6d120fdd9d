"""The base of the service clients, which dispatches operation calls over HTTP."""
import logging
from functools import cached_property
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from botocore.credentials import Credentials
from botocore.model import OperationModel, ServiceModel

from slimaws import config
from slimaws.aws.api import RequestContext
from slimaws.aws.auth import RequestSigner, get_credentials
from slimaws.aws.endpoints import EndpointRecord, resolve_endpoint
from slimaws.aws.errors import ErrorMapper, ServiceError
from slimaws.aws.input import Input
from slimaws.aws.result import Result
from slimaws.aws.spec import load_service
from slimaws.constants import HEADER_USER_AGENT, USER_AGENT
from slimaws.http import Response
from slimaws.http.client import HttpClient, SimpleRequestsClient
from slimaws.logging.setup import AWS_REQUEST_LOGGER

LOG = logging.getLogger(__name__)

R = TypeVar("R", bound=Result)

InputType = Union[Input, Mapping[str, Any], None]


def get_request_logger() -> logging.Logger:
    """
    Returns the logger every call is logged onto. If it is enabled for debug output (``SLIMAWS_LOG=trace``), the
    log lines include the input and the output of the call (see ``setup_request_trace_logging``).
    """
    return logging.getLogger(AWS_REQUEST_LOGGER)


class ServiceClient:
    """
    A client of one AWS service. Subclasses declare the service (and API version) they are for, and expose one method
    per operation which delegates to ``_call``.

    Every call sends exactly one HTTP request: the input is validated and serialized, the request is signed for the
    endpoint of the region and sent with the HTTP client. A successful response is returned as (lazily parsed)
    ``Result``, an error response is raised as ``ClientError`` or ``ServerError``. Errors of the HTTP client
    propagate unchanged, requests are never retried.
    """

    service_name: str
    service_version: Optional[str] = None

    def __init__(
        self,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        credentials: Optional[Credentials] = None,
        http_client: Optional[HttpClient] = None,
    ):
        """
        :param region_name: the region calls are sent to, unless a call overrides it (defaults to ``DEFAULT_REGION``)
        :param endpoint_url: a URL all calls are sent to instead of the resolved endpoint (defaults to
            ``ENDPOINT_URL``)
        :param credentials: the credentials to sign requests with (defaults to the ``AWS_*`` environment variables)
        :param http_client: the HTTP client requests are sent with (defaults to a ``SimpleRequestsClient``)
        """
        self.region_name = region_name or config.DEFAULT_REGION
        self.endpoint_url = endpoint_url or config.ENDPOINT_URL
        self.signer = RequestSigner(credentials or get_credentials())
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @cached_property
    def service(self) -> ServiceModel:
        return load_service(self.service_name, self.service_version)

    @property
    def http_client(self) -> HttpClient:
        if self._http_client is None:
            self._http_client = SimpleRequestsClient()
        return self._http_client

    def operation_model(self, operation_name: str) -> OperationModel:
        return self.service.operation_model(operation_name)

    def create_input(self, operation_name: str, input: InputType = None, **params) -> Input:
        """
        Creates the Input of an operation of this client's service. Keyword arguments are merged into the given input.
        """
        operation = self.operation_model(operation_name)
        result = Input.create(operation, input)
        if params:
            result = result.replace(**params)
        return result

    def resolve_endpoint(self, region: Optional[str] = None) -> EndpointRecord:
        """Returns the endpoint record calls to the given region (or the client's region) are sent to."""
        return resolve_endpoint(self.service, region or self.region_name, self.endpoint_url)

    def _call(
        self, operation_name: str, input: InputType = None, result_cls: Type[R] = Result, **params
    ) -> R:
        """
        Calls the operation with the given input.

        :param operation_name: the name of the operation, f.e. ``ExecuteStatement``
        :param input: a pre-built Input or a mapping of member names to values
        :param result_cls: the Result class wrapping the response
        :param params: additional members of the input
        :return: the result of the operation
        :raises InvalidArgument: if the input is invalid, no request is sent in this case
        :raises ServiceError: if the service responds with an error
        """
        context = RequestContext()
        context.service = self.service
        context.operation = self.operation_model(operation_name)

        call_input = self.create_input(operation_name, input, **params)
        context.service_request = call_input.to_dict()
        context.region = call_input.region or self.region_name

        aws_request = call_input.request()
        aws_request = aws_request.replace(
            headers={**aws_request.headers, HEADER_USER_AGENT: USER_AGENT}
        )

        endpoint = self.resolve_endpoint(context.region)
        context.endpoint = endpoint.endpoint
        aws_request = self.signer.sign(aws_request, endpoint)

        context.request = aws_request.to_http_request(endpoint.endpoint)
        context.response = self.http_client.request(context.request)

        return self._handle_response(context, result_cls)

    def _handle_response(self, context: RequestContext, result_cls: Type[R]) -> R:
        response: Response = context.response

        if response.status_code >= 300:
            error = ErrorMapper(context.operation).from_response(response)
            self._log(context, error)
            raise error

        result = result_cls(response, context.operation)
        self._log(context, result)
        return result

    @staticmethod
    def _log(context: RequestContext, outcome: Union[Result, ServiceError]):
        logger = get_request_logger()
        service, operation = context.service_operation
        status_code = context.response.status_code
        extra = {}
        if logger.isEnabledFor(logging.DEBUG):
            # parsing the output for the log only happens in trace mode
            if isinstance(outcome, ServiceError):
                output_type, output = outcome.code, {"message": outcome.message, **outcome.details}
            else:
                output_type, output = operation + "Output", outcome.to_dict()
            extra = {
                "input_type": operation + "Input",
                "input": context.service_request,
                "request_headers": dict(context.request.headers),
                "output_type": output_type,
                "output": output,
                "response_headers": dict(context.response.headers),
            }

        if isinstance(outcome, ServiceError):
            logger.info(
                "AWS %s.%s => %d (%s)", service, operation, status_code, outcome.code, extra=extra
            )
        else:
            logger.info("AWS %s.%s => %d", service, operation, status_code, extra=extra)

    def close(self):
        # an HTTP client given by the caller (f.e. shared by the clients of a ClientFactory) stays open
        if self._owns_http_client and self._http_client is not None:
            self._http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __repr__(self):
        return f"<{type(self).__name__} region={self.region_name}>"
