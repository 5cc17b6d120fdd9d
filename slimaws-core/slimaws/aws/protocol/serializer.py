"""
Request serialization for the AWS service protocols.

The wire format of a request (URI labels, query string, headers and the JSON or form-encoded body) is rendered by the
protocol serializers of ``botocore``. This module prepares the input parameters for them (drops unset members and
fills idempotency tokens), and converts botocore's request dict into an immutable ``AwsRequest``. The request is
neither bound to an endpoint nor signed yet.

Validation is not part of the serialization, the parameters are expected to be validated already (see ``validate``).
"""
import functools
import logging
from typing import Any, Dict, List, Tuple, Union

from botocore import serialize
from botocore.model import OperationModel
from botocore.utils import percent_encode_sequence

from slimaws.aws.protocol.request import AwsRequest, create_request
from slimaws.constants import APPLICATION_X_WWW_FORM_URLENCODED, HEADER_CONTENT_TYPE
from slimaws.utils.strings import long_uid, to_bytes, to_str

LOG = logging.getLogger(__name__)

# protocols of the bundled services
SUPPORTED_PROTOCOLS = ("query", "json", "rest-json")


class RequestSerializerError(Exception):
    """
    Error which is thrown if the request serialization fails.
    Super class of all exceptions raised by the serializer.
    """

    pass


class UnknownSerializerError(RequestSerializerError):
    """
    Error which indicates that the exception raised by the serializer could be caused by a bug in the serializer
    itself (not by the input).
    """

    pass


class ProtocolSerializerError(RequestSerializerError):
    """
    Error which indicates that the given input cannot be serialized in the protocol of the service, f.e. because a
    URI label has no value.
    """

    pass


def _handle_exceptions(func):
    """
    Decorator which handles the exceptions raised by the serializer. It ensures that all exceptions raised by the public
    methods of the serializer are instances of RequestSerializerError.
    :param func: to wrap in order to add the exception handling
    :return: wrapped function
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RequestSerializerError:
            raise
        except KeyError as e:
            raise ProtocolSerializerError(f"No value given for the URI label {e}.") from e
        except (TypeError, ValueError) as e:
            raise ProtocolSerializerError(f"The input cannot be serialized: {e}") from e
        except Exception as e:
            raise UnknownSerializerError(
                "An unknown error occurred when trying to serialize the request."
            ) from e

    return wrapper


class RequestSerializer:
    """
    Serializes the input parameters of the operations of one protocol to an ``AwsRequest``, using botocore's
    serializer for the protocol.
    """

    protocol: str

    def __init__(self, protocol: str):
        self.protocol = protocol
        self._serializer = serialize.create_serializer(protocol, include_validation=False)

    @_handle_exceptions
    def serialize_to_request(self, parameters: dict, operation_model: OperationModel) -> AwsRequest:
        """
        Takes the input parameters of an operation and serializes them to a request descriptor. The parameters are
        expected to be validated already.

        :param parameters: the input parameters, keyed by member name
        :param operation_model: specification of the operation containing the input shape
        :return: a new immutable AwsRequest
        :raises: RequestSerializerError (either a ProtocolSerializerError or an UnknownSerializerError)
        """
        parameters = self._fill_idempotency_tokens(parameters or {}, operation_model)
        request_dict = self._serializer.serialize_to_request(parameters, operation_model)

        headers = dict(request_dict["headers"])
        body = request_dict["body"]
        if isinstance(body, dict):
            # query protocol, the form is encoded like botocore's AWSRequest does it
            headers.setdefault(HEADER_CONTENT_TYPE, APPLICATION_X_WWW_FORM_URLENCODED)
            body = percent_encode_sequence(body)
        body = to_bytes(body or b"")

        LOG.debug(
            "serialized %s request: %s %s (%d bytes)",
            operation_model.name,
            request_dict["method"],
            request_dict["url_path"],
            len(body),
        )
        return create_request(
            operation_model.name,
            request_dict["method"],
            request_dict["url_path"],
            _query_items(request_dict["query_string"]),
            headers,
            body,
        )

    @staticmethod
    def _fill_idempotency_tokens(parameters: dict, operation_model: OperationModel) -> dict:
        """
        Returns a copy of the parameters where every idempotency token member without a value holds a freshly
        generated token. The given parameters are not modified.
        """
        parameters = {key: value for key, value in parameters.items() if value is not None}
        for member in operation_model.idempotent_members:
            if member not in parameters:
                parameters[member] = long_uid()
        return parameters


def _query_items(query: Union[str, Dict[str, Any]]) -> List[Tuple[str, str]]:
    """
    Flattens botocore's query string dict to a list of (name, value) pairs. Lists repeat their name, all other values
    are rendered as strings.
    """
    if not query:
        return []
    items = []
    for name, value in query.items():
        values = value if isinstance(value, list) else [value]
        for element in values:
            if isinstance(element, bool):
                element = "true" if element else "false"
            items.append((name, str(to_str(element))))
    return items


@functools.lru_cache()
def create_serializer(protocol: str) -> RequestSerializer:
    """
    Creates the serializer for the given protocol.

    :param protocol: of the service, f.e. ``rest-json``
    :return: RequestSerializer which can handle the protocol
    """
    if protocol not in SUPPORTED_PROTOCOLS:
        raise ProtocolSerializerError(f"The protocol {protocol} is not supported.")
    return RequestSerializer(protocol)


def build_request(operation: OperationModel, parameters: dict) -> AwsRequest:
    """
    Serializes the given (validated) parameters of the operation to a request descriptor.

    :param operation: the operation to build the request for
    :param parameters: the input parameters
    :return: a new AwsRequest
    """
    return create_serializer(operation.service_model.protocol).serialize_to_request(parameters, operation)
