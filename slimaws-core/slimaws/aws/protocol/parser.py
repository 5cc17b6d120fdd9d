"""Utils to parse the HTTP responses of AWS services with the botocore response parsers."""
import logging
from typing import Dict

from botocore.model import OperationModel
from botocore.parsers import ResponseParser, ResponseParserError, ResponseParserFactory

from slimaws.aws.api import ServiceResponse
from slimaws.http import Response

LOG = logging.getLogger(__name__)


def _add_modeled_error_fields(
    response_dict: Dict,
    parsed_response: Dict,
    operation_model: OperationModel,
    parser: ResponseParser,
):
    """
    This function adds additional error shape members (other than message, code, and type) to an already parsed error
    response dict.
    Port of botocore's Endpoint#_add_modeled_error_fields.
    """
    error_code = parsed_response.get("Error", {}).get("Code")
    if error_code is None:
        return
    service_model = operation_model.service_model
    error_shape = service_model.shape_for_error_code(error_code)
    if error_shape is None:
        return
    modeled_parse = parser.parse(response_dict, error_shape)
    parsed_response.update(modeled_parse)


def _create_parser(operation: OperationModel) -> ResponseParser:
    return ResponseParserFactory().create_parser(operation.service_model.protocol)


def parse_response(operation: OperationModel, response: Response) -> ServiceResponse:
    """
    Parses a successful HTTP Response into the output structure of the operation using botocore.

    :param operation: the operation of the original request
    :param response: the HTTP response object containing the response of the operation
    :return: a parsed dictionary as it is returned by botocore (including the ``ResponseMetadata``)
    """
    response_dict = response.to_readonly_response_dict()
    response_dict["context"] = {"operation_name": operation.name}
    return _create_parser(operation).parse(response_dict, operation.output_shape)


def parse_error(operation: OperationModel, response: Response) -> ServiceResponse:
    """
    Parses an error response of the operation. The returned dict always contains an ``Error`` dict with a ``Code``
    and a ``Message``. If the body cannot be parsed, the status code is used as error code.

    :param operation: the operation of the original request
    :param response: the HTTP (error) response
    :return: a parsed dictionary with the ``Error`` and the additional modeled error fields
    """
    response_dict = response.to_readonly_response_dict()
    response_dict["context"] = {"operation_name": operation.name}
    parser = _create_parser(operation)
    try:
        parsed_response = parser.parse(response_dict, operation.output_shape)
        _add_modeled_error_fields(response_dict, parsed_response, operation, parser)
    except ResponseParserError:
        LOG.debug(
            "unable to parse error response of %s (status %d)",
            operation.name,
            response.status_code,
            exc_info=LOG.isEnabledFor(logging.DEBUG),
        )
        parsed_response = {"ResponseMetadata": {"HTTPStatusCode": response.status_code}}

    error = parsed_response.setdefault("Error", {})
    if not error.get("Code"):
        error["Code"] = str(response.status_code)
    error.setdefault("Message", "")
    return parsed_response
