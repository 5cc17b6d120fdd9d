import pytest

from slimaws.aws.errors import (
    ClientError,
    ErrorKind,
    ErrorMapper,
    ServerError,
    ServiceError,
    error_kind_for_shape,
)
from slimaws.aws.spec import load_service
from slimaws.http import Response


def _mapper(service: str, operation: str) -> ErrorMapper:
    return ErrorMapper(load_service(service).operation_model(operation))


def _json_error(code: str, status: int, **body) -> Response:
    return Response.for_json(
        body, status=status, headers={"X-Amzn-Errortype": code, "X-Amzn-RequestId": "req-1"}
    )


def test_every_error_shape_of_bundled_services_has_a_kind():
    for service_name in ("rds-data", "scheduler", "sns"):
        service = load_service(service_name)
        for shape in service.error_shapes:
            assert error_kind_for_shape(shape) is not ErrorKind.SERVICE_ERROR, shape.name


def test_declared_error_code():
    error = _mapper("rds-data", "ExecuteStatement").from_response(
        _json_error("BadRequestException", 400, message="syntax error at or near SELEC")
    )

    assert isinstance(error, ClientError)
    assert error.kind is ErrorKind.BAD_REQUEST
    assert error.code == "BadRequestException"
    assert error.message == "syntax error at or near SELEC"
    assert error.status_code == 400
    assert error.sender_fault
    assert error.operation_name == "ExecuteStatement"
    assert error.request_id == "req-1"
    assert str(error) == (
        "An error occurred (BadRequestException) when calling the ExecuteStatement operation: "
        "syntax error at or near SELEC"
    )


def test_modeled_error_details():
    error = _mapper("rds-data", "ExecuteStatement").from_response(
        _json_error("StatementTimeoutException", 400, message="timed out", dbConnectionId=42)
    )

    assert error.kind is ErrorKind.STATEMENT_TIMEOUT
    assert error.details == {"dbConnectionId": 42}


def test_server_error():
    error = _mapper("rds-data", "ExecuteStatement").from_response(
        _json_error("ServiceUnavailableError", 503)
    )

    assert isinstance(error, ServerError)
    assert error.kind is ErrorKind.SERVICE_UNAVAILABLE
    assert error.message == ""
    assert not error.sender_fault


def test_undeclared_error_code_keeps_code_and_message():
    mapper = _mapper("rds-data", "ExecuteStatement")
    # NotFoundException is only declared by the transaction operations
    assert mapper.kind_for_code("NotFoundException") is ErrorKind.SERVICE_ERROR

    error = mapper.from_response(_json_error("NotFoundException", 404, message="gone"))

    assert isinstance(error, ClientError)
    assert error.kind is ErrorKind.SERVICE_ERROR
    assert error.code == "NotFoundException"
    assert error.message == "gone"


def test_transaction_not_found():
    error = _mapper("rds-data", "CommitTransaction").from_response(
        _json_error("NotFoundException", 404, message="Transaction tx-1 is not found")
    )
    assert error.kind is ErrorKind.NOT_FOUND


def test_unknown_code():
    error = _mapper("scheduler", "GetSchedule").from_response(
        _json_error("SomethingNewException", 418, message="teapot")
    )

    assert error.kind is ErrorKind.SERVICE_ERROR
    assert error.code == "SomethingNewException"
    assert error.status_code == 418


def test_query_error():
    response = Response(
        """<ErrorResponse xmlns="http://sns.amazonaws.com/doc/2010-03-31/">
            <Error>
                <Type>Sender</Type>
                <Code>AuthorizationError</Code>
                <Message>not authorized</Message>
            </Error>
            <RequestId>9dd01905-5012-5f99-8663-4b3ecd0dfaef</RequestId>
        </ErrorResponse>""",
        status=403,
        mimetype="text/xml",
    )

    error = _mapper("sns", "Publish").from_response(response)

    assert error.kind is ErrorKind.ACCESS_DENIED
    assert error.code == "AuthorizationError"
    assert error.message == "not authorized"
    assert error.request_id == "9dd01905-5012-5f99-8663-4b3ecd0dfaef"
    assert error.sender_fault


def test_kms_error():
    mapper = _mapper("sns", "Publish")
    assert mapper.kind_for_code("KMSOptInRequired") is ErrorKind.KMS_ERROR
    assert mapper.kind_for_code("KMSThrottling") is ErrorKind.KMS_ERROR


def test_error_without_body():
    error = _mapper("scheduler", "ListSchedules").from_response(Response(b"", status=502))

    assert isinstance(error, ServerError)
    assert error.kind is ErrorKind.SERVICE_ERROR
    assert error.code == "502"
    assert error.message == "Bad Gateway"


def test_service_error_can_be_raised():
    with pytest.raises(ServiceError) as e:
        raise ClientError(ErrorKind.VALIDATION, "ValidationException", "invalid", 400)
    assert e.value.kind == "Validation"
    assert e.value.details == {}
