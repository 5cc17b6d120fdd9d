import json

import pytest

from slimaws.aws.errors import ClientError, ErrorKind
from slimaws.aws.protocol.validate import InvalidEnumValue, MissingRequiredParameter
from slimaws.services.rds_data import RdsDataClient
from slimaws.services.rds_data.results import (
    BatchExecuteStatementResult,
    ExecuteStatementResult,
    field_value,
)

CLUSTER_ARN = "arn:aws:rds:us-east-1:000000000000:cluster:my-cluster"
SECRET_ARN = "arn:aws:secretsmanager:us-east-1:000000000000:secret:my-secret"


@pytest.fixture
def client(http_client):
    return RdsDataClient(http_client=http_client)


def test_batch_execute_statement(client, http_client):
    http_client.respond_json({"updateResults": [{"generatedFields": [{"longValue": 1}]}, {}]})

    result = client.batch_execute_statement(
        {"resourceArn": "arn:x", "secretArn": "arn:y", "sql": "SELECT 1", "parameterSets": []}
    )

    request = http_client.last_request
    assert request.method == "POST"
    assert request.url == "https://rds-data.us-east-1.amazonaws.com/BatchExecute"
    body = json.loads(request.get_data())
    assert body == {"resourceArn": "arn:x", "secretArn": "arn:y", "sql": "SELECT 1", "parameterSets": []}
    assert "transactionId" not in body
    assert "database" not in body

    assert isinstance(result, BatchExecuteStatementResult)
    assert list(result.iter_generated_fields()) == [[1], []]


def test_execute_statement_records(client, http_client):
    http_client.respond_json(
        {
            "columnMetadata": [{"name": "id", "typeName": "int4"}, {"name": "name"}],
            "records": [
                [{"longValue": 1}, {"stringValue": "alice"}],
                [{"longValue": 2}, {"isNull": True}],
            ],
            "numberOfRecordsUpdated": 0,
        }
    )

    result = client.execute_statement(
        resourceArn=CLUSTER_ARN,
        secretArn=SECRET_ARN,
        sql="SELECT id, name FROM users",
        includeResultMetadata=True,
    )

    assert isinstance(result, ExecuteStatementResult)
    assert list(result.iter_records()) == [[1, "alice"], [2, None]]
    assert [column["name"] for column in result.column_metadata] == ["id", "name"]
    assert result.number_of_records_updated == 0
    assert result.formatted_records is None


def test_execute_statement_formatted_records(client, http_client):
    http_client.respond_json({"formattedRecords": '[{"id": 1}, {"id": 2}]'})

    result = client.execute_statement(
        resourceArn=CLUSTER_ARN, secretArn=SECRET_ARN, sql="SELECT id FROM t", formatRecordsAs="JSON"
    )

    assert json.loads(http_client.last_request.get_data())["formatRecordsAs"] == "JSON"
    assert result.formatted_records == [{"id": 1}, {"id": 2}]
    assert list(result.iter_records()) == []


def test_execute_statement_with_invalid_format(client, http_client):
    with pytest.raises(InvalidEnumValue):
        client.execute_statement(
            resourceArn=CLUSTER_ARN, secretArn=SECRET_ARN, sql="SELECT 1", formatRecordsAs="CSV"
        )
    assert not http_client.requests


def test_execute_statement_without_sql(client, http_client):
    with pytest.raises(MissingRequiredParameter) as e:
        client.execute_statement(resourceArn=CLUSTER_ARN, secretArn=SECRET_ARN)
    assert e.value.required_name == "sql"
    assert not http_client.requests


def test_transaction(client, http_client):
    http_client.respond_json({"transactionId": "tx-1"})
    http_client.respond_json({"transactionStatus": "Transaction Committed"})

    transaction_id = client.begin_transaction(
        resourceArn=CLUSTER_ARN, secretArn=SECRET_ARN, database="mydb"
    ).transaction_id
    result = client.commit_transaction(
        resourceArn=CLUSTER_ARN, secretArn=SECRET_ARN, transactionId=transaction_id
    )

    assert [request.path for request in http_client.requests] == [
        "/BeginTransaction",
        "/CommitTransaction",
    ]
    assert result.transaction_status == "Transaction Committed"


def test_rollback_of_unknown_transaction(client, http_client):
    http_client.respond_json(
        {"message": "Transaction tx-1 is not found"},
        status=404,
        headers={"X-Amzn-Errortype": "NotFoundException"},
    )

    with pytest.raises(ClientError) as e:
        client.rollback_transaction(resourceArn=CLUSTER_ARN, secretArn=SECRET_ARN, transactionId="tx-1")

    assert e.value.kind is ErrorKind.NOT_FOUND
    assert e.value.message == "Transaction tx-1 is not found"


def test_statement_timeout(client, http_client):
    http_client.respond_json(
        {"message": "statement timed out", "dbConnectionId": 1234},
        status=400,
        headers={"X-Amzn-Errortype": "StatementTimeoutException"},
    )

    with pytest.raises(ClientError) as e:
        client.execute_statement(resourceArn=CLUSTER_ARN, secretArn=SECRET_ARN, sql="SELECT pg_sleep(100)")

    assert e.value.kind is ErrorKind.STATEMENT_TIMEOUT
    assert e.value.details["dbConnectionId"] == 1234


def test_fips_region(http_client):
    client = RdsDataClient(region_name="fips-us-west-1", http_client=http_client)

    client.begin_transaction(resourceArn=CLUSTER_ARN, secretArn=SECRET_ARN)

    request = http_client.last_request
    assert request.host == "rds-data-fips.us-west-1.amazonaws.com"
    assert "/us-west-1/rds-data/aws4_request" in request.headers["Authorization"]


@pytest.mark.parametrize(
    "field, value",
    [
        ({"stringValue": "foo"}, "foo"),
        ({"longValue": 42}, 42),
        ({"doubleValue": 1.5}, 1.5),
        ({"booleanValue": False}, False),
        ({"blobValue": b"\x00\x01"}, b"\x00\x01"),
        ({"isNull": True}, None),
        ({"arrayValue": {"longValues": [1, 2]}}, [1, 2]),
        ({"arrayValue": {"arrayValues": [{"stringValues": ["a"]}, {"stringValues": []}]}}, [["a"], []]),
        ({}, None),
        (None, None),
    ],
)
def test_field_value(field, value):
    assert field_value(field) == value
