import dataclasses

import pytest
from werkzeug.datastructures import MultiDict

from slimaws.aws.protocol.request import create_request


@pytest.fixture
def request_():
    return create_request(
        "ListSchedules",
        "GET",
        "/schedules",
        MultiDict([("NamePrefix", "a b"), ("State", "ENABLED")]),
        {"Accept": "application/json"},
    )


def test_request_is_immutable(request_):
    with pytest.raises(dataclasses.FrozenInstanceError):
        request_.method = "POST"
    with pytest.raises(TypeError):
        request_.headers["Accept"] = "text/xml"
    with pytest.raises(TypeError):
        request_.query["State"] = "DISABLED"


def test_url(request_):
    assert request_.query_string == "NamePrefix=a%20b&State=ENABLED"
    assert (
        request_.url("https://scheduler.us-east-1.amazonaws.com")
        == "https://scheduler.us-east-1.amazonaws.com/schedules?NamePrefix=a%20b&State=ENABLED"
    )
    assert (
        request_.url("http://localhost:4566/")
        == "http://localhost:4566/schedules?NamePrefix=a%20b&State=ENABLED"
    )


def test_url_without_query():
    request = create_request("Publish", "POST", "/", body=b"Action=Publish")
    assert request.url("https://sns.us-east-1.amazonaws.com") == "https://sns.us-east-1.amazonaws.com/"


def test_replace(request_):
    replaced = request_.replace(headers={"Accept": "text/xml"})
    assert replaced.headers == {"Accept": "text/xml"}
    assert request_.headers == {"Accept": "application/json"}
    assert replaced.path == request_.path
    with pytest.raises(TypeError):
        replaced.headers["Accept"] = "application/json"


def test_to_http_request(request_):
    http_request = request_.to_http_request("https://scheduler.eu-west-1.amazonaws.com")

    assert http_request.method == "GET"
    assert http_request.scheme == "https"
    assert http_request.host == "scheduler.eu-west-1.amazonaws.com"
    assert http_request.path == "/schedules"
    assert http_request.args.getlist("NamePrefix") == ["a b"]
    assert http_request.headers["Accept"] == "application/json"


def test_to_http_request_keeps_encoded_path():
    request = create_request("ListTagsForResource", "GET", "/tags/arn%3Aaws%3Ascheduler%2Fgroup")
    http_request = request.to_http_request("http://localhost:4566")

    assert http_request.host == "localhost:4566"
    assert http_request.path == "/tags/arn:aws:scheduler/group"
    assert http_request.environ["RAW_URI"] == "/tags/arn%3Aaws%3Ascheduler%2Fgroup"


def test_to_http_request_with_body():
    request = create_request(
        "Publish", "POST", "/", headers={"Content-Type": "text/plain"}, body=b"Action=Publish"
    )
    http_request = request.to_http_request("https://sns.us-east-1.amazonaws.com")
    assert http_request.get_data() == b"Action=Publish"
    assert http_request.headers["Content-Length"] == "14"
