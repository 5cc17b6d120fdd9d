import threading
from typing import List

import pytest
import requests
from werkzeug.serving import make_server
from werkzeug.wrappers import Request as WerkzeugRequest

from slimaws.aws.protocol.request import create_request
from slimaws.http import Request, Response
from slimaws.http.client import SimpleRequestsClient
from slimaws.services.sns import SnsClient


class RecordingServer:
    """A werkzeug server running in a background thread, which records the requests it receives."""

    def __init__(self):
        self.requests: List[dict] = []
        self.response = Response.for_json({})
        self.server = make_server("localhost", 0, self.application)
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    @WerkzeugRequest.application
    def application(self, request: WerkzeugRequest):
        self.requests.append(
            {
                "method": request.method,
                "raw_uri": request.environ.get("RAW_URI"),
                "args": request.args.to_dict(flat=False),
                "headers": dict(request.headers),
                "body": request.get_data(),
            }
        )
        return self.response

    @property
    def url(self) -> str:
        return f"http://localhost:{self.server.port}"

    def start(self):
        self.thread.start()

    def stop(self):
        self.server.shutdown()
        self.server.server_close()


@pytest.fixture
def server():
    server = RecordingServer()
    server.start()
    yield server
    server.stop()


def test_request_keeps_path_encoding(server):
    request = create_request(
        "UntagResource",
        "DELETE",
        "/tags/arn%3Aaws%3Ascheduler%3Aus-east-1%3A000000000000%3Aschedule-group%2Fg",
        query=[("TagKeys", "a b"), ("TagKeys", "c")],
        headers={"X-Custom": "value"},
    ).to_http_request(server.url)

    with SimpleRequestsClient() as client:
        response = client.request(request)

    assert response.status_code == 200
    recorded = server.requests[0]
    assert recorded["method"] == "DELETE"
    assert recorded["raw_uri"] == (
        "/tags/arn%3Aaws%3Ascheduler%3Aus-east-1%3A000000000000%3Aschedule-group%2Fg"
        "?TagKeys=a%20b&TagKeys=c"
    )
    assert recorded["args"] == {"TagKeys": ["a b", "c"]}
    assert recorded["headers"]["X-Custom"] == "value"


def test_request_with_body(server):
    server.response = Response.for_json({"transactionId": "tx-1"}, status=201)
    request = create_request(
        "BeginTransaction",
        "POST",
        "/BeginTransaction",
        headers={"Content-Type": "application/json"},
        body=b'{"resourceArn": "arn:x"}',
    ).to_http_request(server.url)

    response = SimpleRequestsClient().request(request)

    assert response.status_code == 201
    assert response.json == {"transactionId": "tx-1"}
    assert server.requests[0]["body"] == b'{"resourceArn": "arn:x"}'
    assert server.requests[0]["headers"]["Content-Type"] == "application/json"


def test_request_to_other_server(server):
    request = Request("GET", "/ping", server=("example.invalid", 80))

    SimpleRequestsClient().request(request, server=server.url)

    assert server.requests[0]["raw_uri"] == "/ping"


def test_connection_errors_propagate():
    request = Request("GET", "/", server=("localhost", 9), scheme="http")

    with pytest.raises(requests.exceptions.ConnectionError):
        SimpleRequestsClient().request(request)


def test_service_client_over_http(server):
    server.response = Response(
        """<ListTopicsResponse xmlns="http://sns.amazonaws.com/doc/2010-03-31/">
            <ListTopicsResult>
                <Topics>
                    <member><TopicArn>arn:aws:sns:eu-west-1:000000000000:t</TopicArn></member>
                </Topics>
            </ListTopicsResult>
        </ListTopicsResponse>""",
        mimetype="text/xml",
    )

    with SnsClient(region_name="eu-west-1", endpoint_url=server.url) as client:
        result = client.list_topics()

    assert result.topics == [{"TopicArn": "arn:aws:sns:eu-west-1:000000000000:t"}]
    recorded = server.requests[0]
    assert recorded["method"] == "POST"
    assert recorded["body"] == b"Action=ListTopics&Version=2010-03-31"
    assert recorded["headers"]["Host"] == f"localhost:{server.server.port}"
    assert "/eu-west-1/sns/aws4_request" in recorded["headers"]["Authorization"]
