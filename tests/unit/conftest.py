from typing import List, Optional, Union

import pytest

from slimaws import config
from slimaws.http import Request, Response
from slimaws.http.client import HttpClient

TEST_AWS_ACCESS_KEY_ID = "test"
TEST_AWS_SECRET_ACCESS_KEY = "test"
TEST_AWS_REGION_NAME = "us-east-1"


@pytest.fixture(autouse=True)
def set_test_credentials_and_region(monkeypatch):
    """
    Automatically sets the default credentials and region for all unit tests.
    """
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", TEST_AWS_ACCESS_KEY_ID)
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", TEST_AWS_SECRET_ACCESS_KEY)
    monkeypatch.delenv("AWS_SESSION_TOKEN", raising=False)
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_AWS_REGION_NAME)
    monkeypatch.setattr(config, "DEFAULT_REGION", TEST_AWS_REGION_NAME)
    monkeypatch.setattr(config, "ENDPOINT_URL", None)
    monkeypatch.setattr(config, "DISABLE_SIGNING", False)


class RecordingHttpClient(HttpClient):
    """
    An HttpClient which records the requests it gets, and answers them with the queued responses (or an empty 200
    response if there are none).
    """

    requests: List[Request]

    def __init__(self):
        self.requests = []
        self.responses: List[Union[Response, Exception]] = []
        self.closed = False

    def respond(self, response: Union[Response, Exception]) -> "RecordingHttpClient":
        self.responses.append(response)
        return self

    def respond_json(self, doc, status: int = 200, headers: dict = None) -> "RecordingHttpClient":
        response = Response.for_json(doc, status=status, headers=headers)
        return self.respond(response)

    def respond_xml(self, xml: str, status: int = 200, headers: dict = None) -> "RecordingHttpClient":
        return self.respond(Response(xml, status=status, headers=headers, mimetype="text/xml"))

    @property
    def last_request(self) -> Optional[Request]:
        return self.requests[-1] if self.requests else None

    def request(self, request: Request, server: str | None = None) -> Response:
        self.requests.append(request)
        if not self.responses:
            return Response.for_json({}, status=200)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def http_client() -> RecordingHttpClient:
    return RecordingHttpClient()
