"""The immutable wire request descriptor the serializers produce."""
import dataclasses
from typing import Mapping, Optional
from urllib.parse import unquote, urlsplit

from botocore.utils import percent_encode_sequence
from werkzeug.datastructures import ImmutableDict, ImmutableMultiDict

from slimaws.http import Request


@dataclasses.dataclass(frozen=True)
class AwsRequest:
    """
    A serialized service request that is not yet bound to an endpoint. The path is already URL-encoded, the query
    holds the raw (unencoded) values.
    """

    operation: str
    method: str
    path: str
    query: ImmutableMultiDict
    headers: Mapping[str, str]
    body: bytes

    @property
    def query_string(self) -> str:
        """The RFC 3986 encoded query string, in the order the parameters were serialized."""
        return percent_encode_sequence(list(self.query.items(multi=True)))

    def url(self, endpoint: str) -> str:
        """
        Renders the full URL of the request against the given endpoint (f.e. ``https://sns.us-east-1.amazonaws.com``).
        A path component of the endpoint is kept as prefix of the request path.
        """
        url = endpoint.rstrip("/") + self.path
        if self.query:
            url = f"{url}?{self.query_string}"
        return url

    def replace(self, **changes) -> "AwsRequest":
        """Returns a copy of this request with the given attributes replaced."""
        if "headers" in changes:
            changes["headers"] = ImmutableDict(changes["headers"])
        return dataclasses.replace(self, **changes)

    def to_http_request(self, endpoint: str) -> Request:
        """
        Creates the ``Request`` the transport sends for this descriptor. The original encoding of the path is
        preserved as raw path.

        :param endpoint: the URL of the endpoint the request is sent to
        :return: a new Request
        """
        parts = urlsplit(endpoint)
        raw_path = parts.path.rstrip("/") + self.path
        return Request(
            method=self.method,
            path=unquote(raw_path),
            headers=dict(self.headers),
            body=self.body,
            scheme=parts.scheme,
            query_string=self.query_string,
            server=(parts.hostname, parts.port),
            raw_path=raw_path,
        )


def create_request(
    operation: str,
    method: str,
    path: str,
    query: Optional[ImmutableMultiDict] = None,
    headers: Optional[Mapping[str, str]] = None,
    body: bytes = b"",
) -> AwsRequest:
    return AwsRequest(
        operation=operation,
        method=method,
        path=path,
        query=ImmutableMultiDict(query or []),
        headers=ImmutableDict(headers or {}),
        body=body,
    )
