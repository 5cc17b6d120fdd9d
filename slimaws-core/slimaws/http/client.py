import abc
import logging
from urllib.parse import urlparse

import requests
from werkzeug.datastructures import Headers

from slimaws.http.request import Request, get_raw_current_url, get_raw_path, get_raw_url
from slimaws.http.response import Response
from slimaws.utils.strings import to_str

LOG = logging.getLogger(__name__)


class HttpClient(abc.ABC):
    """
    An HTTP client that can make http requests using werkzeug's request object.
    """

    @abc.abstractmethod
    def request(self, request: Request, server: str | None = None) -> Response:
        """
        Make the given HTTP as a client.

        :param request: the request to make
        :param server: the URL to send the request to, which defaults to the host component of the original Request.
        :return: the response.
        """
        raise NotImplementedError

    def close(self):
        """
        Close any underlying resources the client may need.
        """
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class _VerifyRespectingSession(requests.Session):
    """
    A class which wraps requests.Session to circumvent https://github.com/psf/requests/issues/3829.
    This ensures that if `REQUESTS_CA_BUNDLE` or `CURL_CA_BUNDLE` are set, the request does not perform the TLS
    verification if `session.verify` is set to `False.
    """

    def merge_environment_settings(self, url, proxies, stream, verify, *args, **kwargs):
        if self.verify is False:
            verify = False

        return super(_VerifyRespectingSession, self).merge_environment_settings(
            url, proxies, stream, verify, *args, **kwargs
        )


class SimpleRequestsClient(HttpClient):
    session: requests.Session

    def __init__(self, session: requests.Session = None):
        self.session = session or _VerifyRespectingSession()

    @staticmethod
    def _get_destination_url(request: Request, server: str | None = None) -> str:
        if server:
            # accepts "http://localhost:5000" or "localhost:5000"
            if "://" in server:
                parts = urlparse(server)
                scheme, server = parts.scheme, parts.netloc
            else:
                scheme = request.scheme
            return get_raw_current_url(
                scheme,
                server,
                request.root_path,
                get_raw_path(request),
                to_str(request.query_string, "latin-1"),
            )

        return get_raw_url(request)

    def request(self, request: Request, server: str | None = None) -> Response:
        """
        Performs the given HTTP request using the requests library. The path and the query string are sent with
        the encoding they already have, so signatures calculated over the request stay valid. Connection errors of
        the underlying library are propagated unchanged.

        :param request: the request to perform
        :param server: the URL to send the request to, which defaults to the host component of the original Request.
        :return: the response.
        """
        url = self._get_destination_url(request, server)

        headers = dict(request.headers.items())

        # urllib3 (used by requests) would otherwise add an "Accept-Encoding: gzip,deflate" header
        if not request.headers.get("accept-encoding"):
            headers["accept-encoding"] = "identity"

        LOG.debug("%s %s", request.method, url)
        response = self.session.request(
            method=request.method,
            url=url,
            headers=headers,
            data=request.get_data(),
            stream=True,
        )

        response_headers = Headers(dict(response.headers))
        if "chunked" in response_headers.get("Transfer-Encoding", ""):
            response_headers.pop("Content-Length", None)

        if request.method == "HEAD":
            final_response = Response(
                response=response.content,
                status=response.status_code,
                headers=response_headers,
            )
            final_response.content_length = response.headers.get("Content-Length", 0)
            return final_response

        return Response(
            response=(chunk for chunk in response.raw.stream(1024, decode_content=False)),
            status=response.status_code,
            headers=response_headers,
        )

    def close(self):
        self.session.close()
