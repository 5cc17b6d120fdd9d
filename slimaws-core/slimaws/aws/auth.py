"""Signs requests with the AWS signature version 4, using botocore's signer."""
import logging
import os
from typing import Optional

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from slimaws import config
from slimaws.aws.endpoints import EndpointRecord
from slimaws.aws.protocol.request import AwsRequest

LOG = logging.getLogger(__name__)


def get_credentials(
    aws_access_key_id: Optional[str] = None,
    aws_secret_access_key: Optional[str] = None,
    aws_session_token: Optional[str] = None,
) -> Optional[Credentials]:
    """
    Creates the credentials from the given keys, or from the ``AWS_ACCESS_KEY_ID``, ``AWS_SECRET_ACCESS_KEY`` and
    ``AWS_SESSION_TOKEN`` environment variables.

    :return: the Credentials, or None if no access key is available
    """
    access_key = aws_access_key_id or os.environ.get("AWS_ACCESS_KEY_ID")
    if not access_key:
        return None
    secret_key = aws_secret_access_key or os.environ.get("AWS_SECRET_ACCESS_KEY", "")
    token = aws_session_token or os.environ.get("AWS_SESSION_TOKEN") or None
    return Credentials(access_key, secret_key, token)


class RequestSigner:
    """
    Adds the signature headers to requests. Requests are left unsigned if there are no credentials, or if signing is
    disabled with ``SLIMAWS_DISABLE_SIGNING``.
    """

    credentials: Optional[Credentials]

    def __init__(self, credentials: Optional[Credentials] = None):
        self.credentials = credentials

    @property
    def enabled(self) -> bool:
        return self.credentials is not None and not config.DISABLE_SIGNING

    def sign(self, request: AwsRequest, endpoint: EndpointRecord) -> AwsRequest:
        """
        Signs the request for the given endpoint with the signing region and service of the endpoint record.

        :param request: the request to sign
        :param endpoint: the endpoint the request is sent to
        :return: a copy of the request including the signature headers (or the request itself if not signing)
        """
        if not self.enabled:
            LOG.debug("sending unsigned request for %s", request.operation)
            return request

        aws_request = AWSRequest(
            method=request.method,
            url=request.url(endpoint.endpoint),
            data=request.body,
            headers=dict(request.headers),
        )
        SigV4Auth(self.credentials, endpoint.sign_service, endpoint.sign_region).add_auth(aws_request)
        return request.replace(headers=dict(aws_request.headers.items()))
