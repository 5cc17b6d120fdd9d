"""Resolves the endpoint and the signing parameters of a service in a region."""
import logging
import re
from functools import lru_cache
from typing import List, NamedTuple, Optional, Union

from botocore.model import ServiceModel

from slimaws.aws.spec import load_endpoints, load_service
from slimaws.constants import DEFAULT_REGION, SIGNATURE_V4

LOG = logging.getLogger(__name__)


class EndpointRecord(NamedTuple):
    """
    Where a request to a service in a region is sent, and how it is signed.

    Attributes:
        endpoint        The URL of the endpoint, f.e. ``https://sns.eu-west-1.amazonaws.com``
        sign_region     The region used to sign the request (can differ from the requested region)
        sign_service    The service name used to sign the request
        sign_versions   The signature versions the endpoint accepts
    """

    endpoint: str
    sign_region: str
    sign_service: str
    sign_versions: List[str]


@lru_cache()
def _compiled_partitions() -> List[tuple]:
    return [
        (re.compile(partition["regionRegex"]), partition)
        for partition in load_endpoints()["partitions"]
    ]


class EndpointResolver:
    """
    Resolves the endpoints of one service from the bundled endpoint table. Regions the table declares explicitly
    (f.e. ``fips-us-east-1``) map to a fixed host and may be signed with another region, any other region is resolved
    with the hostname template of the partition it belongs to.
    """

    service: ServiceModel

    def __init__(self, service: Union[ServiceModel, str]):
        if isinstance(service, str):
            service = load_service(service)
        self.service = service

    @property
    def endpoint_prefix(self) -> str:
        return self.service.endpoint_prefix

    @property
    def sign_service(self) -> str:
        return self.service.signing_name or self.service.endpoint_prefix

    def resolve(self, region: Optional[str] = None) -> EndpointRecord:
        """
        Returns the endpoint record of the service in the given region.

        :param region: the region code, ``us-east-1`` if None
        :return: the EndpointRecord
        """
        region = region or DEFAULT_REGION
        table = load_endpoints()
        defaults = table.get("defaults", {})
        versions = list(defaults.get("signatureVersions", [SIGNATURE_V4]))

        service_endpoints = table["services"].get(self.endpoint_prefix, {}).get("endpoints", {})
        if entry := service_endpoints.get(region):
            return EndpointRecord(
                endpoint=f"https://{entry['hostname']}",
                sign_region=entry.get("signRegion", region),
                sign_service=self.sign_service,
                sign_versions=list(entry.get("signatureVersions", versions)),
            )

        hostname = defaults["hostname"].format(
            service=self.endpoint_prefix,
            region=region,
            dnsSuffix=self._dns_suffix(region),
        )
        return EndpointRecord(
            endpoint=f"https://{hostname}",
            sign_region=region,
            sign_service=self.sign_service,
            sign_versions=versions,
        )

    @staticmethod
    def _dns_suffix(region: str) -> str:
        for regex, partition in _compiled_partitions():
            if regex.match(region):
                return partition["dnsSuffix"]
        return "amazonaws.com"


def resolve_endpoint(
    service: Union[ServiceModel, str], region: Optional[str] = None, endpoint_url: Optional[str] = None
) -> EndpointRecord:
    """
    Resolves the endpoint record of the service in the region. If an ``endpoint_url`` is given, it replaces the
    resolved URL, while the signing parameters stay the ones of the region.
    """
    record = EndpointResolver(service).resolve(region)
    if endpoint_url:
        record = record._replace(endpoint=endpoint_url.rstrip("/"))
    LOG.debug("resolved endpoint %s (signed for %s)", record.endpoint, record.sign_region)
    return record
