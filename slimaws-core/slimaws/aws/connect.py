"""
Factories for the service clients, f.e. ``connect_to(region_name="eu-west-1").sns``.
"""
import threading
from functools import lru_cache
from typing import Dict, Optional, Type

from botocore.credentials import Credentials
from botocore.exceptions import UnknownServiceError

from slimaws.aws.auth import get_credentials
from slimaws.aws.client import ServiceClient
from slimaws.aws.spec import get_service_catalog
from slimaws.http.client import HttpClient
from slimaws.services.rds_data import RdsDataClient
from slimaws.services.scheduler import SchedulerClient
from slimaws.services.sns import SnsClient

# service name -> client class
CLIENTS: Dict[str, Type[ServiceClient]] = {
    RdsDataClient.service_name: RdsDataClient,
    SchedulerClient.service_name: SchedulerClient,
    SnsClient.service_name: SnsClient,
}


def attribute_name_to_service_name(attribute_name):
    """
    Converts a python-compatible attribute name to the service name
    :param attribute_name: Python compatible attribute name using the following replacements:
                            a) Add an underscore suffix `_` to any reserved Python keyword (PEP-8).
                            b) Replace any dash `-` with an underscore `_`
    :return:
    """
    if attribute_name.endswith("_"):
        attribute_name = attribute_name[:-1]
    # replace all _ with -: rds_data -> rds-data
    return attribute_name.replace("_", "-")


class ServiceLevelClientFactory:
    """
    A service level client factory, preseeded with parameters for the client creation.
    Will create any service client with parameters already provided by the ClientFactory.
    """

    def __init__(self, *, factory: "ClientFactory", client_creation_params: dict):
        self._factory = factory
        self._client_creation_params = client_creation_params

    def get_client(self, service: str) -> ServiceClient:
        return self._factory.get_client(service_name=service, **self._client_creation_params)

    def __getattr__(self, service: str) -> ServiceClient:
        if service.startswith("__"):
            raise AttributeError(service)
        return self.get_client(attribute_name_to_service_name(service))

    @property
    def rds_data(self) -> RdsDataClient:
        return self.get_client("rds-data")

    @property
    def scheduler(self) -> SchedulerClient:
        return self.get_client("scheduler")

    @property
    def sns(self) -> SnsClient:
        return self.get_client("sns")


class ClientFactory:
    """
    Factory to build the service clients. Clients are cached per set of creation parameters and share the given HTTP
    client (or the one of the first created client of a service).
    """

    def __init__(self, http_client: Optional[HttpClient] = None):
        """
        :param http_client: the HTTP client all created clients send their requests with
        """
        self._http_client = http_client
        self._create_client_lock = threading.RLock()

    def __call__(
        self,
        *,
        region_name: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        aws_session_token: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ) -> ServiceLevelClientFactory:
        """
        Get back an object which lets you select the typed service you want to access with the given attributes

        :param region_name: Name of the AWS region to be associated with the client
            If set to None, the configured ``DEFAULT_REGION`` is used.
        :param aws_access_key_id: Access key to use for the client.
            If set to None, loads from the environment.
        :param aws_secret_access_key: Secret key to use for the client.
            If set to None, loads from the environment.
        :param aws_session_token: Session token to use for the client.
            Not being used if not set.
        :param endpoint_url: Full endpoint URL to be used by the client.
            Defaults to the configured ``ENDPOINT_URL``, or the endpoint of the region.
        :return: Service Region Client Creator
        """
        params = {
            "region_name": region_name,
            "aws_access_key_id": aws_access_key_id,
            "aws_secret_access_key": aws_secret_access_key,
            "aws_session_token": aws_session_token,
            "endpoint_url": endpoint_url,
        }
        return ServiceLevelClientFactory(factory=self, client_creation_params=params)

    def get_client(
        self,
        service_name: str,
        region_name: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        aws_session_token: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ) -> ServiceClient:
        """
        Returns the client of the given service.

        :raises UnknownServiceError: if slimaws has no client for the service
        """
        if service_name not in CLIENTS:
            raise UnknownServiceError(
                service_name=service_name,
                known_service_names=", ".join(sorted(get_service_catalog().service_names)),
            )
        return self._get_client(
            service_name,
            region_name,
            endpoint_url,
            aws_access_key_id,
            aws_secret_access_key,
            aws_session_token,
        )

    # TODO @lru_cache here keeps a reference to `self`, factories are never garbage collected
    @lru_cache(maxsize=256)
    def _get_client(
        self,
        service_name: str,
        region_name: Optional[str],
        endpoint_url: Optional[str],
        aws_access_key_id: Optional[str],
        aws_secret_access_key: Optional[str],
        aws_session_token: Optional[str],
    ) -> ServiceClient:
        """
        Returns a client with the given configuration. This is a cached call, so modifications to the used client
        will affect others.
        """
        credentials: Optional[Credentials] = get_credentials(
            aws_access_key_id, aws_secret_access_key, aws_session_token
        )
        with self._create_client_lock:
            return CLIENTS[service_name](
                region_name=region_name,
                endpoint_url=endpoint_url,
                credentials=credentials,
                http_client=self._http_client,
            )


connect_to = ClientFactory()
