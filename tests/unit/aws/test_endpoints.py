import pytest

from slimaws.aws.endpoints import EndpointRecord, EndpointResolver, resolve_endpoint
from slimaws.aws.spec import load_service


@pytest.mark.parametrize(
    "service, region, endpoint",
    [
        ("rds-data", "eu-west-1", "https://rds-data.eu-west-1.amazonaws.com"),
        ("scheduler", "ap-southeast-2", "https://scheduler.ap-southeast-2.amazonaws.com"),
        ("sns", "us-west-2", "https://sns.us-west-2.amazonaws.com"),
        ("sns", "cn-north-1", "https://sns.cn-north-1.amazonaws.com.cn"),
    ],
)
def test_resolve_region(service, region, endpoint):
    record = EndpointResolver(service).resolve(region)

    assert record.endpoint == endpoint
    assert record.sign_region == region
    assert record.sign_versions == ["v4"]


def test_fips_region_is_signed_with_base_region():
    record = EndpointResolver("rds-data").resolve("fips-us-east-2")

    assert record == EndpointRecord(
        endpoint="https://rds-data-fips.us-east-2.amazonaws.com",
        sign_region="us-east-2",
        sign_service="rds-data",
        sign_versions=["v4"],
    )


def test_fips_region_of_sns():
    record = EndpointResolver(load_service("sns")).resolve("fips-us-gov-west-1")

    assert record.endpoint == "https://sns.us-gov-west-1.amazonaws.com"
    assert record.sign_region == "us-gov-west-1"
    assert record.sign_service == "sns"


def test_default_region():
    record = EndpointResolver("scheduler").resolve()

    assert record.endpoint == "https://scheduler.us-east-1.amazonaws.com"
    assert record.sign_region == "us-east-1"


def test_sign_service_of_scheduler():
    resolver = EndpointResolver("scheduler")
    assert resolver.endpoint_prefix == "scheduler"
    assert resolver.sign_service == "scheduler"


def test_endpoint_url_replaces_only_the_endpoint():
    record = resolve_endpoint("sns", "fips-us-east-1", "http://localhost:4566/")

    assert record.endpoint == "http://localhost:4566"
    assert record.sign_region == "us-east-1"
    assert record.sign_service == "sns"


def test_resolve_endpoint_without_override():
    assert resolve_endpoint("sns", "eu-central-1") == EndpointResolver("sns").resolve("eu-central-1")
