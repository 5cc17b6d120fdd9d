import json
import os
from functools import cached_property, lru_cache
from typing import Dict, List

import jsonpatch
from botocore.loaders import Loader, instance_cache
from botocore.model import ServiceModel

from slimaws.constants import DATA_FOLDER

ServiceName = str

spec_patches_json = os.path.join(os.path.dirname(__file__), "spec-patches.json")


def load_spec_patches() -> Dict[str, list]:
    if not os.path.exists(spec_patches_json):
        return {}
    with open(spec_patches_json) as fd:
        return json.load(fd)


class BuiltInDataLoaderMixin(Loader):
    def __init__(self, *args, **kwargs):
        # only the specs shipped with slimaws are discovered, botocore's own data (and its extras) are ignored
        super().__init__(
            *args,
            extra_search_paths=[DATA_FOLDER],
            include_default_search_paths=False,
            include_default_extras=False,
            **kwargs,
        )


class PatchingLoader(Loader):
    """
    A custom botocore Loader that applies JSON patches from the given json patch file to the specs as they are loaded.
    """

    patches: Dict[str, list]

    def __init__(self, patches: Dict[str, list], *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.patches = patches

    @instance_cache
    def load_data(self, name: str):
        result = super(PatchingLoader, self).load_data(name)

        if patches := self.patches.get(name):
            return jsonpatch.apply_patch(result, patches)

        return result


class CustomLoader(PatchingLoader, BuiltInDataLoaderMixin):
    # Class mixing the different loader features (patching, slimaws specific data)
    pass


loader = CustomLoader(load_spec_patches())


@lru_cache(maxsize=64)
def load_service(service: ServiceName, version: str = None, model_type="service-2") -> ServiceModel:
    """
    Loads the (patched) model of one of the bundled services.
    For example: load_service("sns", "2010-03-31")

    :raises botocore.exceptions.UnknownServiceError: if no model of the service is bundled
    """
    service_description = loader.load_service_model(service, model_type, version)
    return ServiceModel(service_description, service)


def load_endpoints() -> dict:
    """Loads the bundled endpoint data (partitions and per-service endpoint overrides)."""
    return loader.load_data("endpoints")


class ServiceCatalog:
    """The services with a bundled model."""

    @cached_property
    def service_names(self) -> List[ServiceName]:
        return sorted(loader.list_available_services("service-2"))


@lru_cache()
def get_service_catalog() -> ServiceCatalog:
    """Returns the process-wide ServiceCatalog."""
    return ServiceCatalog()
