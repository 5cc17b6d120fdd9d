"""The typed input of a single service operation call."""
import logging
from typing import Any, Dict, Mapping, Optional, Union

from botocore.model import OperationModel

from slimaws.aws.api import ServiceRequest
from slimaws.aws.protocol.request import AwsRequest
from slimaws.aws.protocol.serializer import build_request
from slimaws.aws.protocol.validate import ValidationErrors, validate_request
from slimaws.constants import REGION_INPUT_KEY

LOG = logging.getLogger(__name__)


class Input:
    """
    The parameters of one call to an operation, bound to the operation's model. An Input is created per call, either
    explicitly or from a plain mapping of member names to values (see ``Input.create``). Members set to ``None`` are
    treated as if they were not set.

    The optional ``region`` overrides the region of the client for this single call.
    """

    operation: OperationModel
    region: Optional[str]

    def __init__(
        self,
        operation: OperationModel,
        params: Optional[Mapping[str, Any]] = None,
        region: Optional[str] = None,
    ):
        self.operation = operation
        self.region = region
        self._params: Dict[str, Any] = {
            key: value for key, value in (params or {}).items() if value is not None
        }

    @classmethod
    def create(
        cls, operation: OperationModel, input: Union["Input", ServiceRequest, Mapping[str, Any], None]
    ) -> "Input":
        """
        Returns the given Input unchanged, or creates a new one from a plain mapping. The ``@region`` key of a mapping
        is taken as the region of the call and is not part of the parameters.

        :param operation: the operation the input is for
        :param input: a pre-built Input or a mapping of member names to values
        :return: an Input bound to the operation
        :raises ValueError: if a pre-built Input belongs to a different operation
        """
        if isinstance(input, Input):
            if input.operation.name != operation.name:
                raise ValueError(
                    f"Input for operation {input.operation.name} cannot be used to call {operation.name}"
                )
            return input

        params = dict(input or {})
        region = params.pop(REGION_INPUT_KEY, None)
        return cls(operation, params, region=region)

    @property
    def operation_name(self) -> str:
        return self.operation.name

    def get(self, name: str, default: Any = None) -> Any:
        return self._params.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self._params[name]

    def __contains__(self, name: str) -> bool:
        return name in self._params

    def to_dict(self) -> Dict[str, Any]:
        """Returns a copy of the parameters that are set."""
        return dict(self._params)

    def replace(self, **changes) -> "Input":
        """
        Returns a copy of this input with the given members changed. Passing ``None`` for a member removes it.
        """
        params = self.to_dict()
        params.update(changes)
        return Input(self.operation, params, region=self.region)

    def with_region(self, region: Optional[str]) -> "Input":
        """Returns a copy of this input which is sent to the given region."""
        return Input(self.operation, self._params, region=region)

    def validate(self) -> ValidationErrors:
        """
        Validates the parameters against the input shape of the operation and returns the collected errors
        (required members, enum values, types, lengths and ranges).
        """
        return validate_request(self.operation, self._params)

    def request(self) -> AwsRequest:
        """
        Validates the input and serializes it to the request descriptor of the operation.

        :return: a new AwsRequest
        :raises InvalidArgument: for the first validation error (f.e. a ``MissingRequiredParameter``)
        """
        self.validate().raise_first()
        return build_request(self.operation, self._params)

    def __eq__(self, other):
        if not isinstance(other, Input):
            return NotImplemented
        return (
            self.operation.name == other.operation.name
            and self.region == other.region
            and self._params == other._params
        )

    def __repr__(self):
        return f"Input({self.operation.name}, {self._params!r}, region={self.region!r})"
