"""Lazily parsed results of service operations."""
import logging
from functools import cached_property
from typing import Any, Dict, Iterator, Optional

from botocore.model import OperationModel
from werkzeug.datastructures import Headers

from slimaws.aws.protocol.parser import parse_response
from slimaws.constants import HEADER_AMZN_REQUEST_ID
from slimaws.http import Response
from slimaws.utils.strings import camel_to_snake_case

LOG = logging.getLogger(__name__)


class Result:
    """
    The result of a successful call to a service operation. It wraps the HTTP response and parses the body with the
    output shape of the operation only when a field is accessed for the first time (or ``resolve`` is called).

    Fields are accessible by their name on the wire (``result["TopicArn"]``), by their snake_case name
    (``result.topic_arn``), or all at once with ``to_dict()``. Fields that are not set in the response are ``None``
    when accessed as attribute.
    """

    def __init__(self, response: Response, operation: OperationModel):
        self._response = response
        self._operation = operation
        self._parsed: Optional[Dict[str, Any]] = None
        self._metadata: Dict[str, Any] = {}

    @property
    def operation(self) -> OperationModel:
        return self._operation

    @property
    def response(self) -> Response:
        return self._response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> Headers:
        return self._response.headers

    @property
    def request_id(self) -> Optional[str]:
        """The id AWS assigned to the request, taken from the headers or (for XML responses) the parsed body."""
        if request_id := self._response.headers.get(HEADER_AMZN_REQUEST_ID):
            return request_id
        self.resolve()
        return self._metadata.get("RequestId")

    @property
    def resolved(self) -> bool:
        """Whether the body of the response has been parsed already."""
        return self._parsed is not None

    def resolve(self) -> "Result":
        """Parses the response body (if not done yet) and returns the result itself."""
        self._data
        return self

    @property
    def _data(self) -> Dict[str, Any]:
        if self._parsed is None:
            parsed = parse_response(self._operation, self._response)
            self._metadata = parsed.pop("ResponseMetadata", {})
            self._parsed = parsed
            LOG.debug("parsed result of %s with fields %s", self._operation.name, list(parsed))
        return self._parsed

    @cached_property
    def _attribute_names(self) -> Dict[str, str]:
        """Maps the snake_case names of the output members to their names on the wire."""
        shape = self._operation.output_shape
        if shape is None:
            return {}
        return {camel_to_snake_case(name): name for name in shape.members}

    def get(self, name: str, default: Any = None) -> Any:
        return self._data.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __contains__(self, name: str) -> bool:
        return name in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        member = self._attribute_names.get(name)
        if member is None:
            raise AttributeError(
                f"'{type(self).__name__}' object for {self._operation.name} has no attribute '{name}'"
            )
        return self._data.get(member)

    def to_dict(self) -> Dict[str, Any]:
        """Returns a copy of the parsed output (without the response metadata)."""
        return dict(self._data)

    def __repr__(self):
        state = "resolved" if self.resolved else "unresolved"
        return f"<{type(self).__name__} {self._operation.name} {self.status_code} ({state})>"
