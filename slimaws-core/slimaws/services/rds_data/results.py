import json
from typing import Any, Dict, Iterator, List, Optional

from slimaws.aws.result import Result


def field_value(field: Optional[Dict[str, Any]]) -> Any:
    """
    Returns the python value of a ``Field``, which holds exactly one of its members. ``isNull`` fields are None,
    arrays are converted recursively.
    """
    if not field or field.get("isNull"):
        return None
    if "arrayValue" in field:
        return _array_value(field["arrayValue"])
    for member in ("stringValue", "longValue", "doubleValue", "booleanValue", "blobValue"):
        if member in field:
            return field[member]
    return None


def _array_value(array: dict) -> List[Any]:
    if "arrayValues" in array:
        return [_array_value(value) for value in array["arrayValues"]]
    for values in array.values():
        return list(values)
    return []


class ExecuteStatementResult(Result):
    def iter_records(self) -> Iterator[List[Any]]:
        """
        Iterates over the returned rows, each one as list of the python values of its columns.
        """
        for record in self.get("records") or []:
            yield [field_value(field) for field in record]

    @property
    def column_metadata(self) -> List[Dict[str, Any]]:
        return self.get("columnMetadata") or []

    @property
    def formatted_records(self) -> Optional[Any]:
        """The decoded JSON records, if the statement was executed with ``formatRecordsAs=JSON``."""
        formatted = self.get("formattedRecords")
        if formatted is None:
            return None
        return json.loads(formatted)


class BatchExecuteStatementResult(Result):
    @property
    def update_results(self) -> List[Dict[str, Any]]:
        return self.get("updateResults") or []

    def iter_generated_fields(self) -> Iterator[List[Any]]:
        """Iterates over the generated fields of each statement of the batch, as python values."""
        for update_result in self.update_results:
            yield [field_value(field) for field in update_result.get("generatedFields") or []]
