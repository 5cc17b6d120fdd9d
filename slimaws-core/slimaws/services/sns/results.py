from typing import Any, Dict, List

from slimaws.aws.result import Result


class PublishBatchResult(Result):
    """
    The result of a ``PublishBatch`` call. Entries that could not be published are reported in ``failed``, they do
    not fail the call.
    """

    @property
    def successful(self) -> List[Dict[str, Any]]:
        return self.get("Successful") or []

    @property
    def failed(self) -> List[Dict[str, Any]]:
        return self.get("Failed") or []

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)
