import json
from typing import Any, Dict

from botocore.awsrequest import HeadersDict
from werkzeug.wrappers import Response as WerkzeugResponse

from slimaws.utils.json import CustomEncoder


class Response(WerkzeugResponse):
    """
    An HTTP Response object, which simply extends werkzeug's Response object with a few convenience methods.
    """

    def set_json(self, doc: Any):
        """
        Serializes the given dictionary using slimaws' ``CustomEncoder`` into a json response, and sets the
        mimetype automatically to ``application/json``.

        :param doc: the response dictionary to be serialized as JSON
        """
        self.data = json.dumps(doc, cls=CustomEncoder)
        self.mimetype = "application/json"

    def to_readonly_response_dict(self) -> Dict:
        """
        Returns a read-only version of a response dictionary as it is expected by botocore's response parsers. The
        headers are case-insensitive, like the ones botocore passes to its parsers.
        """
        return {
            "body": self.get_data(),
            "status_code": self.status_code,
            "headers": HeadersDict(self.headers.items()),
        }

    @classmethod
    def for_json(cls, doc: Any, *args, **kwargs) -> "Response":
        """
        Creates a new JSON response from the given document. It automatically sets the mimetype to ``application/json``.

        :param doc: the document to serialize into JSON
        :param args: arguments passed to the ``Response`` constructor
        :param kwargs: keyword arguments passed to the ``Response`` constructor
        :return: a new Response object
        """
        response = cls(*args, **kwargs)
        response.set_json(doc)
        return response
