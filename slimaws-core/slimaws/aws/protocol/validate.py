"""Slightly extends the ``botocore.validate`` package to check client input before a request is built."""
from typing import Any, Dict, List, NamedTuple, Optional

from botocore.model import OperationModel, Shape
from botocore.validate import ParamValidator as BotocoreParamValidator
from botocore.validate import ValidationErrors as BotocoreValidationErrors
from botocore.validate import type_check

from slimaws.aws.api import ServiceRequest


class Error(NamedTuple):
    """
    A wrapper around ``botocore.validate`` error tuples.

    Attributes:
        reason      The error type
        name        The name of the parameter the error occurred at
        attributes  Error type-specific attributes
    """

    reason: str
    name: str
    attributes: Dict[str, Any]


class InvalidArgument(ValueError):
    """
    Raised when the input of an operation does not match the operation's input shape. No request is sent in this
    case.
    """

    error: Error

    def __init__(self, error: Error) -> None:
        self.error = error
        super().__init__(self.message)

    @property
    def reason(self) -> str:
        return self.error.reason

    @property
    def name(self) -> str:
        """The path of the parameter that failed validation (``input`` for the top-level structure)."""
        return ValidationErrors()._get_name(self.error.name)

    @property
    def message(self) -> str:
        """
        Returns a default message for the error formatted by ValidationErrors.
        :return: the exception message.
        """
        return ValidationErrors()._format_error(self.error)


class MissingRequiredParameter(InvalidArgument):
    @property
    def required_name(self) -> str:
        return self.error.attributes["required_name"]


class InvalidEnumValue(InvalidArgument):
    @property
    def value(self) -> str:
        return self.error.attributes["param"]

    @property
    def valid_values(self) -> List[str]:
        return self.error.attributes["valid_values"]


class UnknownField(InvalidArgument):
    @property
    def unknown_param(self) -> str:
        return self.error.attributes["unknown_param"]


class InvalidType(InvalidArgument):
    pass


class InvalidRange(InvalidArgument):
    pass


class InvalidLength(InvalidArgument):
    pass


class JsonEncodingError(InvalidArgument):
    pass


class MoreThanOneInput(InvalidArgument):
    pass


class EmptyInput(InvalidArgument):
    pass


class ValidationErrors(BotocoreValidationErrors):
    def __init__(self, shape: Optional[Shape] = None, params: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.shape = shape
        self.params = params
        self._exceptions: List[InvalidArgument] = []

    @property
    def exceptions(self) -> List[InvalidArgument]:
        return self._exceptions

    def raise_first(self):
        for error in self._exceptions:
            raise error

    def report(self, name, reason, **kwargs):
        error = Error(reason, name, kwargs)
        self._errors.append(error)
        self._exceptions.append(self.to_exception(error))

    def _format_error(self, error):
        error_type, name, additional = error
        if error_type == "invalid enum value":
            return (
                f"Invalid value for parameter {self._get_name(name)}, value: {additional['param']}, "
                f"valid values: {', '.join(additional['valid_values'])}"
            )
        return super()._format_error(error)

    def to_exception(self, error: Error) -> InvalidArgument:
        error_type, name, additional = error

        if error_type == "missing required field":
            return MissingRequiredParameter(error)
        elif error_type == "invalid enum value":
            return InvalidEnumValue(error)
        elif error_type == "unknown field":
            return UnknownField(error)
        elif error_type == "invalid type":
            return InvalidType(error)
        elif error_type == "invalid range":
            return InvalidRange(error)
        elif error_type == "invalid length":
            return InvalidLength(error)
        elif error_type == "unable to encode to json":
            return JsonEncodingError(error)
        elif error_type == "more than one input":
            return MoreThanOneInput(error)
        elif error_type == "empty input":
            return EmptyInput(error)

        return InvalidArgument(error)


class ParamValidator(BotocoreParamValidator):
    def validate(self, params: Dict[str, Any], shape: Shape) -> ValidationErrors:
        """Validate parameters against a shape model.

        This method will validate the parameters against a provided shape model.
        All errors will be collected before returning to the caller.  This means
        that this method will not stop at the first error, it will return all
        possible errors.

        :param params: User provided dict of parameters
        :param shape: A shape model describing the expected input.

        :return: A list of errors.

        """
        errors = ValidationErrors(shape, params)
        if shape is None:
            # operations without input accept an empty input only
            for param in params or {}:
                errors.report("", "unknown field", unknown_param=param, valid_names=[])
            return errors
        self._validate(params, shape, errors, name="")
        return errors

    @type_check(valid_types=(dict,))
    def _validate_structure(self, params, shape, errors, name):
        # members set to None are treated as if they were not set at all. the caller's dict is left untouched.
        params = {key: value for key, value in params.items() if value is not None}

        super(ParamValidator, self)._validate_structure(params, shape, errors, name)

    @type_check(valid_types=(str,))
    def _validate_string(self, param, shape, errors, name):
        super(ParamValidator, self)._validate_string(param, shape, errors, name)

        if shape.enum and param not in shape.enum:
            errors.report(name, "invalid enum value", param=param, valid_values=list(shape.enum))


def validate_request(operation: OperationModel, request: ServiceRequest) -> ValidationErrors:
    """
    Validates the service request with the input shape of the given operation.

    :param operation: the operation
    :param request: the input parameters of the operation being validated
    :return: ValidationError object
    """
    return ParamValidator().validate(request, operation.input_shape)
