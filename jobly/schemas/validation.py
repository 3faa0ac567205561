"""
Structural validation of request payloads.

validate_payload() never raises for bad input: it returns Valid with the
parsed model or Invalid with readable error strings, and the route decides
what to do with it.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, List, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class Valid(Generic[ModelT]):
    value: ModelT
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Invalid:
    errors: List[str]
    ok: ClassVar[bool] = False


ValidationResult = Union[Valid[ModelT], Invalid]


def format_errors(exc: ValidationError) -> List[str]:
    """Render pydantic errors as "<field>: <message>" strings."""
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"])
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


def validate_payload(model: Type[ModelT], payload: Any) -> ValidationResult:
    if not isinstance(payload, dict):
        return Invalid(errors=["body: expected a JSON object"])

    try:
        return Valid(value=model.model_validate(payload))
    except ValidationError as e:
        return Invalid(errors=format_errors(e))
