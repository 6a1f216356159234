from typing import Any, Mapping, TypeVar

import pydantic
from pydantic import BaseModel

from app.core.errors import ValidationError


ModelT = TypeVar("ModelT", bound=BaseModel)

_MESSAGES: dict[str, str] = {
	"missing": "The {field} field is required.",
	"string_too_short": "The {field} field is required.",
	"string_too_long": "The {field} field must not be greater than {max_length} characters.",
	"string_type": "The {field} field must be a string.",
	"greater_than_equal": "The {field} field must be at least {ge}.",
	"int_type": "The {field} field must be an integer.",
	"int_parsing": "The {field} field must be an integer.",
	"int_from_float": "The {field} field must be an integer.",
	"decimal_type": "The {field} field must be a number.",
	"decimal_parsing": "The {field} field must be a number.",
	"finite_number": "The {field} field must be a number.",
	"decimal_max_places": "The {field} field must not have more than {decimal_places} decimal places.",
	"decimal_max_digits": "The {field} field must not have more than {max_digits} digits.",
	"list_type": "The {field} field must be a list.",
	"too_short": "The {field} field must have at least {min_length} item(s).",
}


def _field_name(loc: tuple[Any, ...]) -> str:
	return ".".join(str(part) for part in loc) or "input"


def _reason(error: Mapping[str, Any], field: str) -> str:
	template = _MESSAGES.get(error["type"])
	if template is None:
		return str(error["msg"])
	ctx = dict(error.get("ctx") or {})
	ctx.setdefault("field", field.rsplit(".", 1)[-1].replace("_", " "))
	try:
		return template.format(**ctx)
	except KeyError:
		return str(error["msg"])


def errors_from_pydantic(exc: pydantic.ValidationError) -> dict[str, str]:
	"""Flatten pydantic errors into ``{field: reason}``, first reason wins."""
	errors: dict[str, str] = {}
	for error in exc.errors():
		field = _field_name(tuple(error["loc"]))
		errors.setdefault(field, _reason(error, field))
	return errors


def parse_input(model: type[ModelT], data: Mapping[str, Any] | None) -> ModelT:
	if data is None:
		data = {}
	if not isinstance(data, Mapping):
		raise ValidationError({"input": "The request body must be an object."})
	try:
		return model.model_validate(dict(data))
	except pydantic.ValidationError as exc:
		raise ValidationError(errors_from_pydantic(exc)) from exc
