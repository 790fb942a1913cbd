from typing import Any, Iterable, Mapping

from inventory_api.core.constants import FIELD_LABELS


def _field_name(loc) -> str | None:
    for part in reversed(tuple(loc or ())):
        if isinstance(part, str) and part != "body":
            return part
    return None


def describe_error(error: Mapping[str, Any]) -> str:
    field_name = _field_name(error.get("loc"))
    if error.get("type") == "missing":
        if field_name is None:
            return "Request body is required"
        label = FIELD_LABELS.get(field_name, field_name)
        return "{} is required".format(label)

    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and ctx.get("error") is not None:
        return str(ctx["error"])

    message = str(error.get("msg") or "Invalid value")
    if field_name is None:
        return message
    return "{}: {}".format(FIELD_LABELS.get(field_name, field_name), message)


def describe_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    messages = []
    for error in errors:
        message = describe_error(error)
        if message not in messages:
            messages.append(message)
    return "; ".join(messages) or "Validation error"


__all__ = ["describe_error", "describe_validation_errors"]
