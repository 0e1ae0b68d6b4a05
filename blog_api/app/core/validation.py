"""
Payload validation helpers.

Request bodies arrive as plain dicts and are checked here against the
pydantic schemas before anything touches the store, so the rules can
be exercised without a database.
"""

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_message(error: Dict[str, Any]) -> str:
    # Messages raised by our own validators are already human readable.
    ctx = error.get("ctx") or {}
    if isinstance(ctx.get("error"), ValueError):
        return str(ctx["error"])
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else error["msg"]


def validate_payload(model: Type[ModelT], payload: Optional[Dict[str, Any]]) -> ModelT:
    """Validate ``payload`` against ``model``.

    Raises ``ValidationError`` carrying the first failure message.  A
    missing body is validated as an empty object.
    """
    try:
        return model.model_validate(payload or {})
    except PydanticValidationError as exc:
        errors = exc.errors()
        raise ValidationError(_error_message(errors[0])) from exc
