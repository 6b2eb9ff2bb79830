"""Request Helpers — body parsing and schema validation shared by route modules.

Invariants:
    - Empty body reads as {}; malformed JSON or a non-object body is a ValidationError
    - Schema failures surface as ValidationError naming the first offending field
    - Nothing here touches storage
"""

import json
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from library_api.core.errors import ValidationError
from library_api.core.identifiers import resolve_identifier

SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def read_json_object(request: Request) -> dict:
    """Read the request body as a JSON object."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise ValidationError("Request body must be valid JSON", field="body")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object", field="body")
    return body


def validate_payload(schema: type[SchemaT], body: dict) -> SchemaT:
    """Validate body against schema, mapping failures to ValidationError."""
    try:
        return schema.model_validate(body)
    except PydanticValidationError as e:
        raise _to_validation_error(e) from e


def require_identifier(
    request: Request, body: dict, path_param: str,
) -> int:
    """Resolve id from path, then ?id=, then body["id"]; 400 when none resolves."""
    entity_id = resolve_identifier(
        request.path_params.get(path_param),
        request.query_params.get("id"),
        body.get("id"),
    )
    if entity_id is None:
        raise ValidationError("A valid integer id is required", field="id")
    return entity_id


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    first = exc.errors()[0]
    field = ".".join(str(loc) for loc in first["loc"]) or "body"
    if first["type"] == "missing":
        message = f"{field} is required"
    elif first["type"] == "value_error":
        message = str(first["ctx"]["error"])
    elif first["type"] == "string_type":
        message = f"{field} must be a string"
    else:
        message = f"{field}: {first['msg']}"
    return ValidationError(message, field=field)
