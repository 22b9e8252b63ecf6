"""Collection metadata model and decoder for the ``--META`` block payload."""

# Third-Party
from pydantic import BaseModel, ConfigDict, ValidationError

# Local
from .errors import InvalidSyntaxError


class CollectionMeta(BaseModel):
    """Identity and description of a collection."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""


class MetaPayload(BaseModel):
    """Raw JSON object found between ``--META`` and ``--end``."""

    # Unknown keys are tolerated so files can carry extra annotations
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    description: str | None = None


def decode_meta(default_id: str, payload: str | None) -> CollectionMeta:
    """Build collection metadata from an optional JSON payload.

    Args:
        default_id: Identifier derived from the source file name.
        payload: Metadata block body, or None when the file has none.

    Returns:
        Metadata with id and name falling back to default_id.

    Raises:
        InvalidSyntaxError: If the payload is not a valid metadata object.
    """

    if payload is None:
        return CollectionMeta(id=default_id, name=default_id)

    try:
        parsed = MetaPayload.model_validate_json(payload)
    except ValidationError as exc:
        raise InvalidSyntaxError(f"Invalid metadata: {exc}") from exc

    return CollectionMeta(
        id=parsed.id or default_id,
        name=parsed.name or default_id,
        description=parsed.description or "",
    )
