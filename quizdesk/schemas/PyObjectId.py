from typing import Annotated, Any

from bson import ObjectId
from pydantic import BeforeValidator


def _coerce_object_id(value: Any) -> str:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, str):
        return value
    raise ValueError(f"Invalid ObjectId: {value!r}")


PyObjectId = Annotated[str, BeforeValidator(_coerce_object_id)]
