from typing import Any, Dict, Optional

from bson import Decimal128, ObjectId
from pydantic import BaseModel, ConfigDict


def to_plain(value: Any) -> Any:
    """Convert BSON-only types inside a document to JSON-friendly values"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Decimal128):
        return str(value.to_decimal())
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


class EducationRecord(BaseModel):
    """Pre-seeded reference data; values are free-form and extra keys are kept as-is"""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    degree: Optional[Any] = None
    institution: Optional[Any] = None
    year: Optional[Any] = None
    description: Optional[Any] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "EducationRecord":
        data = {k: to_plain(v) for k, v in doc.items() if k not in ("_id", "__v")}
        if "_id" in doc:
            data["id"] = str(doc["_id"])
        return cls(**data)
