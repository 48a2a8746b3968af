from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel


def utc_now_ms() -> datetime:
    """Current UTC time truncated to the millisecond precision of BSON dates"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class ContactRequest(BaseModel):
    """Raw contact form payload. Fields are checked by core.validation so that
    missing values produce a 400 with a readable message."""
    name: Optional[Any] = None
    email: Optional[Any] = None
    subject: Optional[Any] = None
    message: Optional[Any] = None


class ContactSubmission(BaseModel):
    id: Optional[str] = None
    name: str
    email: str
    subject: str
    message: str
    createdAt: datetime
    ipAddress: Optional[str] = None
    userAgent: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "ContactSubmission":
        data = {k: v for k, v in doc.items() if k not in ("_id", "__v")}
        data["id"] = str(doc["_id"])
        return cls(**data)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"id"})

    def summary(self) -> "ContactSummary":
        return ContactSummary(
            id=self.id,
            name=self.name,
            email=self.email,
            subject=self.subject,
            createdAt=self.createdAt,
        )


class ContactSummary(BaseModel):
    """Public fields echoed back after a submission (the message is omitted)"""
    id: str
    name: str
    email: str
    subject: str
    createdAt: datetime
