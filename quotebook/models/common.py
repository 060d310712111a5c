from pydantic import BaseModel, Field
from datetime import datetime, timezone
from decimal import Decimal
import uuid

ZERO = Decimal(0)


def gen_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimeStamped(BaseModel):
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def touch(self, now: datetime | None = None):
        object.__setattr__(self, "updated_at", now or utcnow())
