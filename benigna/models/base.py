# benigna-api/benigna/models/base.py
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentInDB(BaseModel):
    id: str = Field(default_factory=new_id, description="Record ID")
    created_at: Optional[datetime] = Field(default_factory=utc_now)
