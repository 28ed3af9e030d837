"""
Customer schemas.
"""
from pydantic import BaseModel
from uuid import UUID
from datetime import datetime
from typing import Optional


class ContactSchema(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None

    class Config:
        from_attributes = True


class CustomerResponse(BaseModel):
    id: UUID
    name: str
    contact: Optional[ContactSchema] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
