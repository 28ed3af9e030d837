"""
Customer and contact models.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
from customer_api.db.database import Base

# Named so both SQLite and PostgreSQL report the same constraint
EMAIL_UNIQUE_CONSTRAINT = "uq_contacts_email"
CUSTOMER_UNIQUE_CONSTRAINT = "uq_contacts_customer_id"


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    contact = relationship("Contact", back_populates="customer", uselist=False, cascade="all, delete-orphan")


class Contact(Base):
    __tablename__ = "contacts"
    __table_args__ = (
        UniqueConstraint("customer_id", name=CUSTOMER_UNIQUE_CONSTRAINT),
        UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid(as_uuid=True), ForeignKey("customers.id"), nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)

    customer = relationship("Customer", back_populates="contact")
