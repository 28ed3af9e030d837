"""
Customer data-access functions.

All datastore failures leave this module as ``CustomerStoreError`` tagged with
a ``StoreErrorKind``, so callers branch on the kind instead of on SQLAlchemy
exception classes.
"""
import enum
import logging
import uuid
from datetime import datetime
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from customer_api.models import Customer, Contact, EMAIL_UNIQUE_CONSTRAINT

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"


class StoreErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    UNIQUE_VIOLATION = "unique_violation"
    OTHER = "other"


class CustomerStoreError(Exception):
    """A datastore operation on customers failed."""

    def __init__(self, kind: StoreErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass
class ContactRecord:
    phone: Optional[str] = None
    email: Optional[str] = None


@dataclass
class CustomerRecord:
    name: str
    contact: Optional[ContactRecord] = None


def _is_unique_violation(error: IntegrityError) -> bool:
    orig = error.orig
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    text = str(orig).lower()
    return "unique constraint failed" in text or "duplicate key" in text


def _is_email_conflict(error: IntegrityError) -> bool:
    """PostgreSQL names the constraint; SQLite names the column."""
    diag = getattr(error.orig, "diag", None)
    if getattr(diag, "constraint_name", None) == EMAIL_UNIQUE_CONSTRAINT:
        return True
    text = str(error.orig).lower()
    return EMAIL_UNIQUE_CONSTRAINT in text or "contacts.email" in text


def classify_store_error(error: SQLAlchemyError) -> CustomerStoreError:
    if isinstance(error, IntegrityError) and _is_unique_violation(error) and _is_email_conflict(error):
        return CustomerStoreError(StoreErrorKind.UNIQUE_VIOLATION, str(error.orig))
    return CustomerStoreError(StoreErrorKind.OTHER, str(error))


def _parse_id(customer_id) -> Optional[uuid.UUID]:
    if isinstance(customer_id, uuid.UUID):
        return customer_id
    try:
        return uuid.UUID(str(customer_id))
    except ValueError:
        return None


def create_customer_db(db: Session, name: str, phone: str, email: str) -> Customer:
    """Insert a customer together with its contact."""
    customer = Customer(name=name, contact=Contact(phone=phone, email=email))
    try:
        db.add(customer)
        db.commit()
        db.refresh(customer)
    except SQLAlchemyError as e:
        db.rollback()
        raise classify_store_error(e) from e

    logger.info(f"Created customer {customer.id}")
    return customer


def find_customer_db(db: Session, customer_id) -> Optional[Customer]:
    """Return the customer with ``customer_id``, or None if there is none."""
    parsed_id = _parse_id(customer_id)
    if parsed_id is None:
        return None

    try:
        return (
            db.query(Customer)
            .options(selectinload(Customer.contact))
            .filter(Customer.id == parsed_id)
            .first()
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise classify_store_error(e) from e


def update_customer_db(db: Session, customer_id, record: CustomerRecord) -> Customer:
    """Apply a merged ``CustomerRecord`` to the stored customer."""
    customer = find_customer_db(db, customer_id)
    if customer is None:
        raise CustomerStoreError(
            StoreErrorKind.NOT_FOUND,
            f"Customer {customer_id} not found",
        )

    customer.name = record.name
    if record.contact is not None:
        if customer.contact is None:
            customer.contact = Contact(phone=record.contact.phone, email=record.contact.email)
        else:
            customer.contact.phone = record.contact.phone
            customer.contact.email = record.contact.email
    # Contact-only changes never touch the customers row, so onupdate misses them
    customer.updated_at = datetime.utcnow()

    try:
        db.commit()
        db.refresh(customer)
    except SQLAlchemyError as e:
        db.rollback()
        raise classify_store_error(e) from e

    logger.info(f"Updated customer {customer.id}")
    return customer
