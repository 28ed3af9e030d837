"""
Customer request handlers.

Each handler takes already-parsed request input and returns a single
HandlerResponse. The HTTP layer only translates that into a framework response.
Session work runs in the threadpool so the event loop never waits on the
database.
"""
import logging
import traceback
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from customer_api.domains import customer as customer_store
from customer_api.domains.customer import (
    ContactRecord,
    CustomerRecord,
    CustomerStoreError,
    StoreErrorKind,
)
from customer_api.models import Customer
from customer_api.schemas.customer import CustomerResponse

logger = logging.getLogger(__name__)

MISSING_CREATE_FIELDS = "Missing fields in request body"
MISSING_UPDATE_FIELD = "Missing field in request body"
INVALID_CONTACT = "Invalid contact in request body"
EMAIL_CONFLICT = "A customer with the provided email already exists"
CUSTOMER_NOT_FOUND = "Customer with that id does not exist"


@dataclass
class HandlerResponse:
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)


def serialize_customer(customer: Customer) -> Dict[str, Any]:
    return CustomerResponse.model_validate(customer).model_dump(mode="json")


def _error(status_code: int, message: str) -> HandlerResponse:
    return HandlerResponse(status_code=status_code, body={"error": message})


def _store_error_response(error: CustomerStoreError) -> HandlerResponse:
    if error.kind == StoreErrorKind.UNIQUE_VIOLATION:
        return _error(409, EMAIL_CONFLICT)
    if error.kind == StoreErrorKind.NOT_FOUND:
        return _error(404, CUSTOMER_NOT_FOUND)
    return _error(500, error.message)


def merge_customer(existing: Customer, name: Optional[str], contact: Optional[Dict[str, Any]]) -> CustomerRecord:
    """
    Merge request fields over an existing customer.

    Empty values in the request keep the stored value. The contact is only
    rebuilt when the request carries one.
    """
    record = CustomerRecord(name=name or existing.name)
    if contact is None:
        return record

    if existing.contact is None:
        # No prior contact: only what the request provides
        record.contact = ContactRecord(
            phone=contact.get("phone") or None,
            email=contact.get("email") or None,
        )
    else:
        record.contact = ContactRecord(
            phone=contact.get("phone") or existing.contact.phone,
            email=contact.get("email") or existing.contact.email,
        )
    return record


def _create(db: Session, name: str, phone: str, email: str) -> Dict[str, Any]:
    created = customer_store.create_customer_db(db, name, phone, email)
    return serialize_customer(created)


def _update(db: Session, customer_id: str, name: Optional[str], contact: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    existing = customer_store.find_customer_db(db, customer_id)
    if existing is None:
        return None

    record = merge_customer(existing, name, contact)
    updated = customer_store.update_customer_db(db, customer_id, record)
    return serialize_customer(updated)


def _load(db: Session, customer_id: str) -> Optional[Dict[str, Any]]:
    customer = customer_store.find_customer_db(db, customer_id)
    if customer is None:
        return None
    return serialize_customer(customer)


async def create_customer(db: Session, body: Optional[Dict[str, Any]]) -> HandlerResponse:
    """Create a customer from ``name``, ``phone`` and ``email``."""
    body = body or {}
    name = body.get("name")
    phone = body.get("phone")
    email = body.get("email")

    if not name or not phone or not email:
        logger.warning("Rejected customer creation: missing fields")
        return _error(400, MISSING_CREATE_FIELDS)

    try:
        created = await run_in_threadpool(_create, db, name, phone, email)
        logger.info(f"Customer created: id={created['id']}")
        return HandlerResponse(status_code=201, body={"customer": created})
    except CustomerStoreError as e:
        logger.error(f"Error creating customer ({e.kind.value}): {e.message}")
        return _store_error_response(e)
    except Exception as e:
        logger.error(f"Error creating customer: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        return _error(500, str(e))


async def update_customer(db: Session, customer_id: str, body: Optional[Dict[str, Any]]) -> HandlerResponse:
    """
    Update a customer's name and/or contact.

    Fields missing from the request keep their stored values. Every failure
    path, including persistence errors, produces a response.
    """
    body = body or {}
    name = body.get("name")
    contact = body.get("contact")

    if not name and contact is None:
        logger.warning(f"Rejected update of customer {customer_id}: missing field")
        return _error(400, MISSING_UPDATE_FIELD)
    if contact is not None and not isinstance(contact, dict):
        logger.warning(f"Rejected update of customer {customer_id}: contact is not an object")
        return _error(400, INVALID_CONTACT)

    try:
        updated = await run_in_threadpool(_update, db, customer_id, name, contact)
        if updated is None:
            logger.warning(f"Customer not found: {customer_id}")
            return _error(404, CUSTOMER_NOT_FOUND)

        logger.info(f"Customer updated: id={customer_id}")
        return HandlerResponse(status_code=201, body={"customer": updated})
    except CustomerStoreError as e:
        logger.error(f"Error updating customer {customer_id} ({e.kind.value}): {e.message}")
        return _store_error_response(e)
    except Exception as e:
        logger.error(f"Error updating customer {customer_id}: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        return _error(500, str(e))


async def get_customer(db: Session, customer_id: str) -> HandlerResponse:
    """Fetch a single customer."""
    try:
        customer = await run_in_threadpool(_load, db, customer_id)
    except CustomerStoreError as e:
        logger.error(f"Error fetching customer {customer_id} ({e.kind.value}): {e.message}")
        return _store_error_response(e)
    except Exception as e:
        logger.error(f"Error fetching customer {customer_id}: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        return _error(500, str(e))

    if customer is None:
        return _error(404, CUSTOMER_NOT_FOUND)
    return HandlerResponse(status_code=200, body={"customer": customer})
