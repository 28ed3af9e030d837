import sqlite3
import uuid
from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from customer_api.domains.customer import (
    ContactRecord,
    CustomerRecord,
    CustomerStoreError,
    StoreErrorKind,
    classify_store_error,
    create_customer_db,
    find_customer_db,
    update_customer_db,
)
from customer_api.models import Customer


def test_create_and_find(db_session):
    created = create_customer_db(db_session, "Grace Hopper", "555-1000", "grace@example.com")
    found = find_customer_db(db_session, str(created.id))
    assert found is not None
    assert found.name == "Grace Hopper"
    assert found.contact.email == "grace@example.com"


def test_find_missing_or_malformed_id(db_session):
    assert find_customer_db(db_session, uuid.uuid4()) is None
    assert find_customer_db(db_session, "42") is None


def test_create_duplicate_email_is_unique_violation(db_session):
    create_customer_db(db_session, "Grace Hopper", "555-1000", "grace@example.com")
    with pytest.raises(CustomerStoreError) as exc_info:
        create_customer_db(db_session, "Impostor", "555-2000", "grace@example.com")
    assert exc_info.value.kind == StoreErrorKind.UNIQUE_VIOLATION
    assert db_session.query(Customer).count() == 1


def test_update_missing_customer_is_not_found(db_session):
    with pytest.raises(CustomerStoreError) as exc_info:
        update_customer_db(db_session, uuid.uuid4(), CustomerRecord(name="Nobody"))
    assert exc_info.value.kind == StoreErrorKind.NOT_FOUND


def test_update_creates_contact_when_absent(db_session):
    customer = Customer(name="No Contact")
    db_session.add(customer)
    db_session.commit()

    updated = update_customer_db(
        db_session,
        customer.id,
        CustomerRecord(name="No Contact", contact=ContactRecord(phone="555-3000")),
    )
    assert updated.contact is not None
    assert updated.contact.phone == "555-3000"
    assert updated.contact.email is None


def test_contact_only_update_bumps_updated_at(db_session):
    created = create_customer_db(db_session, "Grace Hopper", "555-1000", "grace@example.com")
    created.updated_at = datetime(2000, 1, 1)
    db_session.commit()

    updated = update_customer_db(
        db_session,
        created.id,
        CustomerRecord(name="Grace Hopper", contact=ContactRecord(phone="555-1001", email="grace@example.com")),
    )
    assert updated.contact.phone == "555-1001"
    assert updated.updated_at > datetime(2000, 1, 1)


def test_classify_email_conflict():
    error = IntegrityError(
        "INSERT INTO contacts",
        {},
        sqlite3.IntegrityError("UNIQUE constraint failed: contacts.email"),
    )
    assert classify_store_error(error).kind == StoreErrorKind.UNIQUE_VIOLATION


def test_classify_other_unique_constraint():
    sqlite_error = IntegrityError(
        "INSERT INTO contacts",
        {},
        sqlite3.IntegrityError("UNIQUE constraint failed: contacts.customer_id"),
    )
    postgres_error = IntegrityError(
        "INSERT INTO contacts",
        {},
        Exception('duplicate key value violates unique constraint "uq_contacts_customer_id"'),
    )
    assert classify_store_error(sqlite_error).kind == StoreErrorKind.OTHER
    assert classify_store_error(postgres_error).kind == StoreErrorKind.OTHER


def test_classify_postgres_email_constraint():
    error = IntegrityError(
        "INSERT INTO contacts",
        {},
        Exception('duplicate key value violates unique constraint "uq_contacts_email"'),
    )
    assert classify_store_error(error).kind == StoreErrorKind.UNIQUE_VIOLATION
