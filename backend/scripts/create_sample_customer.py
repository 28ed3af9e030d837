"""
Script to create a sample customer for testing.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from customer_api.db.database import SessionLocal, Base, engine
from customer_api.domains.customer import create_customer_db, CustomerStoreError, StoreErrorKind

def create_sample_customer():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        customer = create_customer_db(db, "Global Industrial", "555-0100", "nick@globalindustrial.com")
        print(f"Created customer: {customer.name} (ID: {customer.id})")
    except CustomerStoreError as e:
        if e.kind == StoreErrorKind.UNIQUE_VIOLATION:
            print("Customer with email 'nick@globalindustrial.com' already exists")
            return
        print(f"Error: {e.message}")
    finally:
        db.close()

if __name__ == "__main__":
    create_sample_customer()
