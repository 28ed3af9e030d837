from .customer import Customer, Contact, EMAIL_UNIQUE_CONSTRAINT

__all__ = [
    "Customer",
    "Contact",
    "EMAIL_UNIQUE_CONSTRAINT",
]
