from .customer import ContactSchema, CustomerResponse

__all__ = [
    "ContactSchema",
    "CustomerResponse",
]
