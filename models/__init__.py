"""
SQLAlchemy ORM models for the output database.

Models:
    base: Base declarative class
    organization: organizations table
    customer: customers table

Both tables are flat, with a synthetic integer primary key and no foreign
keys. Rows are only ever inserted.

Usage:
    from models import Base, Organization, Customer
"""

from models.base import Base
from models.organization import Organization
from models.customer import Customer

__all__ = [
    "Base",
    "Organization",
    "Customer",
]
