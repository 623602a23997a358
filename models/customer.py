from sqlalchemy import Column, Integer, String
from models.base import Base


class Customer(Base):
    """One row of dump/customers.csv."""
    __tablename__ = "customers"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    
    # Identity
    index = Column("index", Integer)
    customer_id = Column("customer id", String(255))
    company = Column("company", String(255))
    first_name = Column("first name", String(255))
    last_name = Column("last name", String(255))
    
    # Contact
    city = Column("city", String(255))
    phone_1 = Column("phone 1", String(255))
    phone_2 = Column("phone 2", String(255))
    email = Column("email", String(255))
    address = Column("address", String(255))
    country = Column("country", String(255))
    website = Column("website", String(255))
    
    # Subscription (date kept as text, as delivered)
    subscription = Column("subscription", String(255))
    subscription_date = Column("subscription date", String(255))
