from sqlalchemy import Column, Integer, String
from models.base import Base


class Organization(Base):
    """
    One row of dump/organizations.csv.

    Database column names are the lower-cased CSV headers; attribute names
    are the snake_case keys produced by the CSV reader.
    """
    __tablename__ = "organizations"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    
    # Identity
    index = Column("index", Integer)
    organization_id = Column("organization id", String(255))
    name = Column("name", String(255))
    
    # Descriptive
    country = Column("country", String(255))
    founded = Column("founded", Integer)
    website = Column("website", String(255))
    description = Column("description", String(255))
    number_of_employees = Column("number of employees", String(255))
    industry = Column("industry", String(255))
