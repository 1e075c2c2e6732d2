"""
Base model classes
"""

from sqlalchemy import Column, Integer

from clipshare.core.database import Base


class BaseModel(Base):
    __abstract__ = True

    # Assigned by the store on insert
    id = Column(Integer, primary_key=True, index=True)
