"""
User model
"""

from sqlalchemy import Column, String

from clipshare.models.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    # Uniqueness is checked before insert, the table carries no constraint
    username = Column(String(255), index=True, nullable=False)
    password_hash = Column("password", String(255), nullable=False)
