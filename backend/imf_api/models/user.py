"""
User Model
Stores agent credentials for authentication.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime
from imf_api.database import Base

class User(Base):
    """
    User model for authentication.
    Plaintext passwords are never stored, only the salted bcrypt hash.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(1024), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
