"""
User model for authentication and job ownership.

Each User owns a set of jobs; every job query is filtered by the owner's id.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from jobtracker.core.database import Base


class User(Base):
    """
    User account.

    The password column only ever holds a bcrypt hash, never the plaintext.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Authentication credentials
    username = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)

    email = Column(String, nullable=True)

    # Relationships
    # passive_deletes: the ON DELETE CASCADE foreign key removes the jobs
    jobs = relationship("Job", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
