from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from jobtracker.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Job(Base):
    """
    Job posting tracked by a single user.
    Only ever read or written through queries filtered by user_id.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)

    # Owner - isolation boundary for all job queries
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String, nullable=False, index=True)
    company = Column(String, nullable=True)
    location = Column(String, nullable=True)
    description = Column(String, nullable=True)
    requirements = Column(String, nullable=True)
    is_applied = Column(Boolean, default=False, nullable=False)

    # posted_at is set once at creation; set client-side for sub-second ordering
    posted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", back_populates="jobs")

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', user_id={self.user_id})>"
