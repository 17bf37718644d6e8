"""
Database models package.
"""

from jobtracker.models.user import User
from jobtracker.models.job import Job

__all__ = ["User", "Job"]
