"""SQLAlchemy ORM models."""

from hazardboard.models.base import Base
from hazardboard.models.account import Account, AccountSession, Role
from hazardboard.models.hazard import HazardReport

__all__ = ["Base", "Account", "AccountSession", "Role", "HazardReport"]
