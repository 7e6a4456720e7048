"""
Extended auth types.

User and Session shapes of the authentication provider's records, extended
with the platform's role field. Authentication itself is handled by the
provider; these types only describe what it hands back.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserRole(str, Enum):
    """User roles in the platform."""
    PATIENT = "patient"
    PROVIDER = "provider"
    ADMIN = "admin"
    USER = "user"
    CLIENT = "client"


class User(BaseModel):
    """Authenticated user with optional platform role."""
    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: str
    email: str
    email_verified: bool = False
    name: str
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    # May hold values outside UserRole
    role: Optional[str] = None

    @property
    def known_role(self) -> Optional[UserRole]:
        """Role as a UserRole, or None when unset or not a platform role."""
        try:
            return UserRole(self.role) if self.role is not None else None
        except ValueError:
            return None


class Session(BaseModel):
    """Authenticated session carrying the extended user."""
    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: str
    user_id: str
    token: str
    expires_at: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    user: User

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
