"""
Users Module.

Profile lookups and bearer token identity.
"""

from src.modules.users.identity import IdentityProvider
from src.modules.users.models import (
    NotificationBindingRequest,
    NotificationPreferenceRequest,
    NotificationTarget,
    UserProfile,
)
from src.modules.users.repository import UserRepository

__all__ = [
    "IdentityProvider",
    "NotificationBindingRequest",
    "NotificationPreferenceRequest",
    "NotificationTarget",
    "UserProfile",
    "UserRepository",
]
