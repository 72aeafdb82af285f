"""
Single import point for the ORM models.

Importing this package registers every table on Base.metadata.
"""

from .member import Member, Gender
from .sport import Sport, AllowedGender
from .subscription import Subscription, SubscriptionType

__all__ = [
    "Member",
    "Gender",
    "Sport",
    "AllowedGender",
    "Subscription",
    "SubscriptionType",
]
