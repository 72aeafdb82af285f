from .member_service import MemberService
from .sport_service import SportService
from .subscription_service import SubscriptionService

__all__ = ["MemberService", "SportService", "SubscriptionService"]
