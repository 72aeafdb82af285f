from .member import MemberCreate, MemberUpdate, MemberRead
from .sport import SportCreate, SportUpdate, SportRead
from .subscription import SubscriptionCreate, SubscriptionDelete, SubscriptionRead
