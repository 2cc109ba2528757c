from .settings import ClientSettings, ProtocolSettings, TimeoutSettings
from .subscription import SubscriptionState

__all__ = ["ClientSettings", "ProtocolSettings", "SubscriptionState", "TimeoutSettings"]
