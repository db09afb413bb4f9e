"""fumotion - terminal client for the Fumotion carpooling API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fumotion")
except PackageNotFoundError:
    __version__ = "0+local"
from fumotion.client import FumotionClient
from fumotion.config import FumotionConfig
from fumotion.exceptions import (
    FumotionApiError,
    FumotionAuthError,
    FumotionConfigError,
    FumotionError,
    FumotionTransportError,
    FumotionValidationError,
)
from fumotion.models import (
    AdminStatistics,
    Booking,
    BookingStatus,
    Conversation,
    Message,
    Review,
    Trip,
    TripSearchResult,
    TripStatus,
    User,
    UserReviews,
)
from fumotion.navigation import NavigationController, NavigationState, Screen
from fumotion.polling import PollingLoop
from fumotion.session import Session, SessionStore

__all__ = [
    "__version__",
    "AdminStatistics",
    "Booking",
    "BookingStatus",
    "Conversation",
    "FumotionApiError",
    "FumotionAuthError",
    "FumotionClient",
    "FumotionConfig",
    "FumotionConfigError",
    "FumotionError",
    "FumotionTransportError",
    "FumotionValidationError",
    "Message",
    "NavigationController",
    "NavigationState",
    "PollingLoop",
    "Review",
    "Screen",
    "Session",
    "SessionStore",
    "Trip",
    "TripSearchResult",
    "TripStatus",
    "User",
    "UserReviews",
]
