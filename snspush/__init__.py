from .backend import SnsBackend, create_client
from .broadcast import BroadcastResult, SendOutcome, broadcast
from .config import SUPPORTED_PLATFORMS, InterfaceOptions, Platform
from .events import EventEmitter, EventType
from .exceptions import (
    AuthorizationError,
    EndpointDisabledError,
    ListingError,
    NotFoundError,
    SendError,
    SnsPushError,
    ThrottlingError,
    UnsupportedPlatformError,
    ValidationError,
)
from .interface import PushInterface
from .models import Application, Endpoint, Subscription, Topic
from .pagination import Page, fetch_all, iter_items, iter_pages

__all__ = [
    "PushInterface",
    "InterfaceOptions",
    "Platform",
    "SUPPORTED_PLATFORMS",
    # Backend
    "SnsBackend",
    "create_client",
    # Models
    "Endpoint",
    "Application",
    "Topic",
    "Subscription",
    # Pagination & broadcast engines
    "Page",
    "fetch_all",
    "iter_pages",
    "iter_items",
    "broadcast",
    "BroadcastResult",
    "SendOutcome",
    # Events
    "EventEmitter",
    "EventType",
    # Exceptions
    "SnsPushError",
    "ListingError",
    "SendError",
    "ValidationError",
    "UnsupportedPlatformError",
    "NotFoundError",
    "EndpointDisabledError",
    "ThrottlingError",
    "AuthorizationError",
]
