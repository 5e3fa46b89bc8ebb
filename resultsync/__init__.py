from .config import ResultsConfig
from .controller import ContentUpdateController
from .errors import (
    ConfigError,
    ContentRequestError,
    NetworkError,
    ParseError,
    RequestTimeoutError,
    ValidationError,
)
from .events import EventChannel, Subscription
from .logging_utils import setup_logging
from .mock_data import MockFixture
from .network import RequestHandle, RequestsNetworkClient
from .orchestrator import RequestOrchestrator
from .scheduling import AsyncioScheduler, DebounceTimer
from .schemas import (
    ActionKind,
    DropdownState,
    FilterState,
    Location,
    NavigationHint,
    PaginationData,
    PaginationState,
    Phase,
    ResultPayload,
    StoreSignal,
    UrlSegment,
    ViewState,
)
from .state_store import StateStore
from .url_codec import build_request_url, encode

__all__ = [
    "ResultsConfig",
    "ContentUpdateController",
    "ConfigError",
    "ContentRequestError",
    "NetworkError",
    "ParseError",
    "RequestTimeoutError",
    "ValidationError",
    "EventChannel",
    "Subscription",
    "setup_logging",
    "MockFixture",
    "RequestHandle",
    "RequestsNetworkClient",
    "RequestOrchestrator",
    "AsyncioScheduler",
    "DebounceTimer",
    "ActionKind",
    "DropdownState",
    "FilterState",
    "Location",
    "NavigationHint",
    "PaginationData",
    "PaginationState",
    "Phase",
    "ResultPayload",
    "StoreSignal",
    "UrlSegment",
    "ViewState",
    "StateStore",
    "build_request_url",
    "encode",
]
__version__ = "0.1.0"
