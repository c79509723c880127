from portal_console.app.config import AppConfig
from portal_console.app.list_screen import ListScreenController
from portal_console.app.listing.calendar_range import CalendarRangeNormalizer, DateRange, InvertedDateRangeError
from portal_console.app.listing.filter_state import FilterStateController, FilterStatus, UnknownFilterFieldError
from portal_console.app.listing.optimistic_mutator import MutationOutcome, OptimisticMutator, StatusToggleRule
from portal_console.app.listing.paginated_fetcher import FetchOutcome, FetchStatus, PaginatedFetcher
from portal_console.app.listing.pagination import PaginationState
from portal_console.app.listing.query_serializer import FieldKind, FilterField, build_where_clause, serialize_filter
from portal_console.app.listing.result_unwrapper import ListResult, unwrap_result
from portal_console.app.notifications import ConsoleNotifier, Notifier, RecordingNotifier
from portal_console.app.resources import RESOURCES, ResourceAdapter, get_resource

__all__ = [
    "AppConfig",
    "CalendarRangeNormalizer",
    "ConsoleNotifier",
    "DateRange",
    "FetchOutcome",
    "FetchStatus",
    "FieldKind",
    "FilterField",
    "FilterStateController",
    "FilterStatus",
    "InvertedDateRangeError",
    "ListResult",
    "ListScreenController",
    "MutationOutcome",
    "Notifier",
    "OptimisticMutator",
    "PaginatedFetcher",
    "PaginationState",
    "RESOURCES",
    "RecordingNotifier",
    "ResourceAdapter",
    "StatusToggleRule",
    "UnknownFilterFieldError",
    "build_where_clause",
    "get_resource",
    "serialize_filter",
    "unwrap_result",
]
