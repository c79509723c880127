from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from portal_console.app.config import AppConfig
from portal_console.app.infrastructure.errors.error_mapper import ErrorMapper
from portal_console.app.infrastructure.logging.logger import get_logger
from portal_console.app.listing.calendar_range import CalendarRangeNormalizer
from portal_console.app.listing.debounce import Debouncer, Sleeper
from portal_console.app.listing.filter_state import FilterStateController
from portal_console.app.listing.optimistic_mutator import MutationOutcome, OptimisticMutator
from portal_console.app.listing.paginated_fetcher import FetchOutcome, PaginatedFetcher
from portal_console.app.listing.pagination import PaginationState, goto_page
from portal_console.app.notifications import ERROR, WARNING, ConsoleNotifier, Notifier
from portal_console.app.resources import ResourceAdapter
from portal_console.clients.portal_sdk.http_client import HttpClient
from portal_console.clients.portal_sdk.resources_client import ResourceClient

DEFAULT_PAGE_SIZE = 10


class ListScreenController:
    """Everything one list screen needs: filters, paging, rows and status toggles.

    Page changes and applied-filter changes are discrete events; each one
    issues exactly one list request. Failures never propagate to the caller:
    they reset the rows and go out through the notifier.
    """

    def __init__(
        self,
        resource: ResourceAdapter,
        client: ResourceClient,
        notifier: Notifier | None = None,
        *,
        page_size: int | None = None,
        normalizer: CalendarRangeNormalizer | None = None,
        debounce_ms: int = 600,
        sleeper: Sleeper | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.resource = resource
        self.notifier = notifier or ConsoleNotifier()
        self.logger = logger or get_logger(__name__)
        self.pagination = PaginationState(page_size=page_size or resource.page_size or DEFAULT_PAGE_SIZE)
        self.filters = FilterStateController(resource.fields, self.pagination, normalizer)
        self.fetcher = PaginatedFetcher(client, resource.envelope_keys, resource=resource.name, logger=self.logger)
        self.mutator: OptimisticMutator | None = None
        if resource.toggle_rule is not None:
            self.mutator = OptimisticMutator(
                client,
                lambda: self.items,
                self.notifier,
                rule=resource.toggle_rule,
                id_field=resource.id_field,
                resource=resource.name,
                logger=self.logger,
            )
        self.debouncer = Debouncer(debounce_ms, sleeper)
        self.items: list[dict[str, Any]] = []
        self.is_loading = False

    @classmethod
    def for_resource(
        cls,
        resource: ResourceAdapter,
        http: HttpClient,
        config: AppConfig,
        notifier: Notifier | None = None,
    ) -> "ListScreenController":
        return cls(
            resource,
            resource.client(http),
            notifier,
            page_size=resource.page_size or config.page_size,
            normalizer=CalendarRangeNormalizer.from_names(config.calendar, config.timezone),
            debounce_ms=config.search_debounce_ms,
        )

    @property
    def draft_filters(self) -> dict[str, Any]:
        return dict(self.filters.draft)

    @property
    def applied_filters(self) -> dict[str, Any]:
        return dict(self.filters.applied)

    @property
    def current_page(self) -> int:
        return self.pagination.page

    @property
    def total_count(self) -> int:
        return self.pagination.total_items

    def set_draft_filter(self, field: str, value: Any) -> None:
        self.filters.set_draft(field, value)
        if self.filters.field(field).debounced:
            self.debouncer.schedule(self.apply_filters)

    async def apply_filters(self) -> bool:
        self.debouncer.cancel()
        if not self.filters.apply():
            self.notifier.notify(WARNING, f"Filters not applied: {self.filters.last_error}")
            return False
        await self.load()
        return True

    async def reset_filters(self) -> None:
        self.debouncer.cancel()
        self.filters.reset()
        await self.load()

    async def set_page(self, page: int) -> bool:
        previous = self.pagination.page
        if goto_page(self.pagination, page).page == previous:
            return False
        await self.load()
        return True

    async def refresh(self) -> FetchOutcome:
        return await self.load()

    async def load(self) -> FetchOutcome:
        self.is_loading = True
        outcome = await self.fetcher.fetch(
            self.pagination.page,
            self.pagination.page_size,
            self.filters.serialized_filter(),
        )
        if outcome.is_stale:
            return outcome

        self.is_loading = False
        if outcome.ok:
            self.items = list(outcome.result.items)
            self.pagination.total_items = outcome.result.total_count
            # the list shrank under the current page
            if self.pagination.clamp(self.pagination.page) != self.pagination.page:
                goto_page(self.pagination, self.pagination.page)
                return await self.load()
        else:
            self.items = []
            self.pagination.total_items = 0
            self.notifier.notify(
                ERROR,
                ErrorMapper.to_display_message(outcome.error, f"Could not load the {self.resource.name} list"),
            )
        return outcome

    async def toggle_status(self, entity: Mapping[str, Any] | str) -> MutationOutcome:
        if self.mutator is None:
            raise ValueError(f"Resource {self.resource.name!r} does not support status changes")
        return await self.mutator.toggle(entity)

    def is_processing(self, entity: Mapping[str, Any] | str) -> bool:
        if self.mutator is None:
            return False
        entity_id = entity[self.resource.id_field] if isinstance(entity, Mapping) else entity
        return self.mutator.is_processing(str(entity_id))

    def page_info(self) -> dict[str, Any]:
        first, last = self.pagination.item_range()
        return {
            "page": self.pagination.page,
            "page_size": self.pagination.page_size,
            "total_items": self.pagination.total_items,
            "total_pages": self.pagination.total_pages,
            "first_item": first,
            "last_item": last,
            "window": self.pagination.page_window(),
        }
