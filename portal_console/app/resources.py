from __future__ import annotations

from dataclasses import dataclass, field

from portal_console.app.listing.optimistic_mutator import StatusToggleRule
from portal_console.app.listing.query_serializer import FieldKind, FilterField
from portal_console.clients.portal_sdk.http_client import HttpClient
from portal_console.clients.portal_sdk.resources_client import ResourceClient

ACTIVE_STATUS = ("active", "deactive")


@dataclass(frozen=True)
class ResourceAdapter:
    name: str
    path: str
    fields: tuple[FilterField, ...] = ()
    list_path: str | None = None
    status_path: str | None = None
    id_param: str = "id"
    id_field: str = "_id"
    envelope_keys: tuple[str, ...] = ()
    page_size: int | None = None
    toggle_rule: StatusToggleRule | None = field(default_factory=StatusToggleRule)

    @property
    def supports_status_toggle(self) -> bool:
        return self.toggle_rule is not None

    def client(self, http: HttpClient) -> ResourceClient:
        return ResourceClient(
            http,
            self.path,
            list_path=self.list_path,
            status_path=self.status_path,
            id_param=self.id_param,
        )


def _status(*options: str) -> FilterField:
    return FilterField("status", FieldKind.ENUM, options=options)


def _search(wire_field: str) -> FilterField:
    return FilterField("search", FieldKind.TEXT, wire_field=wire_field)


def _date_range(wire_field: str) -> FilterField:
    return FilterField("dateRange", FieldKind.DATE_RANGE, wire_field=wire_field)


RESOURCES: dict[str, ResourceAdapter] = {
    "blog": ResourceAdapter(
        name="blog",
        path="blog",
        fields=(_search("title"), _status(*ACTIVE_STATUS), _date_range("createdAt")),
    ),
    "blog-category": ResourceAdapter(
        name="blog-category",
        path="blog-category",
        fields=(_search("title"), _status(*ACTIVE_STATUS), _date_range("createdAt")),
        envelope_keys=("blogCategories", "data"),
    ),
    "ticket": ResourceAdapter(
        name="ticket",
        path="ticket",
        fields=(
            _search("title"),
            _status("waiting-response", "pending", "done", "open"),
            FilterField("type", FieldKind.ENUM, options=("Technical", "Financial", "General", "ai")),
            _date_range("createdAt"),
        ),
        toggle_rule=None,
    ),
    "transaction": ResourceAdapter(
        name="transaction",
        path="transaction",
        fields=(
            _search("authority"),
            _status("success", "pending", "failed", "expired", "unknown"),
            _date_range("date"),
        ),
        toggle_rule=None,
    ),
    "discount": ResourceAdapter(name="discount", path="discount"),
    "login-log": ResourceAdapter(
        name="login-log",
        path="user",
        list_path="user/list/log/login",
        fields=(
            FilterField("userId", FieldKind.TEXT),
            FilterField("ipAddress", FieldKind.TEXT),
            _date_range("date"),
        ),
        toggle_rule=None,
    ),
    "admin": ResourceAdapter(name="admin", path="admin", id_param="adminId"),
    "user": ResourceAdapter(
        name="user",
        path="user",
        status_path="user/change-status",
        id_param="_id",
        fields=(
            FilterField("name", FieldKind.TEXT, debounced=True),
            FilterField("email", FieldKind.TEXT),
            FilterField("mobile", FieldKind.TEXT),
        ),
        toggle_rule=StatusToggleRule(on="active", off="inactive"),
    ),
    "feedback": ResourceAdapter(name="feedback", path="feedback", toggle_rule=None),
    "rate": ResourceAdapter(name="rate", path="rate", toggle_rule=None),
    "notify": ResourceAdapter(name="notify", path="notify", toggle_rule=None),
}


def get_resource(name: str) -> ResourceAdapter:
    try:
        return RESOURCES[name]
    except KeyError as exc:
        raise KeyError(f"Unknown resource {name!r}; known: {', '.join(sorted(RESOURCES))}") from exc
