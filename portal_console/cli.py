from __future__ import annotations

import argparse
import asyncio
import json
from collections.abc import Sequence

from portal_console.app.config import AppConfig
from portal_console.app.list_screen import ListScreenController
from portal_console.app.listing.optimistic_mutator import MutationOutcome
from portal_console.app.notifications import WARNING, ConsoleNotifier
from portal_console.app.resources import RESOURCES, get_resource
from portal_console.clients.portal_sdk.auth_store import AuthStore
from portal_console.clients.portal_sdk.http_client import HttpClient


def build_http_client(config: AppConfig) -> HttpClient:
    return HttpClient(
        config.base_url,
        auth_store=AuthStore(config.access_token),
        timeout_seconds=config.timeout_seconds,
        verify_ssl=config.verify_ssl,
        retry_max_attempts=config.retry_max_attempts,
        retry_backoff_ms=config.retry_backoff_ms,
    )


async def cmd_list(args: argparse.Namespace, config: AppConfig, http: HttpClient) -> int:
    notifier = ConsoleNotifier()
    screen = ListScreenController.for_resource(get_resource(args.resource), http, config, notifier)
    for raw in args.filter:
        field, _, value = raw.partition("=")
        screen.filters.set_draft(field.strip(), value)
    if args.date_from:
        markers = [args.date_from, args.date_to] if args.date_to else [args.date_from]
        screen.filters.set_draft(args.date_field, markers)
    if not screen.filters.apply():
        notifier.notify(WARNING, f"Filters not applied: {screen.filters.last_error}")
        return 1

    screen.pagination.page = max(1, args.page)
    outcome = await screen.load()
    if not outcome.ok:
        return 1
    print(json.dumps({"items": screen.items, "page_info": screen.page_info()}, ensure_ascii=False, indent=2, default=str))
    return 0


async def cmd_toggle(args: argparse.Namespace, config: AppConfig, http: HttpClient) -> int:
    resource = get_resource(args.resource)
    screen = ListScreenController.for_resource(resource, http, config, ConsoleNotifier())
    screen.items = [{resource.id_field: args.entity_id, "status": args.status}]
    outcome = await screen.toggle_status(args.entity_id)
    print(json.dumps({"outcome": outcome.value, "row": screen.items[0]}, ensure_ascii=False, indent=2))
    return 0 if outcome is MutationOutcome.APPLIED else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="portal_console", description="Portal list engine CLI")
    parser.add_argument("--env-file", default=".env")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="fetch one page of a resource list")
    list_parser.add_argument("resource", choices=sorted(RESOURCES))
    list_parser.add_argument("--page", type=int, default=1)
    list_parser.add_argument("--filter", action="append", default=[], metavar="FIELD=VALUE")
    list_parser.add_argument("--from", dest="date_from", default=None)
    list_parser.add_argument("--to", dest="date_to", default=None)
    list_parser.add_argument("--date-field", default="dateRange")
    list_parser.set_defaults(func=cmd_list)

    toggle_parser = subparsers.add_parser("toggle", help="toggle the status of one record")
    toggle_parser.add_argument("resource", choices=sorted(RESOURCES))
    toggle_parser.add_argument("entity_id")
    toggle_parser.add_argument("status", help="current status of the record")
    toggle_parser.set_defaults(func=cmd_toggle)
    return parser


async def _run(args: argparse.Namespace, http: HttpClient | None) -> int:
    config = AppConfig.from_env(args.env_file)
    client = http or build_http_client(config)
    try:
        return await args.func(args, config, client)
    finally:
        if http is None:
            await client.aclose()


def main(argv: Sequence[str] | None = None, http: HttpClient | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(_run(args, http))
    except (KeyError, ValueError) as exc:
        print(json.dumps({"error": type(exc).__name__, "message": str(exc)}, indent=2))
        return 1
