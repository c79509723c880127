from portal_console.clients.portal_sdk.auth_store import AuthStore
from portal_console.clients.portal_sdk.errors import APIError
from portal_console.clients.portal_sdk.http_client import HttpClient
from portal_console.clients.portal_sdk.resources_client import ResourceClient

__all__ = [
    "APIError",
    "AuthStore",
    "HttpClient",
    "ResourceClient",
]
