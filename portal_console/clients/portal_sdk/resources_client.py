from __future__ import annotations

from typing import Any

from portal_console.clients.portal_sdk.http_client import HttpClient


class ResourceClient:
    def __init__(
        self,
        http: HttpClient,
        resource: str,
        *,
        list_path: str | None = None,
        status_path: str | None = None,
        id_param: str = "id",
    ) -> None:
        self.http = http
        self.resource = resource.strip("/")
        self.list_path = list_path or f"{self.resource}/list"
        self.status_path = status_path or f"{self.resource}/changeStatus"
        self.id_param = id_param

    async def list(self, params: dict[str, Any]) -> Any:
        return await self.http.request("GET", self.list_path, params=params)

    async def change_status(self, entity_id: str, status: Any) -> Any:
        body = {self.id_param: entity_id, "status": status}
        return await self.http.request("PUT", self.status_path, json_body=body)
