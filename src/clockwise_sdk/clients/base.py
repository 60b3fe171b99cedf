from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient

SINGLE_OBJECT_ACCEPT = "application/vnd.pgrst.object+json"


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        # Anonymous calls authenticate with the project key itself.
        token = self.access_token or self.http.config.anon_key
        return {"Authorization": f"Bearer {token}"}

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, **kwargs)

    def _rpc(self, function: str, params: dict[str, Any] | None = None, *, module: str = "rpc") -> Any:
        return self._request(
            "POST",
            f"/rest/v1/rpc/{function}",
            json_body=params or {},
            module=module,
            operation=function,
        )

    def _select(
        self,
        table: str,
        params: dict[str, Any],
        *,
        single: bool = False,
        module: str = "rest",
    ) -> Any:
        headers = {"Accept": SINGLE_OBJECT_ACCEPT} if single else {}
        return self._request(
            "GET",
            f"/rest/v1/{table}",
            params=params,
            headers=headers,
            module=module,
            operation=f"select:{table}",
        )

    def _update(
        self,
        table: str,
        filters: dict[str, Any],
        values: dict[str, Any],
        *,
        single: bool = False,
        module: str = "rest",
    ) -> Any:
        headers = {"Prefer": "return=representation"}
        if single:
            headers["Accept"] = SINGLE_OBJECT_ACCEPT
        return self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=filters,
            json_body=values,
            headers=headers,
            module=module,
            operation=f"update:{table}",
        )


def eq(value: object) -> str:
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"
