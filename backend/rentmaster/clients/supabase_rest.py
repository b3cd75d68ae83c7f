from __future__ import annotations

from typing import Any, Optional

import httpx

from ..config import settings


class SupabaseRestClient:
    """Read-only PostgREST access to the cloud copy of the portfolio tables."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base = (base_url if base_url is not None else settings.supabase_url or "").rstrip("/")
        self.api_key = api_key if api_key is not None else settings.supabase_anon_key
        self.timeout_s = timeout_s or settings.supabase_timeout_s
        self.transport = transport

    def enabled(self) -> bool:
        return bool(self.base and self.api_key)

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": str(self.api_key),
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def fetch_table(self, table: str) -> list[dict[str, Any]]:
        """All rows of one table. HTTP and decoding errors propagate."""
        url = f"{self.base}/rest/v1/{table}"
        with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
            r = client.get(url, params={"select": "*"}, headers=self._headers())
            r.raise_for_status()
            data = r.json()

        if not isinstance(data, list):
            raise ValueError(f"unexpected payload for {table}: {type(data).__name__}")
        return data
