from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote

import httpx

from figma_export_api.core.errors import FigmaFetchError, FigmaNotConfiguredError, InputShapeError
from figma_export_api.settings import get_settings

logger = logging.getLogger("figma_export_api.figma_client")

_FILE_KEY = re.compile(r"/(?:file|design|proto)/([A-Za-z0-9]+)")
_NODE_ID = re.compile(r"[?&#]node-id=([^&#]+)")


@dataclass(frozen=True)
class FigmaReference:
    file_key: str
    node_id: str | None = None


def parse_figma_url(url: str) -> FigmaReference:
    """Extract the file key and optional node id from a share link."""
    match = _FILE_KEY.search(url or "")
    if match is None:
        raise InputShapeError(
            "Invalid Figma URL: could not extract file key",
            details={"supported": ["/file/", "/design/", "/proto/"]},
        )
    node_match = _NODE_ID.search(url)
    node_id = None
    if node_match:
        # Share links encode "1:2" as "1-2".
        node_id = unquote(node_match.group(1)).replace("-", ":")
    return FigmaReference(file_key=match.group(1), node_id=node_id)


class FigmaClient:
    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.token = token or settings.FIGMA_ACCESS_TOKEN
        if not self.token:
            raise FigmaNotConfiguredError()
        self.base_url = (base_url or settings.FIGMA_API_BASE).rstrip("/")
        self.timeout_s = timeout_s or settings.FIGMA_HTTP_TIMEOUT
        self.transport = transport

    def _get(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        with httpx.Client(
            base_url=self.base_url,
            headers={"X-Figma-Token": self.token},
            timeout=self.timeout_s,
            transport=self.transport,
        ) as client:
            try:
                response = client.get(path, params=params)
            except httpx.TimeoutException as exc:
                raise FigmaFetchError(
                    status_code=504,
                    code="figma_timeout",
                    message="Figma API request timed out",
                    details={"path": path},
                ) from exc
            except httpx.HTTPError as exc:
                raise FigmaFetchError(
                    status_code=502,
                    code="figma_upstream_error",
                    message="Figma API connection failed",
                    details={"path": path},
                ) from exc

        if response.status_code == 403:
            raise FigmaFetchError(
                status_code=502,
                code="figma_upstream_error",
                message="Figma API rejected the access token",
                details={"status_code": 403},
            )
        if response.status_code == 404:
            raise FigmaFetchError(
                status_code=404,
                code="figma_not_found",
                message="Figma file or node not found",
                details={"path": path},
            )
        if response.status_code == 429:
            raise FigmaFetchError(
                status_code=429,
                code="figma_rate_limited",
                message="Figma API rate limit exceeded",
                details={"retry_after": response.headers.get("retry-after")},
            )
        if response.status_code != 200:
            raise FigmaFetchError(
                status_code=502,
                code="figma_upstream_error",
                message=f"Figma API error {response.status_code}",
                details={"status_code": response.status_code, "body": response.text[:200]},
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise FigmaFetchError(
                status_code=502,
                code="figma_upstream_error",
                message="Figma API returned invalid JSON",
            ) from exc
        if not isinstance(payload, dict):
            raise FigmaFetchError(
                status_code=502,
                code="figma_upstream_error",
                message="Figma API returned an unexpected payload",
            )
        return payload

    def get_file(self, file_key: str) -> dict[str, Any]:
        payload = self._get(f"/v1/files/{file_key}")
        logger.info("figma file fetched file=%s name=%s", file_key, payload.get("name"))
        return payload

    def get_nodes(self, file_key: str, node_ids: list[str]) -> dict[str, Any]:
        payload = self._get(f"/v1/files/{file_key}/nodes", params={"ids": ",".join(node_ids)})
        logger.info("figma nodes fetched file=%s requested=%s", file_key, len(node_ids))
        return payload

    def fetch_document(self, url: str) -> dict[str, Any]:
        """Fetch the raw document a share link points at."""
        reference = parse_figma_url(url)
        if reference.node_id:
            return self.get_nodes(reference.file_key, [reference.node_id])
        return self.get_file(reference.file_key)
