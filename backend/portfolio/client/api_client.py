"""HTTP client for the portfolio API (httpx async)."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class PortfolioAPIError(Exception):
    """Respuesta de error del API o fallo de red."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class PortfolioClient:
    """
    Envoltorio fino sobre httpx.AsyncClient para cada ruta del API.

    Cada método devuelve el JSON de la respuesta; los códigos 4xx/5xx y los
    errores de transporte se convierten en PortfolioAPIError.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3005",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "PortfolioClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {str(e)}")
            raise PortfolioAPIError(f"{method} {path} failed: {e}") from e

        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise PortfolioAPIError(
                f"{method} {path} returned {response.status_code}: {detail}",
                status_code=response.status_code,
            )
        return response.json()

    async def list_projects(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/projects")

    async def create_project(
        self,
        name: str,
        type: str = "REPORTE",
        area: str = "Sistemas",
        modules: list[str] | None = None,
    ) -> dict[str, Any]:
        payload = {"name": name, "type": type, "area": area, "modules": modules or []}
        return await self._request("POST", "/api/projects", json=payload)

    async def delete_project(self, project_id: int) -> dict[str, int]:
        return await self._request("DELETE", f"/api/projects/{project_id}")

    async def list_completed(self) -> dict[str, bool]:
        return await self._request("GET", "/api/completed")

    async def toggle_completion(self, module_key: str) -> dict[str, Any]:
        return await self._request(
            "POST", "/api/completed/toggle", json={"moduleKey": module_key}
        )

    async def list_uploads(self) -> dict[str, dict[str, Any]]:
        return await self._request("GET", "/api/uploads")

    async def upload(
        self,
        module_key: str,
        filename: str,
        data: bytes,
        mime_type: str = "application/octet-stream",
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/api/upload",
            data={"moduleKey": module_key},
            files={"file": (filename, data, mime_type)},
        )

    async def delete_upload(self, module_key: str) -> dict[str, bool]:
        return await self._request("DELETE", f"/api/upload/{quote(module_key, safe='')}")
