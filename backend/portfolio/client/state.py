"""
Client-side state: the three caches plus the mutations the UI issues.

Los tres cachés (proyectos, completados, uploads) se cargan una vez con
tres peticiones concurrentes. El toggle de completado es optimista: se
aplica en local de inmediato, la petición corre en una tarea y, si falla
o se cancela, una closure de deshacer restaura el valor previo.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from portfolio.client.api_client import PortfolioAPIError, PortfolioClient
from portfolio.client.progress import project_progress, summary, total_progress
from portfolio.services.module_keys import build_module_key

logger = logging.getLogger(__name__)


def parse_modules(text: str) -> list[str]:
    """Un módulo por línea; se ignoran líneas vacías."""
    return [line.strip() for line in text.splitlines() if line.strip()]


@dataclass
class PortfolioState:
    client: PortfolioClient
    projects: list[dict[str, Any]] = field(default_factory=list)
    completed: dict[str, bool] = field(default_factory=dict)
    uploads: dict[str, dict[str, Any]] = field(default_factory=dict)
    _pending: set[asyncio.Task] = field(default_factory=set, repr=False)

    async def load(self) -> None:
        """Cargar los tres cachés en paralelo (sin dependencia de orden)."""
        projects, completed, uploads = await asyncio.gather(
            self.client.list_projects(),
            self.client.list_completed(),
            self.client.list_uploads(),
        )
        self.projects = projects
        self.completed = completed
        self.uploads = uploads

    def module_key(self, project_id: int, module_name: str | None = None) -> str:
        return build_module_key(project_id, module_name)

    def is_completed(self, module_key: str) -> bool:
        return bool(self.completed.get(module_key))

    def toggle_completion(self, module_key: str) -> asyncio.Task:
        """
        Invertir el estado en local y enviar la petición en segundo plano.

        Devuelve la tarea para quien quiera esperarla o cancelarla. Si la
        petición falla o se cancela, el valor local vuelve al anterior.
        """
        previous = self.completed.get(module_key)
        self.completed[module_key] = not previous

        def undo() -> None:
            if previous is None:
                self.completed.pop(module_key, None)
            else:
                self.completed[module_key] = previous

        task = asyncio.create_task(self._send_toggle(module_key, undo))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _send_toggle(self, module_key: str, undo: Callable[[], None]) -> bool | None:
        try:
            result = await self.client.toggle_completion(module_key)
        except asyncio.CancelledError:
            undo()
            raise
        except PortfolioAPIError as e:
            logger.error(f"Error toggling completion for {module_key}: {str(e)}")
            undo()
            return None
        return bool(result.get("completed"))

    async def wait_pending(self) -> None:
        """Esperar a que terminen los toggles en curso."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def upload(
        self,
        module_key: str,
        filename: str,
        data: bytes,
        mime_type: str = "application/octet-stream",
    ) -> dict[str, Any]:
        """Subir y esperar la respuesta: la URL de vista previa la da el servidor."""
        result = await self.client.upload(module_key, filename, data, mime_type)
        self.uploads[module_key] = result["file"]
        return result["file"]

    async def delete_upload(self, module_key: str) -> None:
        await self.client.delete_upload(module_key)
        self.uploads.pop(module_key, None)

    async def create_project(
        self,
        name: str,
        type: str = "REPORTE",
        area: str = "Sistemas",
        modules_text: str = "",
    ) -> dict[str, Any] | None:
        """Crear un proyecto; un nombre en blanco no llega a enviarse."""
        if not name.strip():
            return None
        project = await self.client.create_project(
            name=name, type=type, area=area, modules=parse_modules(modules_text)
        )
        self.projects.append(project)
        return project

    async def delete_project(self, project_id: int) -> None:
        await self.client.delete_project(project_id)
        self.projects = [p for p in self.projects if p["id"] != project_id]

    def project_progress(self, project_id: int) -> int:
        project = next((p for p in self.projects if p["id"] == project_id), None)
        if project is None:
            return 0
        return project_progress(project, self.completed)

    def total_progress(self) -> int:
        return total_progress(self.projects, self.completed)

    def summary(self) -> dict[str, int]:
        return summary(self.projects, self.completed, self.uploads)
