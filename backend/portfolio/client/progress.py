"""Derived progress metrics; pure functions of the client caches."""

import math
from typing import Any, Iterable, Mapping

from portfolio.services.module_keys import module_keys_for


def _percent(done: int, total: int) -> int:
    # Redondeo half-up (12.5 -> 13), no el redondeo bancario de round()
    return math.floor(100 * done / total + 0.5)


def _modules(project: Mapping[str, Any]) -> list[str]:
    return list(project.get("modules") or [])


def project_progress(project: Mapping[str, Any], completed: Mapping[str, bool]) -> int:
    """
    Porcentaje de módulos completados de un proyecto (0-100, redondeado).

    Un proyecto sin módulos cuenta como uno solo (clave "main"): 100 si
    está completado, 0 si no.
    """
    keys = module_keys_for(project["id"], _modules(project))
    done = sum(1 for key in keys if completed.get(str(key)))
    return _percent(done, len(keys))


def total_progress(projects: Iterable[Mapping[str, Any]], completed: Mapping[str, bool]) -> int:
    """
    Porcentaje global sobre todos los proyectos.

    Cada proyecto aporta max(1, nº de módulos) al denominador; el numerador
    son todas las claves completadas de la caché. Los flags huérfanos
    (módulos renombrados, proyectos borrados) también suman, así que el
    resultado puede pasar de 100. Sin proyectos devuelve 0.
    """
    total = sum(len(module_keys_for(p["id"], _modules(p))) for p in projects)
    if total == 0:
        return 0
    done = sum(1 for value in completed.values() if value)
    return _percent(done, total)


def summary(
    projects: list[Mapping[str, Any]],
    completed: Mapping[str, bool],
    uploads: Mapping[str, Any],
) -> dict[str, int]:
    """Totales del panel de resumen."""
    return {
        "projects": len(projects),
        "completed": sum(1 for value in completed.values() if value),
        "uploads": len(uploads),
        "progress": total_progress(projects, completed),
    }
