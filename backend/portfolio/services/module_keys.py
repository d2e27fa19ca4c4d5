"""
Module keys: identificador compuesto (project_id, slot) de un módulo.

Los flags de completado y los uploads se guardan por la forma textual de
la clave (`"{project_id}-{slot}"`), no por foreign key. Es una referencia
débil a la lista de módulos del proyecto: si un módulo se renombra o el
proyecto se borra, los registros con la clave antigua quedan huérfanos y
no se migran ni se eliminan.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

MAIN_SLOT = "main"


@dataclass(frozen=True)
class ModuleKey:
    """Clave de un módulo concreto dentro de un proyecto."""

    project_id: int
    slot: str

    def __str__(self) -> str:
        return f"{self.project_id}-{self.slot}"

    @classmethod
    def parse(cls, raw: str) -> "ModuleKey":
        """
        Reconstruir la clave desde su forma textual.

        El separador es el primer guión: los nombres de módulo pueden
        contener guiones, el id del proyecto no.
        """
        project_part, sep, slot = raw.partition("-")
        if not sep or not project_part.isdigit():
            raise ValueError(f"Invalid module key: {raw!r}")
        return cls(project_id=int(project_part), slot=slot)


def module_slots(modules: Sequence[str]) -> list[str]:
    """Un proyecto sin módulos se trata como un único módulo "main"."""
    return list(modules) if modules else [MAIN_SLOT]


def module_keys_for(project_id: int, modules: Sequence[str]) -> list[ModuleKey]:
    return [ModuleKey(project_id, slot) for slot in module_slots(modules)]


def build_module_key(project_id: int, module_name: str | None = None) -> str:
    return str(ModuleKey(project_id, module_name or MAIN_SLOT))


def orphaned_keys(keys: Iterable[str], projects: Iterable[tuple[int, Sequence[str]]]) -> set[str]:
    """
    Claves que ya no corresponden a ningún módulo actual.

    Solo informa; nunca borra ni reasigna registros.
    """
    live = {
        str(key)
        for project_id, modules in projects
        for key in module_keys_for(project_id, modules)
    }
    return {key for key in keys if key not in live}
