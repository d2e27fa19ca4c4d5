"""API routers."""

# Importar routers para que estén disponibles
from portfolio.api import completion, projects, uploads

__all__ = ["completion", "projects", "uploads"]
