"""Async client application for the portfolio API."""

from portfolio.client.api_client import PortfolioAPIError, PortfolioClient
from portfolio.client.progress import project_progress, summary, total_progress
from portfolio.client.state import PortfolioState, parse_modules

__all__ = [
    "PortfolioAPIError",
    "PortfolioClient",
    "PortfolioState",
    "parse_modules",
    "project_progress",
    "summary",
    "total_progress",
]
