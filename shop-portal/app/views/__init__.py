# Page controllers

from .results import Loading, Redirect, Render, ViewResult
from .dashboard import DashboardController
from .catalog import CatalogController

__all__ = [
    "Loading",
    "Redirect",
    "Render",
    "ViewResult",
    "DashboardController",
    "CatalogController",
]
