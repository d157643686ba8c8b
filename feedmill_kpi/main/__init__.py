"""
Main module - Main/Composition Root Layer

Entry point of the service, orchestrating the initialization and
configuration of all other layers.

Its primary responsibilities include:
- Loading settings from the environment
- Wiring calculators, stores and use cases (Composition Root)
- Initializing the framework (FastAPI)
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
]
