"""
Application package initializer.

The project is organised into small layers: ``core`` holds settings,
logging, the error taxonomy and the remote record store boundary;
``schemas`` holds the typed request/response models for each entity;
``services`` holds the entity accessors, the time tracking store and
the dashboard aggregator; ``api`` exposes them over HTTP, grouped by
version under ``api/<version>/``.
"""

from .main import app  # noqa: F401
