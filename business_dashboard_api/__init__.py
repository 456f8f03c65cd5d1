"""
Top‑level package for the Business Dashboard API.

This file makes ``business_dashboard_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``business_dashboard_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
