# app/__init__.py
"""
Companies & Invoices API.

The FastAPI instance is re-exported so the service runs with:
    uvicorn app:app --reload
"""

from .main import app

__all__ = ["app"]
