"""Superfície HTTP (FastAPI)."""
