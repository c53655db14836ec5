"""HTTP control surface.

This package exposes ingestion, status, and listing endpoints over FastAPI.
"""
