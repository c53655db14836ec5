"""Book ingestion pipeline.

This module fetches raw archive texts, splits them into header and body,
and stages the parts locally before they are committed to the datalake.
"""
