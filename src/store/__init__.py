"""Datalake storage layer.

This module persists staged books under time partitions and answers
existence and listing queries for the SDK and HTTP surface.
"""
