"""Utility helpers."""

from .http import HTTPClient, encode_query_args

__all__ = ["HTTPClient", "encode_query_args"]
