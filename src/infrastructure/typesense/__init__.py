"""Typesense search provider and document mapping."""

from src.infrastructure.typesense.search_provider import (
    ImportResult,
    TypesenseError,
    TypesenseSearchProvider,
)

__all__ = ["ImportResult", "TypesenseError", "TypesenseSearchProvider"]
