"""Pydantic schema models for API responses.

- **errors**: ``ErrorResponse`` of the global exception handlers
- **webhooks**: ``{"message": ...}`` bodies and Typesense dashboard responses
"""
