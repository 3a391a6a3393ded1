"""Utility modules for API-specific functionality.

- **responses**: orjson based JSON response class used as the default
  response class of the application
"""
