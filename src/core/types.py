"""Type aliases for dynamic data structures exchanged with Saleor and providers.

All types defined here are JSON-serializable.
"""

from typing import Any

# JSON object as returned by Saleor GraphQL and the AvaTax / Typesense APIs
type JsonObject = dict[str, Any]

# Document uploaded to Typesense, keyed by Typesense field name
type SearchDocument = dict[str, Any]
