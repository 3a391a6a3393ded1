"""Infrastructure layer for outbound integrations.

This package holds the concrete clients the domain layer talks to:

- **http**: Shared ``httpx.AsyncClient`` lifecycle
- **saleor**: Auth persistence (APL), GraphQL client, metadata access
- **avatax**: AvaTax REST v2 client
- **typesense**: Typesense search provider (health check, document import)

Clients receive their ``httpx.AsyncClient`` from the caller, so tests can
substitute an ``httpx.MockTransport`` without patching.
"""
