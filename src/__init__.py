"""Saleor App Bridge - webhook and configuration services for Saleor apps.

The service connects Saleor to third-party providers:

- **AvaTax**: synchronous ``CHECKOUT_CALCULATE_TAXES`` webhook computing
  checkout taxes from tenant configuration stored in Saleor private metadata
- **Typesense**: dashboard endpoints reporting webhook health and importing
  the product catalogue into a search collection

Architecture Overview:
- **API Layer**: FastAPI routes, webhook verification and middleware
- **Core Layer**: Configuration, logging, tracing, error tracking
- **Domain Layer**: Per-provider configuration models and use cases
- **Infrastructure Layer**: HTTP clients for Saleor, AvaTax and Typesense
"""
