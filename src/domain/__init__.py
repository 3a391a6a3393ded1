"""Domain logic of the Saleor apps (AvaTax taxes, Typesense search)."""
