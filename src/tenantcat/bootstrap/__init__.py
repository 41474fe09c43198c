"""Bootstrap (composition root) for TENANTCAT.

Assembles a `Catalog` at runtime: reads configuration, builds the engine,
brings the catalog schema up to date and wires the concrete unit of work into
the service-layer `Catalog` handle.

Import rules:
- Entry points import *this* package to obtain a catalog.
- This package may import: `tenantcat.adapters`, `tenantcat.service_layer`,
  `tenantcat.interfaces`, `tenantcat.domain`, and `tenantcat.config`.
- Inner layers must not import `tenantcat.bootstrap`.
"""

from .bootstrap import build_in_memory_catalog, open_or_bootstrap_catalog

__all__ = ["build_in_memory_catalog", "open_or_bootstrap_catalog"]
