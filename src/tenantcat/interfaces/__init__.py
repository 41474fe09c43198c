"""Interfaces (application boundary) for TENANTCAT.

Defines framework-free application contracts: ABCs for the shard registry, the
tenant metadata store, the unit of work and the redactor. Business rules stay
out of this package.

Dependency rule: may import `tenantcat.domain` value objects and errors only.
It may be imported by `tenantcat.service_layer`, `tenantcat.adapters`, and
`tenantcat.bootstrap`.
"""
