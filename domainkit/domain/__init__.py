"""
Domain layer.

Modeling primitives for domain-driven code. The layer has no dependencies on
persistence or transport frameworks.

This layer contains:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects defined by attributes
- Aggregate Roots: Consistency boundaries
- Domain Events: Records of what happened
"""
