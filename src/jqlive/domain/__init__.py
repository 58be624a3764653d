"""Domain layer - pure types, errors, events and protocols with no external dependencies.

This layer contains:
- types: results, path segments, boundary frames and suggestion types
- errors: the jqlive exception taxonomy
- events: domain events and the event bus
- protocols: interfaces implemented by the infrastructure layer

All other layers depend on the domain layer.
"""
