"""Application layer: DTOs, ports, validation, authorization and use cases."""
