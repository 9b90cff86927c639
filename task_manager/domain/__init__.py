"""Domain layer: task status, identity, and domain exceptions."""
