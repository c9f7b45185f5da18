"""Domain layer - desired state records and the domain error taxonomy."""
