"""Infrastructure layer: generic adapter machinery and infrastructure errors."""
