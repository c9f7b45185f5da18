"""AWS provider: session management, tagging and resource definitions."""
