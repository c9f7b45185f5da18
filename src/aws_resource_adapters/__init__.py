"""AWS Resource Adapters - Root Package.

Lifecycle adapters that converge remote AWS resources toward a desired state
record held by a declarative infrastructure engine.

Key Components:
    - domain: Desired state record models and domain errors
    - infrastructure: Generic resource adapter, field mapping, pagination,
      waiters, sweepers and infrastructure errors
    - providers: AWS session management and the concrete resource definitions
    - config: Typed configuration and its loader
    - cli: Command line entry point

Architecture:
    Each resource type is a ResourceDefinition (model, mapping tables, API
    binding) fed to the one generic ResourceAdapter.
"""

__version__ = "0.1.0"
