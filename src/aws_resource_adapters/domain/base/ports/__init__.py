"""Domain ports package."""
from .resource_port import ResourceAdapterPort, TaggingPort

__all__: list = ["ResourceAdapterPort", "TaggingPort"]
