"""Base domain building blocks."""
from .model import TAG_ATTRIBUTES, Attribute, ResourceModel

__all__: list = ["TAG_ATTRIBUTES", "Attribute", "ResourceModel"]
