from .model import TenantModel

__all__: list = ["TenantModel"]
