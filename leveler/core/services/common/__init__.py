from leveler.core.services.common.base import ServiceBase

__all__ = ["ServiceBase"]
