from .masterchef import stake

__all__ = ("stake",)
