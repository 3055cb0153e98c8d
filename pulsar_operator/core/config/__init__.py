from .settings import OperatorSettings, load_settings

__all__ = ["OperatorSettings", "load_settings"]
