# Settings package
from push_dispatch.settings.dispatch_settings import DispatchSettings, get_settings

__all__ = ["DispatchSettings", "get_settings"]
