from .proxy import Proxy, maybe_evaluate

__all__ = ["Proxy", "maybe_evaluate"]
