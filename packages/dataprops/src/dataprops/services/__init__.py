from .base import AppServiceBase

__all__ = ["AppServiceBase"]
