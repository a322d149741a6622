# dataprops/exceptions/service_exceptions.py
"""Service lifecycle exceptions"""
from dataprops.exceptions.base import DataPropsError


class ServiceDestroyedError(RuntimeError, DataPropsError):
    """Raised when a destroyed service is asked to do work."""
