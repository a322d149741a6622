# dataprops/exceptions/registry_exceptions.py
"""Registry exceptions"""
from dataprops.exceptions.base import DataPropsError


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(DataPropsError): ...


class RegistryFrozenError(RuntimeError, RegistryError): ...
