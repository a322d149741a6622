# dataprops/exceptions/base.py
"""Root of the dataprops exception hierarchy."""


class DataPropsError(Exception):
    """Base class for every error raised by dataprops."""
