from .defaults import DEFAULTS
from .models import RepositorySettings
from .settings import CONFIG_MODULE_ENVVAR, Settings

__all__ = ["CONFIG_MODULE_ENVVAR", "DEFAULTS", "RepositorySettings", "Settings"]
