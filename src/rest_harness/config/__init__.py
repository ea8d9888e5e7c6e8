"""
Environment configuration for the harness.
"""

from .exceptions import (
    ClientConfigurationError,
    ConfigException,
    InvalidConfigException,
    MissingEndpointParameterException,
)
from .loading import available_environments, load_config
from .models import DEFAULT_HEADERS, DEFAULT_TIMEOUT_MS, ClientConfig, HarnessConfig

__all__ = [
    'ClientConfig',
    'HarnessConfig',
    'DEFAULT_HEADERS',
    'DEFAULT_TIMEOUT_MS',
    'load_config',
    'available_environments',
    'ConfigException',
    'InvalidConfigException',
    'ClientConfigurationError',
    'MissingEndpointParameterException',
]
