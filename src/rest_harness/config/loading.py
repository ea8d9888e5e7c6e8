"""
Environment configuration loading.

An environment is a YAML file named ``<env>.yaml``. Files under
``./config/environments`` in the working directory take precedence over the
environments shipped with the package. The environment name comes from the
caller, then ``$HARNESS_CONFIG``, then ``qa``.
"""
import os
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .exceptions import InvalidConfigException
from .models import HarnessConfig

logger = logging.getLogger(__name__)

DEFAULT_ENV = 'qa'
CONFIG_ENV_VAR = 'HARNESS_CONFIG'
PACKAGED_ENVIRONMENTS = Path(__file__).parent / 'environments'


def _environment_dirs() -> List[Path]:
    return [
        Path.cwd() / 'config' / 'environments',
        PACKAGED_ENVIRONMENTS,
    ]


def find_environment_file(env_name: str) -> Optional[Path]:
    """Return the first ``<env_name>.yaml`` found in the search path, if any."""
    for directory in _environment_dirs():
        path = directory / f'{env_name}.yaml'
        if path.exists():
            return path
    return None


def available_environments() -> List[str]:
    """List environment names from the working directory and the package."""
    names = set()
    for directory in _environment_dirs():
        if directory.is_dir():
            names.update(path.stem for path in directory.glob('*.yaml'))
    return sorted(names)


def _read_environment(path: Path, env_name: str) -> HarnessConfig:
    try:
        with open(path, 'r') as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidConfigException(
            f"Failed to parse {path}: {e}", env_name=env_name, path=str(path)
        ) from e

    if not isinstance(raw, dict):
        raise InvalidConfigException(
            f"Environment file {path} must contain a mapping", env_name=env_name, path=str(path)
        )

    data: Dict[str, Any] = dict(raw)
    data.setdefault('env', env_name)
    try:
        return HarnessConfig.model_validate(data)
    except ValidationError as e:
        raise InvalidConfigException(str(e), env_name=env_name, path=str(path)) from e


def load_config(env_name: Optional[str] = None) -> HarnessConfig:
    """
    Load and validate an environment configuration.

    Args:
        env_name: Environment name; defaults to $HARNESS_CONFIG, then 'qa'

    Returns:
        Validated HarnessConfig

    Raises:
        InvalidConfigException: If the chosen file is malformed or fails validation,
            or if not even the default environment can be found
    """
    env_name = env_name or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_ENV

    path = find_environment_file(env_name)
    if path is None and env_name != DEFAULT_ENV:
        logger.warning(f"Config '{env_name}' not found. Using {DEFAULT_ENV} as default.")
        env_name = DEFAULT_ENV
        path = find_environment_file(env_name)

    if path is None:
        raise InvalidConfigException(
            f"No environment file found for '{env_name}'", env_name=env_name
        )

    config = _read_environment(path, env_name)
    logger.info(f"Using config: {config.env} ({path})")
    return config
