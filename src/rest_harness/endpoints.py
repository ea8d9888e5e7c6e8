"""
Endpoint template expansion.

Templates are path strings with ``:name`` placeholders, e.g. ``/carts/user/:id``.
"""
import re
from typing import Any, List

from rest_harness.config.exceptions import MissingEndpointParameterException

_PLACEHOLDER = re.compile(r':([A-Za-z_][A-Za-z0-9_]*)')


def template_parameters(template: str) -> List[str]:
    """Return placeholder names in the order they appear in the template."""
    return _PLACEHOLDER.findall(template)


def expand_endpoint(template: str, **params: Any) -> str:
    """
    Substitute ``:name`` placeholders in an endpoint template.

    Args:
        template: Path template such as ``/products/:id``
        **params: Values for each placeholder

    Returns:
        The expanded path, e.g. ``/products/1``

    Raises:
        MissingEndpointParameterException: If a placeholder has no value
    """
    missing = [name for name in template_parameters(template) if name not in params]
    if missing:
        raise MissingEndpointParameterException(
            f"Missing parameters {missing} for endpoint '{template}'",
            template=template,
            missing=missing,
        )
    return _PLACEHOLDER.sub(lambda match: str(params[match.group(1)]), template)
