"""Resolve an ``EnvironmentConfig`` from defaults and operator overrides.

Overrides normally come from CDK context, e.g.::

    cdk synth -c environment=staging -c maxAzs=3 -c vpcCidr=10.20.0.0/16
"""
import os
import re
from typing import Any, Callable, Dict, Mapping, Optional

from aws_lambda_powertools import Logger

import common.constants as constants
from common.environment_config import DEFAULT_ENVIRONMENT_CONFIGS, EnvironmentConfig
from common.exceptions import UnknownEnvironmentError

logger = Logger(
    service=constants.LOGGER_SERVICE, level=os.getenv("LOG_LEVEL", "INFO").upper()
)

ENVIRONMENT_CONTEXT_KEY = "environment"

# context key -> (EnvironmentConfig field, expected type)
CONTEXT_OVERRIDES = {
    "vpcCidr": ("vpc_cidr_block", str),
    "maxAzs": ("max_availability_zones", int),
    "natGateways": ("nat_gateway_count", int),
    "enableNatGateways": ("enable_nat_gateways", bool),
    "account": ("account_id", str),
    "region": ("region", str),
}

_INT_PATTERN = re.compile(r"-?[0-9]+")
_BOOL_STRINGS = {"true": True, "false": False}


def _coerce(value: Any, expected: type) -> Any:
    """Convert CLI strings to ints/bools; anything else is left for validation.

    Numeric JSON values for string fields (``"account": 123456789012`` in
    cdk.json) are turned into strings.
    """
    if expected is str and isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        return value
    text = value.strip()
    if expected is int and _INT_PATTERN.fullmatch(text):
        return int(text)
    if expected is bool and text.lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[text.lower()]
    return value


def overrides_from_context(get_context: Callable[[str], Any]) -> Dict[str, Any]:
    """Collect config overrides using a lookup such as ``node.try_get_context``."""
    overrides = {}
    for context_key, (field_name, expected) in CONTEXT_OVERRIDES.items():
        value = get_context(context_key)
        if value is not None:
            overrides[field_name] = _coerce(value, expected)
    return overrides


def load_environment_config(
    environment: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> EnvironmentConfig:
    """Return the default config for ``environment`` with overrides applied.

    Falls back to the dev environment when no name is given. The result is not
    validated here.

    Raises:
        UnknownEnvironmentError: If ``environment`` has no default configuration
    """
    if not environment:
        logger.warning(
            "No environment specified, defaulting to dev",
            environment=constants.DEFAULT_ENV,
        )
        environment = constants.DEFAULT_ENV

    config = DEFAULT_ENVIRONMENT_CONFIGS.get(environment)
    if config is None:
        raise UnknownEnvironmentError(environment)

    if overrides:
        logger.info(
            "Applying environment config overrides",
            environment=environment,
            overrides=sorted(overrides),
        )
        config = config.with_overrides(**overrides)
    return config

