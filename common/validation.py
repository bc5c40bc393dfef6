"""Validation rules for environment configuration.

Both validators are pure: they never raise for bad input and never log.
Whoever calls them decides what to do with the violations.
"""

import re
from typing import Any, Iterable, List, Mapping

import attrs
from attrs.validators import instance_of

import common.constants as constants
from common.environment_config import EnvironmentConfig

_CIDR_PATTERN = re.compile(
    r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})/([0-9]{1,2})"
)


@attrs.define(slots=True, frozen=True)
class ConfigViolation:
    field: str = attrs.field(validator=instance_of(str))
    message: str = attrs.field(validator=instance_of(str))

    def __str__(self) -> str:
        return self.message


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _in_private_range(first: int, second: int) -> bool:
    return any(
        first == range_first and low <= second <= high
        for range_first, (low, high) in constants.PRIVATE_RANGES
    )


def validate_cidr(cidr: Any) -> bool:
    """Return True when ``cidr`` is a well-formed block in an RFC 1918 range.

    Range membership is decided by the leading octets of the written address,
    so host bits may be set (``10.255.255.255/8`` is accepted).
    """
    if not isinstance(cidr, str):
        return False
    match = _CIDR_PATTERN.fullmatch(cidr)
    if not match:
        return False
    *octets, mask = (int(group) for group in match.groups())
    if mask > constants.MAX_CIDR_MASK:
        return False
    if any(octet > constants.MAX_OCTET for octet in octets):
        return False
    return _in_private_range(octets[0], octets[1])


def _check_name(config: EnvironmentConfig) -> Iterable[ConfigViolation]:
    if config.name not in constants.ENVIRONMENT_NAMES:
        yield ConfigViolation(
            "name",
            f"Invalid environment name: {config.name}. "
            "Must be 'dev', 'staging', or 'prod'",
        )


def _check_cidr(config: EnvironmentConfig) -> Iterable[ConfigViolation]:
    if not validate_cidr(config.vpc_cidr_block):
        yield ConfigViolation(
            "vpc_cidr_block",
            f"Invalid VPC CIDR: {config.vpc_cidr_block}. "
            "Must be a valid RFC 1918 private IP range",
        )


def _check_availability_zones(config: EnvironmentConfig) -> Iterable[ConfigViolation]:
    max_azs = config.max_availability_zones
    if not _is_int(max_azs) or not constants.MIN_AZS <= max_azs <= constants.MAX_AZS:
        yield ConfigViolation(
            "max_availability_zones",
            f"max_availability_zones must be between {constants.MIN_AZS} and "
            f"{constants.MAX_AZS} (inclusive), got: {max_azs}",
        )


def _check_nat_gateways(config: EnvironmentConfig) -> Iterable[ConfigViolation]:
    count = config.nat_gateway_count
    if count is None:
        return
    if not _is_int(count) or count < 0:
        yield ConfigViolation(
            "nat_gateway_count",
            f"nat_gateway_count must be a non-negative integer, got: {count}",
        )
        return
    max_azs = config.max_availability_zones
    if _is_int(max_azs) and count > max_azs:
        yield ConfigViolation(
            "nat_gateway_count",
            f"nat_gateway_count ({count}) cannot exceed "
            f"max_availability_zones ({max_azs})",
        )


def _check_enable_nat_gateways(config: EnvironmentConfig) -> Iterable[ConfigViolation]:
    if not isinstance(config.enable_nat_gateways, bool):
        yield ConfigViolation(
            "enable_nat_gateways",
            f"enable_nat_gateways must be a boolean, got: {config.enable_nat_gateways!r}",
        )


def _check_deployment_target(config: EnvironmentConfig) -> Iterable[ConfigViolation]:
    for field_name in ("account_id", "region"):
        value = getattr(config, field_name)
        if value is not None and not isinstance(value, str):
            yield ConfigViolation(
                field_name, f"{field_name} must be a string, got: {value!r}"
            )


def _check_required_tags(config: EnvironmentConfig) -> Iterable[ConfigViolation]:
    tags: Mapping[str, str] = config.tags or {}
    for tag in constants.REQUIRED_TAGS:
        if not tags.get(tag):
            yield ConfigViolation("tags", f"Missing required tag: {tag}")


def _check_environment_tag(config: EnvironmentConfig) -> Iterable[ConfigViolation]:
    environment_tag = (config.tags or {}).get(constants.TAG_ENVIRONMENT)
    if environment_tag and environment_tag != config.name:
        yield ConfigViolation(
            "tags.Environment",
            f"Environment tag ({environment_tag}) must match "
            f"config name ({config.name})",
        )


def validate_environment_config(
    config: EnvironmentConfig, strict_environment_tag: bool = False
) -> List[ConfigViolation]:
    """Collect every rule the configuration breaks, in a stable order.

    An empty list means the configuration is valid. With
    ``strict_environment_tag`` the Environment tag must also equal the
    configuration name.
    """
    checks = [
        _check_name,
        _check_cidr,
        _check_availability_zones,
        _check_nat_gateways,
        _check_enable_nat_gateways,
        _check_required_tags,
        _check_deployment_target,
    ]
    if strict_environment_tag:
        checks.append(_check_environment_tag)
    return [violation for check in checks for violation in check(config)]


def violation_messages(violations: Iterable[ConfigViolation]) -> List[str]:
    return [violation.message for violation in violations]
