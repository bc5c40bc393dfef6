from types import MappingProxyType
from typing import Any, Mapping, Optional

from attrs import define, evolve, field

import common.constants as constants


def _freeze_tags(tags: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(tags or {}))


def _tag_items(tags: Mapping[str, str]) -> frozenset:
    """Order-insensitive, hashable view of the tags for eq and hash."""
    return frozenset(tags.items())


@define(slots=True, frozen=True, kw_only=True)
class EnvironmentConfig:
    """Per-environment VPC settings handed to CDK once validated.

    Fields are not validated on construction so that a bad configuration can
    still be built and reported on by ``validate_environment_config``.
    """

    name: str = field(
        metadata={"description": "Deployment environment (dev, staging, prod)"},
    )
    vpc_cidr_block: str = field(
        metadata={"description": "VPC CIDR, must not overlap other environments"},
    )
    max_availability_zones: int = field(default=constants.MIN_AZS)
    enable_nat_gateways: bool = field(default=True)
    nat_gateway_count: Optional[int] = field(
        default=None,
        metadata={"description": "Defaults to one NAT gateway per AZ"},
    )
    tags: Mapping[str, str] = field(factory=dict, converter=_freeze_tags, eq=_tag_items)
    account_id: Optional[str] = field(default=None)
    region: Optional[str] = field(default=None)

    @property
    def nat_gateways(self) -> int:
        """Number of NAT gateways CDK should create."""
        if not self.enable_nat_gateways:
            return 0
        if self.nat_gateway_count is None:
            return self.max_availability_zones
        return self.nat_gateway_count

    @property
    def custom_tags(self) -> Mapping[str, str]:
        """Tags beyond the required Application/Environment/ManagedBy set."""
        return {
            key: value
            for key, value in self.tags.items()
            if key not in constants.REQUIRED_TAGS
        }

    def with_overrides(self, **overrides: Any) -> "EnvironmentConfig":
        return evolve(self, **overrides)


def default_tags(environment: str, cost_center: str) -> Mapping[str, str]:
    return {
        constants.TAG_APPLICATION: constants.APPLICATION_TAG_VALUE,
        constants.TAG_ENVIRONMENT: environment,
        constants.TAG_MANAGED_BY: constants.MANAGED_BY_TAG_VALUE,
        "CostCenter": cost_center,
    }


DEFAULT_ENVIRONMENT_CONFIGS: Mapping[str, EnvironmentConfig] = MappingProxyType(
    {
        "dev": EnvironmentConfig(
            name="dev",
            vpc_cidr_block="10.0.0.0/16",
            max_availability_zones=2,
            enable_nat_gateways=False,  # Cost optimization
            tags=default_tags("dev", "Development"),
        ),
        "staging": EnvironmentConfig(
            name="staging",
            vpc_cidr_block="10.1.0.0/16",
            max_availability_zones=2,
            enable_nat_gateways=True,
            tags=default_tags("staging", "Staging"),
        ),
        "prod": EnvironmentConfig(
            name="prod",
            vpc_cidr_block="10.2.0.0/16",
            max_availability_zones=3,  # Maximum availability
            enable_nat_gateways=True,
            tags=default_tags("prod", "Production"),
        ),
    }
)
