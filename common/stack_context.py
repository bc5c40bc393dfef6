from typing import Optional

from attrs import define, field
from aws_cdk import Stack
from constructs import Construct

import common.constants as constants
from common.environment_config import EnvironmentConfig


def build_stack_name(environment: Optional[str] = None) -> str:
    """Stack name for an environment, e.g. ``ComprehendStagingStack``."""
    environment = environment or constants.DEFAULT_ENV
    return f"{constants.SERVICE_NAME.capitalize()}{environment.capitalize()}Stack"


@define(slots=True, frozen=True)
class StackContext:
    scope: Construct
    config: EnvironmentConfig
    service: str = field(default=constants.SERVICE_NAME, init=False)

    @property
    def env(self) -> str:
        return self.config.name

    @property
    def aws_region(self) -> str:
        return Stack.of(self.scope).region

    # ---------- naming ----------
    def build_resource_name(self, resource_type: str, index: Optional[int] = None) -> str:
        """Build resource name with optional 1-based index.

        Examples:
            - Without index: comprehend-dev-vpc
            - With index: comprehend-dev-public-1
        """
        if not resource_type:
            raise ValueError("Resource type is required to build a resource name")
        if index is None:
            return f"{self.service}-{self.env}-{resource_type}".lower()
        if index < 1:
            raise ValueError(f"Resource index must start at 1, got: {index}")
        return f"{self.service}-{self.env}-{resource_type}-{index}".lower()

    def build_export_name(self, output_name: str) -> str:
        """CloudFormation export name, e.g. dev-VpcId."""
        return f"{self.env}-{output_name}"
