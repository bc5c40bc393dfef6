import os
from typing import Optional

from aws_cdk import CfnOutput, Stack, Tags
from aws_lambda_powertools import Logger
from constructs import Construct

import common.constants as constants
from common.config_loader import (
    ENVIRONMENT_CONTEXT_KEY,
    load_environment_config,
    overrides_from_context,
)
from common.environment_config import EnvironmentConfig
from common.exceptions import InvalidEnvironmentConfigError
from common.stack_context import StackContext
from common.validation import validate_environment_config
from networking.vpc_construct import VpcConstruct

logger = Logger(
    service=constants.LOGGER_SERVICE, level=os.getenv("LOG_LEVEL", "INFO").upper()
)


class ComprehendStack(Stack):
    """Base networking stack for the Comprehend backend.

    Resolves the environment configuration (explicit config, then environment
    name, then the ``environment`` CDK context key, then dev), validates it and
    refuses to synthesize anything when it is invalid. Exports VPC details as
    ``{env}-{Output}`` for dependent stacks.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        environment_config: Optional[EnvironmentConfig] = None,
        environment_name: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.environment_config = environment_config or self._load_environment_config(
            environment_name
        )
        self._validate(self.environment_config)
        self.context = StackContext(scope=self, config=self.environment_config)

        self.vpc_construct = VpcConstruct(
            self, "VpcConstruct", environment_config=self.environment_config
        )
        self.vpc = self.vpc_construct.vpc

        self._apply_tags()
        self._create_stack_outputs()

    def _load_environment_config(
        self, environment_name: Optional[str]
    ) -> EnvironmentConfig:
        environment = environment_name or self.node.try_get_context(
            ENVIRONMENT_CONTEXT_KEY
        )
        return load_environment_config(
            environment, overrides_from_context(self.node.try_get_context)
        )

    @staticmethod
    def _validate(config: EnvironmentConfig) -> None:
        violations = validate_environment_config(config, strict_environment_tag=True)
        if not violations:
            return
        for violation in violations:
            logger.error(
                violation.message, environment=config.name, field=violation.field
            )
        raise InvalidEnvironmentConfigError(violations)

    def _apply_tags(self) -> None:
        """Tag every resource in the stack; required tags first, then custom ones."""
        for key in constants.REQUIRED_TAGS:
            Tags.of(self).add(key, self.environment_config.tags[key])
        for key, value in self.environment_config.custom_tags.items():
            Tags.of(self).add(key, value)

    def _create_stack_outputs(self) -> None:
        env = self.environment_config.name
        outputs = (
            (constants.OUTPUT_VPC_ID, self.vpc.vpc_id, f"VPC ID for {env} environment"),
            (
                constants.OUTPUT_VPC_CIDR,
                self.vpc.vpc_cidr_block,
                f"VPC CIDR block for {env} environment",
            ),
            (
                constants.OUTPUT_PUBLIC_SUBNET_IDS,
                self.vpc_construct.get_public_subnet_ids(),
                f"Public subnet IDs for {env} environment (comma-separated)",
            ),
            (
                constants.OUTPUT_PRIVATE_SUBNET_IDS,
                self.vpc_construct.get_private_subnet_ids(),
                f"Private subnet IDs for {env} environment (comma-separated)",
            ),
            (
                constants.OUTPUT_AVAILABILITY_ZONES,
                self.vpc_construct.get_availability_zones_string(),
                f"Availability zones used in {env} environment (comma-separated)",
            ),
            (
                constants.OUTPUT_NAT_GATEWAY_IPS,
                self.vpc_construct.get_nat_gateway_ips_string(),
                f"NAT gateway Elastic IP addresses for {env} environment "
                "(comma-separated, 'disabled' when there are none)",
            ),
            (constants.OUTPUT_ENVIRONMENT_NAME, env, "Environment name"),
        )
        for output_name, value, description in outputs:
            CfnOutput(
                self,
                output_name,
                value=value,
                description=description,
                export_name=self.context.build_export_name(output_name),
            )
        logger.info(
            "Configured stack outputs",
            environment=env,
            region=self.context.aws_region,
            outputs=[output[0] for output in outputs],
        )
