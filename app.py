#!/usr/bin/env python3
"""AWS CDK entrypoint for provisioning the Comprehend base infrastructure.

Select the target environment with CDK context, e.g.
``cdk synth -c environment=staging``. The stack is named after the environment
(``ComprehendStagingStack``) and defaults to dev. The deployment target comes
from the environment config when it pins one, otherwise from the CDK CLI
defaults.
"""
import os

import aws_cdk as cdk
from aws_cdk import Environment

from comprehend.comprehend_stack import ComprehendStack
from common.config_loader import (
    ENVIRONMENT_CONTEXT_KEY,
    load_environment_config,
    overrides_from_context,
)
from common.stack_context import build_stack_name

app = cdk.App()

environment_name = app.node.try_get_context(ENVIRONMENT_CONTEXT_KEY)
environment_config = load_environment_config(
    environment_name, overrides_from_context(app.node.try_get_context)
)

env = Environment(
    account=environment_config.account_id or os.getenv("CDK_DEFAULT_ACCOUNT"),
    region=environment_config.region or os.getenv("CDK_DEFAULT_REGION"),
)

ComprehendStack(
    app,
    build_stack_name(environment_config.name),
    environment_config=environment_config,
    env=env,
)

app.synth()
