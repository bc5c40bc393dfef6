from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from aws_cdk.assertions import Template
from comprehend.comprehend_stack import ComprehendStack
from common.environment_config import EnvironmentConfig
from aws_cdk import App
import pytest


# ------------------- Test Case Data Classes -------------------
@dataclass(frozen=True)
class ExportTestCase:
    id: str
    environment: str
    output_name: str
    export_name: str


@dataclass(frozen=True)
class NatGatewayTestCase:
    id: str
    environment: str
    nat_gateways: int
    elastic_ips: int
    private_subnet_type: str


@dataclass(frozen=True)
class ContextOverrideTestCase:
    id: str
    context: Mapping[str, Any]
    expected: Mapping[str, Any] = field(default_factory=dict)


# ------------------- Helper Functions -------------------


def valid_config(**overrides: Any) -> EnvironmentConfig:
    values = {
        "name": "dev",
        "vpc_cidr_block": "10.0.0.0/16",
        "max_availability_zones": 2,
        "enable_nat_gateways": False,
        "tags": {"Application": "Comprehend", "Environment": "dev", "ManagedBy": "CDK"},
    }
    values.update(overrides)
    return EnvironmentConfig(**values)


def find_resources_by_type(
    template: Template, resource_type: str, props: Optional[dict] = None
) -> Mapping[str, Any]:

    return template.find_resources(resource_type, props=props)


def get_single_resource_id(resources: Mapping[str, Any]) -> str:
    return next(iter(resources))


def build_stack(
    stack_id: str = "TestComprehendStack",
    environment_name: Optional[str] = None,
    environment_config: Optional[EnvironmentConfig] = None,
    context: Optional[Mapping[str, Any]] = None,
) -> ComprehendStack:
    app = App(context=dict(context)) if context else App()
    return ComprehendStack(
        app,
        stack_id,
        environment_config=environment_config,
        environment_name=environment_name,
    )


def build_template(environment_name: str = "dev", **kwargs) -> Template:
    stack = build_stack(environment_name=environment_name, **kwargs)
    return Template.from_stack(stack)


def get_output(template: Template, output_name: str) -> Mapping[str, Any]:
    return template.to_json()["Outputs"][output_name]


# ------------------- Pytest Fixtures -------------------


@pytest.fixture
def template() -> Template:
    return build_template()


@pytest.fixture
def staging_template() -> Template:
    return build_template("staging")


@pytest.fixture
def json_template(template: Template) -> Mapping[str, Any]:
    return template.to_json()
