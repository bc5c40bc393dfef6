from typing import List, cast

from aws_cdk import CfnOutput, Tags, aws_ec2 as ec2
from constructs import Construct

from common import constants
from common.environment_config import EnvironmentConfig
from common.stack_context import StackContext


class VpcConstruct(Construct):
    """VPC with public and private subnets spread across the configured AZs.

    Subnet CIDR allocation, routing and gateway lifecycle are left to
    ``ec2.Vpc``; this construct only translates an already validated
    ``EnvironmentConfig`` into its properties and tags the result.
    """

    def __init__(
        self, scope: Construct, construct_id: str, environment_config: EnvironmentConfig
    ) -> None:
        super().__init__(scope, construct_id)
        self.config = environment_config
        self.context = StackContext(scope=self, config=environment_config)

        self.vpc = self.create_vpc()
        self.public_subnets: List[ec2.ISubnet] = list(self.vpc.public_subnets)
        self.private_subnets: List[ec2.ISubnet] = list(self.vpc.private_subnets) + list(
            self.vpc.isolated_subnets
        )
        self.availability_zones: List[str] = list(self.vpc.availability_zones)
        self.nat_gateway_ips = self.collect_nat_gateway_ips()

        self.tag_resources()

        CfnOutput(
            self,
            "VpcIdOutput",
            value=self.vpc.vpc_id,
            description=f"VPC ID for {self.config.name} environment",
            export_name=f"{self.context.build_export_name(constants.OUTPUT_VPC_ID)}-Construct",
        )
        CfnOutput(
            self,
            "VpcCidrOutput",
            value=self.vpc.vpc_cidr_block,
            description=f"VPC CIDR block for {self.config.name} environment",
        )
        CfnOutput(
            self,
            "AvailabilityZonesOutput",
            value=", ".join(self.availability_zones),
            description=f"Availability zones used in {self.config.name} environment",
        )

    def create_vpc(self) -> ec2.Vpc:
        private_subnet_type = (
            ec2.SubnetType.PRIVATE_WITH_EGRESS
            if self.config.nat_gateways > 0
            else ec2.SubnetType.PRIVATE_ISOLATED
        )
        return ec2.Vpc(
            self,
            "Vpc",
            vpc_name=self.context.build_resource_name("vpc"),
            ip_addresses=ec2.IpAddresses.cidr(self.config.vpc_cidr_block),
            max_azs=self.config.max_availability_zones,
            enable_dns_hostnames=True,
            enable_dns_support=True,
            nat_gateways=self.config.nat_gateways,
            create_internet_gateway=True,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name=constants.PUBLIC_SUBNET_NAME,
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=constants.PUBLIC_SUBNET_CIDR_MASK,
                    map_public_ip_on_launch=True,
                ),
                ec2.SubnetConfiguration(
                    name=constants.PRIVATE_SUBNET_NAME,
                    subnet_type=private_subnet_type,
                    cidr_mask=constants.PRIVATE_SUBNET_CIDR_MASK,
                ),
            ],
        )

    def collect_nat_gateway_ips(self) -> List[str]:
        """Elastic IPs that ec2.Vpc attached to NAT gateways in public subnets."""
        ips = []
        for subnet in self.public_subnets:
            eip = subnet.node.try_find_child("EIP")
            if eip is not None:
                ips.append(cast(ec2.CfnEIP, eip).ref)
        return ips

    def tag_resources(self) -> None:
        for key in constants.REQUIRED_TAGS:
            Tags.of(self.vpc).add(key, self.config.tags[key])
        for key, value in self.config.custom_tags.items():
            Tags.of(self.vpc).add(key, value)

        for index, subnet in enumerate(self.public_subnets, start=1):
            Tags.of(subnet).add("Name", self.context.build_resource_name("public", index))
            Tags.of(subnet).add("SubnetType", constants.PUBLIC_SUBNET_NAME)
        for index, subnet in enumerate(self.private_subnets, start=1):
            Tags.of(subnet).add("Name", self.context.build_resource_name("private", index))
            Tags.of(subnet).add("SubnetType", constants.PRIVATE_SUBNET_NAME)

    # ---------- comma-separated values for stack exports ----------
    def get_public_subnet_ids(self) -> str:
        return ",".join(subnet.subnet_id for subnet in self.public_subnets)

    def get_private_subnet_ids(self) -> str:
        return ",".join(subnet.subnet_id for subnet in self.private_subnets)

    def get_availability_zones_string(self) -> str:
        return ",".join(self.availability_zones)

    def get_nat_gateway_ips_string(self) -> str:
        """Comma-separated NAT IPs, or "disabled" when there are none."""
        if not self.nat_gateway_ips:
            return constants.NAT_GATEWAYS_DISABLED
        return ",".join(self.nat_gateway_ips)
