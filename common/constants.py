DEFAULT_ENV = "dev"
ENVIRONMENT_NAMES = ("dev", "staging", "prod")

# Naming convention components
SERVICE_NAME = "comprehend"  # The application name
APPLICATION_TAG_VALUE = "Comprehend"
MANAGED_BY_TAG_VALUE = "CDK"
LOGGER_SERVICE = "comprehend-infra"

# Tags every environment must carry
TAG_APPLICATION = "Application"
TAG_ENVIRONMENT = "Environment"
TAG_MANAGED_BY = "ManagedBy"
REQUIRED_TAGS = (TAG_APPLICATION, TAG_ENVIRONMENT, TAG_MANAGED_BY)

MIN_AZS = 2
MAX_AZS = 3

# RFC 1918 private ranges, as (first octet, inclusive second octet bounds)
PRIVATE_RANGES = (
    (10, (0, 255)),  # 10.0.0.0/8
    (172, (16, 31)),  # 172.16.0.0/12
    (192, (168, 168)),  # 192.168.0.0/16
)
MAX_CIDR_MASK = 32
MAX_OCTET = 255

PUBLIC_SUBNET_NAME = "Public"
PRIVATE_SUBNET_NAME = "Private"
PUBLIC_SUBNET_CIDR_MASK = 24
PRIVATE_SUBNET_CIDR_MASK = 23

NAT_GATEWAYS_DISABLED = "disabled"

# CloudFormation output names, exported as {env}-{name}
OUTPUT_VPC_ID = "VpcId"
OUTPUT_VPC_CIDR = "VpcCidr"
OUTPUT_PUBLIC_SUBNET_IDS = "PublicSubnetIds"
OUTPUT_PRIVATE_SUBNET_IDS = "PrivateSubnetIds"
OUTPUT_AVAILABILITY_ZONES = "AvailabilityZones"
OUTPUT_NAT_GATEWAY_IPS = "NatGatewayIps"
OUTPUT_ENVIRONMENT_NAME = "EnvironmentName"
