"""
Declaration of the web server stack as a resource graph.

The stack consists of an SSH key (generated private key registered as an EC2
key pair), a VPC with one public subnet, an internet gateway and a public route
table, a security group admitting SSH from a single CIDR, a lookup of the latest
Debian 12 image and one EC2 instance that installs a web server at first boot.
"""

from typing import Optional

from .bootstrap import render_user_data
from .config import StackSettings
from .graph.model import DATA, OutputValue, ResourceGraph, ResourceNode, ref
from .utils.ami import DEBIAN_12_NAME_PATTERN, DEBIAN_OWNER_ID
from .utils.tags import get_default_tags, merge_tags

PRIVATE_KEY = "tls_private_key.ssh"
KEY_PAIR = "aws_key_pair.ssh"
VPC = "aws_vpc.main"
SUBNET = "aws_subnet.public"
INTERNET_GATEWAY = "aws_internet_gateway.main"
ROUTE_TABLE = "aws_route_table.public"
ROUTE_TABLE_ASSOCIATION = "aws_route_table_association.public"
SECURITY_GROUP = "aws_security_group.ssh"
AMI = "data.aws_ami.debian"
INSTANCE = "aws_instance.web"


def build_stack_graph(settings: Optional[StackSettings] = None) -> ResourceGraph:
    """Declare every node and output of the web server stack."""
    settings = settings or StackSettings()
    project = settings.project_name
    tags = get_default_tags(project, settings.candidate_name, settings.environment)

    def named(role: str):
        return merge_tags(tags, {"Name": f"{project}-{role}"})

    nodes = [
        ResourceNode(
            "tls_private_key", "ssh",
            attributes={"algorithm": "RSA", "rsa_bits": 4096},
        ),
        ResourceNode(
            "aws_key_pair", "ssh",
            attributes={
                "key_name": settings.resolved_key_name,
                "public_key": ref(PRIVATE_KEY, "public_key_openssh"),
            },
            tags=named("key"),
        ),
        ResourceNode(
            "aws_vpc", "main",
            attributes={
                "cidr_block": settings.vpc_cidr,
                "enable_dns_hostnames": True,
                "enable_dns_support": True,
            },
            tags=named("vpc"),
        ),
        ResourceNode(
            "aws_subnet", "public",
            attributes={
                "vpc_id": ref(VPC),
                "cidr_block": settings.subnet_cidr,
                "map_public_ip_on_launch": True,
            },
            tags=named("subnet"),
        ),
        ResourceNode(
            "aws_internet_gateway", "main",
            attributes={"vpc_id": ref(VPC)},
            tags=named("igw"),
        ),
        ResourceNode(
            "aws_route_table", "public",
            attributes={
                "vpc_id": ref(VPC),
                "gateway_id": ref(INTERNET_GATEWAY),
                "destination_cidr_block": "0.0.0.0/0",
            },
            tags=named("rt"),
        ),
        ResourceNode(
            "aws_route_table_association", "public",
            attributes={
                "subnet_id": ref(SUBNET),
                "route_table_id": ref(ROUTE_TABLE),
            },
        ),
        ResourceNode(
            "aws_security_group", "ssh",
            attributes={
                "vpc_id": ref(VPC),
                "description": f"SSH access for {project}",
                "ingress": [
                    {
                        "protocol": "tcp",
                        "from_port": 22,
                        "to_port": 22,
                        "cidr_blocks": [settings.ssh_cidr],
                        "description": "SSH",
                    },
                ],
            },
            tags=named("sg"),
        ),
        ResourceNode(
            "aws_ami", "debian",
            attributes={
                "name_pattern": DEBIAN_12_NAME_PATTERN,
                "virtualization_type": "hvm",
                "owner": DEBIAN_OWNER_ID,
            },
            mode=DATA,
        ),
        ResourceNode(
            "aws_instance", "web",
            attributes={
                "ami": ref(AMI),
                "instance_type": settings.instance_type,
                "subnet_id": ref(SUBNET),
                "vpc_security_group_ids": [ref(SECURITY_GROUP)],
                "key_name": ref(KEY_PAIR, "key_name"),
                "user_data": render_user_data(),
            },
            tags=named("instance"),
        ),
    ]

    outputs = [
        OutputValue(
            "private_key_pem", ref(PRIVATE_KEY, "private_key_pem"),
            sensitive=True, description="Private key for SSH access to the instance",
        ),
        OutputValue(
            "public_ip", ref(INSTANCE, "public_ip"),
            description="Public IP address of the web server",
        ),
    ]

    return ResourceGraph(nodes, outputs)
