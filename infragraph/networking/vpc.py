import pulumi
import pulumi_aws as aws
from typing import Dict, Optional


def create_vpc(
    name: str,
    cidr_block: str,
    enable_dns_hostnames: bool = True,
    enable_dns_support: bool = True,
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.Vpc:
    """
    Create a VPC with the specified configuration.

    Args:
        name: Name of the VPC
        cidr_block: CIDR block for the VPC
        enable_dns_hostnames: Whether to enable DNS hostnames
        enable_dns_support: Whether to enable DNS support
        tags: Optional dictionary of tags
        opts: Optional resource options

    Returns:
        aws.ec2.Vpc: The created VPC
    """
    return aws.ec2.Vpc(
        name,
        cidr_block=cidr_block,
        enable_dns_hostnames=enable_dns_hostnames,
        enable_dns_support=enable_dns_support,
        tags=tags,
        opts=opts,
    )


def create_internet_gateway(
    name: str,
    vpc_id: str,
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.InternetGateway:
    """
    Create an Internet Gateway attached to a VPC.
    """
    return aws.ec2.InternetGateway(
        name,
        vpc_id=vpc_id,
        tags=tags,
        opts=opts,
    )


def create_route_table(
    name: str,
    vpc_id: str,
    gateway_id: str,
    destination_cidr_block: str = "0.0.0.0/0",
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.RouteTable:
    """
    Create a public route table sending traffic through an Internet Gateway.

    Args:
        name: Name of the route table
        vpc_id: ID of the VPC
        gateway_id: ID of the Internet Gateway used as the default route
        destination_cidr_block: Destination of the gateway route
        tags: Optional dictionary of tags
        opts: Optional resource options

    Returns:
        aws.ec2.RouteTable: The created route table
    """
    return aws.ec2.RouteTable(
        name,
        vpc_id=vpc_id,
        routes=[
            aws.ec2.RouteTableRouteArgs(
                cidr_block=destination_cidr_block,
                gateway_id=gateway_id,
            ),
        ],
        tags=tags,
        opts=opts,
    )


def associate_route_table(
    name: str,
    subnet_id: str,
    route_table_id: str,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.RouteTableAssociation:
    """
    Associate a subnet with a route table.
    """
    return aws.ec2.RouteTableAssociation(
        name,
        subnet_id=subnet_id,
        route_table_id=route_table_id,
        opts=opts,
    )


def create_subnet(
    name: str,
    vpc_id: str,
    cidr_block: str,
    availability_zone: Optional[str] = None,
    map_public_ip_on_launch: bool = True,
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.Subnet:
    """
    Create a subnet in the specified VPC.

    Args:
        name: Name of the subnet
        vpc_id: ID of the VPC
        cidr_block: CIDR block for the subnet
        availability_zone: Optional availability zone (AWS picks one if omitted)
        map_public_ip_on_launch: Whether to map public IP on launch
        tags: Optional dictionary of tags
        opts: Optional resource options

    Returns:
        aws.ec2.Subnet: The created subnet
    """
    return aws.ec2.Subnet(
        name,
        vpc_id=vpc_id,
        cidr_block=cidr_block,
        availability_zone=availability_zone,
        map_public_ip_on_launch=map_public_ip_on_launch,
        tags=tags,
        opts=opts,
    )

