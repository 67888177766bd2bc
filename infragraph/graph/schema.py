"""
Schemas for the resource types a graph may declare.

A schema lists the attributes other nodes may reference, the provider package
that owns the type, and whether the type accepts tags.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from .model import DATA, MANAGED


@dataclass(frozen=True)
class ResourceSchema:
    type: str
    provider: str
    attributes: FrozenSet[str]
    taggable: bool = True
    mode: str = MANAGED


def _schema(type_: str, provider: str, attributes, taggable: bool = True, mode: str = MANAGED) -> ResourceSchema:
    return ResourceSchema(type_, provider, frozenset(attributes) | {"id"}, taggable, mode)


SCHEMAS: Dict[str, ResourceSchema] = {
    schema.type: schema
    for schema in [
        _schema(
            "tls_private_key", "tls",
            ["algorithm", "rsa_bits", "private_key_pem", "private_key_openssh",
             "public_key_pem", "public_key_openssh", "public_key_fingerprint_md5"],
            taggable=False,
        ),
        _schema("aws_key_pair", "aws", ["arn", "key_name", "key_pair_id", "public_key", "fingerprint"]),
        _schema("aws_vpc", "aws", ["arn", "cidr_block", "default_route_table_id", "owner_id"]),
        _schema("aws_subnet", "aws", ["arn", "vpc_id", "cidr_block", "availability_zone"]),
        _schema("aws_internet_gateway", "aws", ["arn", "vpc_id", "owner_id"]),
        _schema("aws_route_table", "aws", ["arn", "vpc_id", "owner_id"]),
        _schema(
            "aws_route_table_association", "aws",
            ["subnet_id", "route_table_id"],
            taggable=False,
        ),
        _schema("aws_security_group", "aws", ["arn", "name", "vpc_id", "owner_id"]),
        _schema(
            "aws_instance", "aws",
            ["arn", "public_ip", "public_dns", "private_ip", "private_dns",
             "availability_zone", "instance_state"],
        ),
        _schema(
            "aws_ami", "aws",
            ["name", "image_id", "architecture", "creation_date", "owner_id"],
            taggable=False, mode=DATA,
        ),
    ]
}


def get_schema(type_: str, schemas: Optional[Dict[str, ResourceSchema]] = None) -> Optional[ResourceSchema]:
    """Look up the schema for a resource type, or None if it is unknown."""
    return (schemas if schemas is not None else SCHEMAS).get(type_)
