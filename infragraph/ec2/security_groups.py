import pulumi
import pulumi_aws as aws
from typing import List, Dict, Optional, Union, Any


class IngressRule:
    def __init__(
        self,
        protocol: str,
        from_port: int,
        to_port: int,
        cidr_blocks: Optional[List[str]] = None,
        description: Optional[str] = None
    ):
        self.protocol = protocol
        self.from_port = from_port
        self.to_port = to_port
        self.cidr_blocks = cidr_blocks or []
        self.description = description

    @classmethod
    def from_dict(cls, rule: Dict[str, Any]) -> "IngressRule":
        return cls(
            protocol=rule["protocol"],
            from_port=rule["from_port"],
            to_port=rule["to_port"],
            cidr_blocks=rule.get("cidr_blocks"),
            description=rule.get("description"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "protocol": self.protocol,
            "from_port": self.from_port,
            "to_port": self.to_port,
            "cidr_blocks": list(self.cidr_blocks),
            "description": self.description,
        }


def _ingress_args(rule: Union[Dict[str, Any], IngressRule]) -> aws.ec2.SecurityGroupIngressArgs:
    if not isinstance(rule, IngressRule):
        rule = IngressRule.from_dict(rule)
    return aws.ec2.SecurityGroupIngressArgs(
        protocol=rule.protocol,
        from_port=rule.from_port,
        to_port=rule.to_port,
        cidr_blocks=rule.cidr_blocks,
        description=rule.description,
    )


def create_security_group(
    name: str,
    vpc_id: str,
    description: str,
    ingress_rules: List[Union[Dict[str, Any], IngressRule]],
    egress_rules: Optional[List[Dict[str, Any]]] = None,
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.SecurityGroup:
    """
    Create a security group with inline rules.

    Args:
        name: Name of the security group
        vpc_id: ID of the VPC
        description: Description of the security group
        ingress_rules: List of ingress rules
        egress_rules: Optional list of egress rules (default: allow all outbound)
        tags: Optional dictionary of tags
        opts: Optional resource options

    Returns:
        aws.ec2.SecurityGroup: The created security group
    """
    if egress_rules is None:
        egress_rules = [{
            "protocol": "-1",
            "from_port": 0,
            "to_port": 0,
            "cidr_blocks": ["0.0.0.0/0"],
        }]

    return aws.ec2.SecurityGroup(
        name,
        vpc_id=vpc_id,
        description=description,
        ingress=[_ingress_args(rule) for rule in ingress_rules],
        egress=[
            aws.ec2.SecurityGroupEgressArgs(
                protocol=rule["protocol"],
                from_port=rule["from_port"],
                to_port=rule["to_port"],
                cidr_blocks=rule.get("cidr_blocks", []),
                description=rule.get("description"),
            )
            for rule in egress_rules
        ],
        tags=tags,
        opts=opts,
    )
