import pytest
import pulumi
from infragraph.ec2.security_groups import create_security_group, IngressRule, _ingress_args


def test_ingress_rule_from_dict():
    """Test building an IngressRule from a dictionary."""
    rule = IngressRule.from_dict({
        "protocol": "tcp",
        "from_port": 22,
        "to_port": 22,
        "cidr_blocks": ["198.51.100.7/32"],
    })

    assert rule.protocol == "tcp"
    assert rule.from_port == 22
    assert rule.to_port == 22
    assert rule.cidr_blocks == ["198.51.100.7/32"]
    assert rule.description is None
    assert rule.to_dict()["cidr_blocks"] == ["198.51.100.7/32"]


def test_ingress_args_from_rule():
    """Test translating a rule into security group ingress arguments."""
    args = _ingress_args(IngressRule("tcp", 22, 22, ["198.51.100.7/32"], "SSH"))

    assert args.protocol == "tcp"
    assert args.from_port == 22
    assert args.to_port == 22
    assert args.cidr_blocks == ["198.51.100.7/32"]
    assert args.description == "SSH"


@pulumi.runtime.test
def test_create_security_group_with_ingress_rules():
    """Test security group creation with ingress rules."""
    ingress_rules = [
        IngressRule(
            protocol="tcp",
            from_port=22,
            to_port=22,
            cidr_blocks=["198.51.100.7/32"],
            description="Allow SSH"
        ),
    ]

    sg = create_security_group(
        name="test-sg",
        vpc_id="vpc-12345",
        description="Test security group",
        ingress_rules=ingress_rules,
        tags={"Name": "test-sg"}
    )

    def check_sg_values(values):
        vpc_id, description, ingress, egress = values
        assert vpc_id == "vpc-12345"
        assert description == "Test security group"
        assert len(ingress) == 1
        assert len(egress) == 1  # Default egress rule
        return True

    return pulumi.Output.all(
        sg.vpc_id,
        sg.description,
        sg.ingress,
        sg.egress,
    ).apply(check_sg_values)


@pulumi.runtime.test
def test_create_security_group_with_dict_rules():
    """Test security group creation with dictionary rules."""
    ingress_rules = [
        {
            "protocol": "tcp",
            "from_port": 22,
            "to_port": 22,
            "cidr_blocks": ["198.51.100.7/32"],
            "description": "Allow SSH"
        }
    ]

    egress_rules = [
        {
            "protocol": "tcp",
            "from_port": 443,
            "to_port": 443,
            "cidr_blocks": ["0.0.0.0/0"],
            "description": "HTTPS out"
        },
        {
            "protocol": "tcp",
            "from_port": 80,
            "to_port": 80,
            "cidr_blocks": ["0.0.0.0/0"],
            "description": "HTTP out"
        },
    ]

    sg = create_security_group(
        name="test-sg-dict",
        vpc_id="vpc-12345",
        description="Test security group with dict rules",
        ingress_rules=ingress_rules,
        egress_rules=egress_rules,
        tags={"Name": "test-sg-dict"}
    )

    def check_sg_dict_values(values):
        ingress, egress = values
        assert len(ingress) == 1
        assert len(egress) == 2
        return True

    return pulumi.Output.all(sg.ingress, sg.egress).apply(check_sg_dict_values)
