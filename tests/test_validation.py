import pytest
from infragraph.config import StackSettings
from infragraph.ec2.security_groups import IngressRule
from infragraph.errors import ConfigDeviationError, TagValidationError
from infragraph.graph.model import ResourceNode
from infragraph.stack import INSTANCE, SECURITY_GROUP, build_stack_graph
from infragraph.validation import (
    assert_golden,
    check_ssh_ingress,
    find_missing_tags,
    golden_deviations,
    validate_tags,
)

SETTINGS = StackSettings(candidate_name="jane-doe", ssh_cidr="198.51.100.7/32")


def with_ingress(graph, rules):
    node = graph.get(SECURITY_GROUP)
    attributes = dict(node.attributes, ingress=rules)
    return graph.replace(ResourceNode(node.type, node.name, attributes, node.tags))


def ssh_rule(cidr="198.51.100.7/32", **overrides):
    rule = {"protocol": "tcp", "from_port": 22, "to_port": 22, "cidr_blocks": [cidr]}
    rule.update(overrides)
    return rule


def test_stack_is_golden():
    """Test that the declared stack has no deviations."""
    graph = build_stack_graph(SETTINGS)

    assert golden_deviations(graph, SETTINGS) == []
    assert_golden(graph, SETTINGS)
    validate_tags(graph)


def test_missing_owner_tag_is_reported():
    """Test that an instance without Owner fails tag validation."""
    graph = build_stack_graph(SETTINGS)
    node = graph.get(INSTANCE)
    tags = {k: v for k, v in node.tags.items() if k != "Owner"}
    graph = graph.replace(ResourceNode(node.type, node.name, node.attributes, tags))

    assert find_missing_tags(graph) == {INSTANCE: ["Owner"]}
    with pytest.raises(TagValidationError) as excinfo:
        validate_tags(graph)
    assert excinfo.value.missing == {INSTANCE: ["Owner"]}
    assert "aws_instance.web missing Owner" in str(excinfo.value)


def test_untaggable_resources_are_exempt():
    """Test that keys, associations and image lookups need no tags."""
    graph = build_stack_graph(SETTINGS)

    assert find_missing_tags(graph) == {}
    assert graph.get("tls_private_key.ssh").tags == {}
    assert graph.get("data.aws_ami.debian").tags == {}


def test_ssh_open_to_world_is_a_deviation():
    """Test that 0.0.0.0/0 on port 22 is flagged."""
    graph = with_ingress(build_stack_graph(SETTINGS), [ssh_rule("0.0.0.0/0")])

    deviations = check_ssh_ingress(graph, SETTINGS.ssh_cidr)

    assert any("open to the internet (0.0.0.0/0)" in d for d in deviations)
    with pytest.raises(ConfigDeviationError) as excinfo:
        assert_golden(graph, SETTINGS)
    assert excinfo.value.deviations == deviations


def test_extra_ingress_rule_is_a_deviation():
    """Test that an HTTP rule next to SSH is flagged."""
    rules = [ssh_rule(), ssh_rule(from_port=80, to_port=80)]
    deviations = check_ssh_ingress(with_ingress(build_stack_graph(SETTINGS), rules))

    assert "aws_security_group.ssh: expected exactly one ingress rule, found 2" in deviations
    assert any("ingress ports 80-80" in d for d in deviations)


def test_wrong_protocol_and_cidr_are_deviations():
    """Test protocol, CIDR count and CIDR mismatch checks."""
    rules = [ssh_rule(protocol="-1", cidr_blocks=["198.51.100.7/32", "192.0.2.1/32"])]
    deviations = check_ssh_ingress(with_ingress(build_stack_graph(SETTINGS), rules), SETTINGS.ssh_cidr)

    assert any("protocol is '-1'" in d for d in deviations)
    assert any("allows 2 CIDRs" in d for d in deviations)
    assert any("192.0.2.1/32 differs from 198.51.100.7/32" in d for d in deviations)


def test_cidr_mismatch_only_checked_when_known():
    """Test that without an allowed CIDR any single non-open CIDR passes."""
    graph = with_ingress(build_stack_graph(SETTINGS), [ssh_rule("192.0.2.1/32")])

    assert check_ssh_ingress(graph) == []
    assert check_ssh_ingress(graph, "198.51.100.7/32") == [
        "aws_security_group.ssh: ingress CIDR 192.0.2.1/32 differs from 198.51.100.7/32"
    ]


def test_ingress_rule_objects_are_checked():
    """Test that IngressRule instances are validated like plain dicts."""
    graph = build_stack_graph(SETTINGS)

    compliant = with_ingress(graph, [IngressRule("tcp", 22, 22, ["198.51.100.7/32"], "SSH")])
    assert check_ssh_ingress(compliant, SETTINGS.ssh_cidr) == []

    open_to_world = with_ingress(graph, [IngressRule("tcp", 22, 22, ["0.0.0.0/0"])])
    assert check_ssh_ingress(open_to_world, SETTINGS.ssh_cidr) == [
        "aws_security_group.ssh: ingress open to the internet (0.0.0.0/0)"
    ]
    with pytest.raises(ConfigDeviationError):
        assert_golden(open_to_world, SETTINGS)
