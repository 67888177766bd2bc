import pytest
from infragraph.config import StackSettings
from infragraph.graph.model import Reference
from infragraph.graph.resolver import DependencyResolver
from infragraph.stack import (
    AMI,
    INSTANCE,
    INTERNET_GATEWAY,
    KEY_PAIR,
    PRIVATE_KEY,
    ROUTE_TABLE,
    ROUTE_TABLE_ASSOCIATION,
    SECURITY_GROUP,
    SUBNET,
    VPC,
    build_stack_graph,
)

SETTINGS = StackSettings(
    project_name="web",
    candidate_name="jane-doe",
    environment="staging",
    instance_type="t3.small",
    ssh_cidr="198.51.100.7/32",
)


@pytest.fixture
def graph():
    return build_stack_graph(SETTINGS)


def test_stack_declares_every_resource(graph):
    """Test the set of declared nodes."""
    assert sorted(graph.addresses) == sorted([
        PRIVATE_KEY, KEY_PAIR, VPC, SUBNET, INTERNET_GATEWAY, ROUTE_TABLE,
        ROUTE_TABLE_ASSOCIATION, SECURITY_GROUP, AMI, INSTANCE,
    ])
    assert graph.get(AMI).is_data


def test_stack_uses_settings(graph):
    """Test that configured values end up in node attributes."""
    assert graph.get(VPC).attributes["cidr_block"] == "10.0.0.0/16"
    assert graph.get(SUBNET).attributes["cidr_block"] == "10.0.1.0/24"
    assert graph.get(INSTANCE).attributes["instance_type"] == "t3.small"
    assert graph.get(KEY_PAIR).attributes["key_name"] == "web-key"
    assert graph.get(SECURITY_GROUP).attributes["ingress"][0]["cidr_blocks"] == ["198.51.100.7/32"]


def test_stack_tags(graph):
    """Test mandatory and Name tags on taggable resources."""
    for address in (KEY_PAIR, VPC, SUBNET, INTERNET_GATEWAY, ROUTE_TABLE, SECURITY_GROUP, INSTANCE):
        tags = graph.get(address).tags
        assert tags["Owner"] == "jane-doe"
        assert tags["Project"] == "web"
        assert tags["Environment"] == "staging"
        assert tags["Name"].startswith("web-")

    assert graph.get(INSTANCE).tags["Name"] == "web-instance"


def test_instance_references(graph):
    """Test that the instance is wired to the image, network and key."""
    instance = graph.get(INSTANCE)

    assert instance.attributes["ami"] == Reference(AMI)
    assert instance.attributes["subnet_id"] == Reference(SUBNET)
    assert instance.attributes["vpc_security_group_ids"] == [Reference(SECURITY_GROUP)]
    assert instance.attributes["key_name"] == Reference(KEY_PAIR, "key_name")
    assert "apt-get install -y nginx" in instance.attributes["user_data"]


def test_stack_outputs(graph):
    """Test that the private key is sensitive and the public IP is not."""
    key = graph.output("private_key_pem")
    ip = graph.output("public_ip")

    assert key.sensitive
    assert key.value == Reference(PRIVATE_KEY, "private_key_pem")
    assert not ip.sensitive
    assert ip.value == Reference(INSTANCE, "public_ip")


def test_stack_graph_is_valid(graph):
    """Test that the stack resolves and orders network before instance."""
    resolver = DependencyResolver(graph)
    order = resolver.apply_order()

    assert order.index(VPC) < order.index(SUBNET)
    assert order.index(INTERNET_GATEWAY) < order.index(ROUTE_TABLE) < order.index(ROUTE_TABLE_ASSOCIATION)
    assert order.index(SECURITY_GROUP) < order.index(INSTANCE)
    assert order.index(AMI) < order.index(INSTANCE)
    assert resolver.destroy_order()[0] in (INSTANCE, ROUTE_TABLE_ASSOCIATION)
    assert resolver.destroy_order()[-1] in (VPC, PRIVATE_KEY, AMI)


def test_default_settings():
    """Test the graph built from default settings."""
    graph = build_stack_graph()

    assert graph.get(INSTANCE).attributes["instance_type"] == "t2.micro"
    assert graph.get(VPC).tags["Owner"] == "candidate-name"
    assert graph.get(SECURITY_GROUP).attributes["ingress"][0]["cidr_blocks"] == ["X.X.X.X/32"]
