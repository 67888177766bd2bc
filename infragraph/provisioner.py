"""
Realizes a resource graph as Pulumi resources.

The whole graph is validated first (references, cycles, mandatory tags); only
then is any provider object constructed. Resources are declared in dependency
order and references are resolved against the StateStore, so every resource
receives the Outputs of the resources it depends on. Pulumi takes it from there:
it diffs, creates, updates and destroys.
"""

from typing import Any, Callable, Dict, List, Optional

import pulumi
import pulumi_aws as aws

from .ec2.instances import create_instance
from .ec2.keypairs import create_key_pair, create_private_key
from .ec2.security_groups import create_security_group
from .errors import ProviderError
from .graph.model import Reference, ResourceGraph, ResourceNode
from .graph.resolver import DependencyResolver
from .graph.schema import SCHEMAS, ResourceSchema
from .graph.state import StateStore
from .networking.vpc import (
    associate_route_table,
    create_internet_gateway,
    create_route_table,
    create_subnet,
    create_vpc,
)
from .utils.ami import get_debian_ami
from .validation import validate_tags


def _private_key(name, attrs, tags, opts):
    return create_private_key(
        name,
        algorithm=attrs.get("algorithm", "RSA"),
        rsa_bits=attrs.get("rsa_bits", 4096),
        opts=opts,
    )


def _key_pair(name, attrs, tags, opts):
    return create_key_pair(name, public_key=attrs["public_key"], key_name=attrs.get("key_name"), tags=tags, opts=opts)


def _vpc(name, attrs, tags, opts):
    return create_vpc(
        name,
        cidr_block=attrs["cidr_block"],
        enable_dns_hostnames=attrs.get("enable_dns_hostnames", True),
        enable_dns_support=attrs.get("enable_dns_support", True),
        tags=tags,
        opts=opts,
    )


def _subnet(name, attrs, tags, opts):
    return create_subnet(
        name,
        vpc_id=attrs["vpc_id"],
        cidr_block=attrs["cidr_block"],
        availability_zone=attrs.get("availability_zone"),
        map_public_ip_on_launch=attrs.get("map_public_ip_on_launch", True),
        tags=tags,
        opts=opts,
    )


def _internet_gateway(name, attrs, tags, opts):
    return create_internet_gateway(name, vpc_id=attrs["vpc_id"], tags=tags, opts=opts)


def _route_table(name, attrs, tags, opts):
    return create_route_table(
        name,
        vpc_id=attrs["vpc_id"],
        gateway_id=attrs["gateway_id"],
        destination_cidr_block=attrs.get("destination_cidr_block", "0.0.0.0/0"),
        tags=tags,
        opts=opts,
    )


def _route_table_association(name, attrs, tags, opts):
    return associate_route_table(name, subnet_id=attrs["subnet_id"], route_table_id=attrs["route_table_id"], opts=opts)


def _security_group(name, attrs, tags, opts):
    return create_security_group(
        name,
        vpc_id=attrs["vpc_id"],
        description=attrs.get("description", "Managed by infragraph"),
        ingress_rules=attrs.get("ingress", []),
        egress_rules=attrs.get("egress"),
        tags=tags,
        opts=opts,
    )


def _ami(name, attrs, tags, opts):
    return get_debian_ami(
        name_pattern=attrs["name_pattern"],
        virtualization_type=attrs.get("virtualization_type", "hvm"),
        owner=attrs["owner"],
        opts=opts,
    )


def _instance(name, attrs, tags, opts):
    return create_instance(
        name,
        instance_type=attrs["instance_type"],
        ami_id=attrs["ami"],
        subnet_id=attrs["subnet_id"],
        security_group_ids=attrs["vpc_security_group_ids"],
        key_name=attrs.get("key_name"),
        user_data=attrs.get("user_data"),
        tags=tags,
        opts=opts,
    )


Builder = Callable[[str, Dict[str, Any], Dict[str, str], Any], Any]

BUILDERS: Dict[str, Builder] = {
    "tls_private_key": _private_key,
    "aws_key_pair": _key_pair,
    "aws_vpc": _vpc,
    "aws_subnet": _subnet,
    "aws_internet_gateway": _internet_gateway,
    "aws_route_table": _route_table,
    "aws_route_table_association": _route_table_association,
    "aws_security_group": _security_group,
    "aws_ami": _ami,
    "aws_instance": _instance,
}


def logical_name(node: ResourceNode) -> str:
    """Pulumi logical name for a node, e.g. aws_vpc.main -> aws-vpc-main."""
    return node.address.replace(".", "-").replace("_", "-")


class Provisioner:
    """
    Declares the resources of a graph with Pulumi, in dependency order.
    """

    def __init__(
        self,
        graph: ResourceGraph,
        region: Optional[str] = None,
        state: Optional[StateStore] = None,
        schemas: Optional[Dict[str, ResourceSchema]] = None,
    ):
        """
        Args:
            graph: The resource graph to realize
            region: AWS region for an explicit provider (uses aws:region config if None)
            state: Store for realized resources (a fresh one if None)
            schemas: Resource schemas (defaults to the built-in registry)
        """
        self.graph = graph
        self.region = region
        self.state = state if state is not None else StateStore()
        self.schemas = schemas if schemas is not None else SCHEMAS
        self._provider: Optional[aws.Provider] = None

    def plan(self) -> List[str]:
        """
        Validate the whole graph and return its apply order. No side effects.

        Raises:
            GraphError: The graph is cyclic, has unresolved references or missing tags
        """
        order = DependencyResolver(self.graph, self.schemas).apply_order()
        validate_tags(self.graph, self.schemas)
        return order

    def provision(self) -> StateStore:
        """
        Declare every resource of the graph.

        Returns:
            StateStore: The realized resources keyed by address

        Raises:
            GraphError: Raised before any resource is declared
            ProviderError: A resource could not be declared; earlier ones are kept
        """
        order = self.plan()
        pulumi.log.info(f"Provisioning {len(order)} resources: {', '.join(order)}")

        for address in order:
            node = self.graph.get(address)
            builder = BUILDERS[node.type]
            attrs = self._resolve(node.attributes)
            try:
                realized = builder(logical_name(node), attrs, dict(node.tags), self._options(node))
            except Exception as e:
                pulumi.log.error(f"Failed to declare {address}: {e}")
                raise ProviderError(address, e) from e
            self.state.record(address, realized)
            pulumi.log.debug(f"Declared {address}")

        return self.state

    def export_outputs(self, exporter: Callable[[str, Any], None] = pulumi.export) -> Dict[str, pulumi.Output]:
        """
        Export the graph's output values. Sensitive values are exported as secrets.
        """
        exported = {}
        for output in self.graph.outputs:
            value = self.state.attribute(output.value)
            if output.sensitive:
                value = pulumi.Output.secret(value)
            else:
                value = pulumi.Output.from_input(value)
            exporter(output.name, value)
            exported[output.name] = value
        return exported

    def teardown(self) -> List[str]:
        """
        Discard state records in destroy order (dependents first).

        Returns:
            List[str]: The addresses discarded, in order
        """
        discarded = []
        for address in DependencyResolver(self.graph, self.schemas).destroy_order():
            if address in self.state:
                self.state.discard(address)
                discarded.append(address)
        return discarded

    def _resolve(self, value: Any) -> Any:
        if isinstance(value, Reference):
            return self.state.attribute(value)
        if isinstance(value, dict):
            return {key: self._resolve(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._resolve(item) for item in value]
        return value

    def _options(self, node: ResourceNode):
        provider = None
        if self.schemas[node.type].provider == "aws" and self.region is not None:
            if self._provider is None:
                self._provider = aws.Provider("aws-provider", region=self.region)
            provider = self._provider

        if node.is_data:
            return pulumi.InvokeOptions(provider=provider) if provider else None

        # depends_on edges carry no Output; lookups are already resolved
        depends_on = [
            self.state.get(address)
            for address in sorted(node.depends_on)
            if not self.graph.get(address).is_data
        ]
        if provider is None and not depends_on:
            return None
        return pulumi.ResourceOptions(provider=provider, depends_on=depends_on or None)


def provision_graph(graph: ResourceGraph, region: Optional[str] = None) -> Provisioner:
    """Provision a graph and export its outputs. Used as a Pulumi program body."""
    provisioner = Provisioner(graph, region=region)
    provisioner.provision()
    provisioner.export_outputs()
    return provisioner
