"""
Declarative resource graph model.

A stack is described as a set of ResourceNodes whose attribute values are either
plain values or References to another node's output attribute. References are the
edges of the dependency graph; nothing here talks to a cloud provider.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from ..errors import GraphError

MANAGED = "managed"
DATA = "data"


@dataclass(frozen=True)
class Reference:
    """Points at an output attribute of another resource node."""

    address: str
    attribute: str = "id"

    def __str__(self) -> str:
        return f"{self.address}.{self.attribute}"


def ref(address: str, attribute: str = "id") -> Reference:
    """Shorthand for building a Reference."""
    return Reference(address, attribute)


def _collect_references(value: Any) -> List[Reference]:
    if isinstance(value, Reference):
        return [value]
    if isinstance(value, dict):
        found = []
        for item in value.values():
            found.extend(_collect_references(item))
        return found
    if isinstance(value, (list, tuple)):
        found = []
        for item in value:
            found.extend(_collect_references(item))
        return found
    return []


@dataclass(frozen=True)
class ResourceNode:
    """
    A declared unit of cloud infrastructure.

    Attributes:
        type: Resource type (e.g. aws_vpc)
        name: Local name, unique per type
        attributes: Attribute name -> value or Reference (nested lists/dicts allowed)
        tags: Key/value tags applied to the resource
        mode: "managed" for resources that are created, "data" for read-only queries
        depends_on: Extra addresses this node must come after
    """

    type: str
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    tags: Dict[str, str] = field(default_factory=dict)
    mode: str = MANAGED
    depends_on: Tuple[str, ...] = ()

    @property
    def address(self) -> str:
        if self.mode == DATA:
            return f"data.{self.type}.{self.name}"
        return f"{self.type}.{self.name}"

    @property
    def is_data(self) -> bool:
        return self.mode == DATA

    def references(self) -> List[Reference]:
        """All references found in this node's attributes."""
        return _collect_references(self.attributes)

    def dependencies(self) -> Set[str]:
        """Addresses this node depends on."""
        deps = {reference.address for reference in self.references()}
        deps.update(self.depends_on)
        return deps


@dataclass(frozen=True)
class OutputValue:
    """A named value exposed after provisioning."""

    name: str
    value: Reference
    sensitive: bool = False
    description: Optional[str] = None


class ResourceGraph:
    """
    An ordered collection of resource nodes keyed by address, plus output values.
    """

    def __init__(self, nodes: Optional[List[ResourceNode]] = None,
                 outputs: Optional[List[OutputValue]] = None):
        self._nodes: Dict[str, ResourceNode] = {}
        self._outputs: Dict[str, OutputValue] = {}
        for node in nodes or []:
            self.add(node)
        for output in outputs or []:
            self.add_output(output)

    def add(self, node: ResourceNode) -> ResourceNode:
        if node.address in self._nodes:
            raise GraphError(f"Duplicate resource address: {node.address}")
        self._nodes[node.address] = node
        return node

    def add_output(self, output: OutputValue) -> OutputValue:
        if output.name in self._outputs:
            raise GraphError(f"Duplicate output name: {output.name}")
        self._outputs[output.name] = output
        return output

    def get(self, address: str) -> ResourceNode:
        try:
            return self._nodes[address]
        except KeyError:
            raise GraphError(f"Unknown resource address: {address}") from None

    def replace(self, node: ResourceNode) -> "ResourceGraph":
        """Return a copy of this graph with the node at node.address swapped."""
        if node.address not in self._nodes:
            raise GraphError(f"Unknown resource address: {node.address}")
        nodes = [node if n.address == node.address else n for n in self._nodes.values()]
        return ResourceGraph(nodes, list(self._outputs.values()))

    @property
    def addresses(self) -> List[str]:
        return list(self._nodes)

    @property
    def outputs(self) -> List[OutputValue]:
        return list(self._outputs.values())

    def output(self, name: str) -> OutputValue:
        return self._outputs[name]

    def __contains__(self, address: str) -> bool:
        return address in self._nodes

    def __iter__(self) -> Iterator[ResourceNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)
