"""
Dependency resolution for resource graphs.

The resolver validates every reference, rejects cyclic graphs with a depth-first
traversal and produces the order in which resources must be created. Teardown
uses the reverse of that order so dependents go before their dependencies.
"""

import logging
from typing import Dict, List, Optional, Set

from ..errors import CycleError, GraphError, UnresolvedReferenceError
from .model import ResourceGraph
from .schema import SCHEMAS, ResourceSchema

logger = logging.getLogger(__name__)

_VISITING = 1
_VISITED = 2


class DependencyResolver:
    """
    Orders the nodes of a ResourceGraph so each one follows everything it references.
    """

    def __init__(self, graph: ResourceGraph, schemas: Optional[Dict[str, ResourceSchema]] = None):
        self.graph = graph
        self.schemas = schemas if schemas is not None else SCHEMAS
        self._order: Optional[List[str]] = None

    def validate(self) -> None:
        """
        Check references and acyclicity of the whole graph.

        Raises:
            GraphError: A node has an unknown type or a mode its type does not support
            UnresolvedReferenceError: A reference targets a missing node or attribute
            CycleError: The graph contains a dependency cycle
        """
        self._check_references()
        self._order = self._topological_sort()

    def _check_references(self) -> None:
        for node in self.graph:
            schema = self.schemas.get(node.type)
            if schema is None:
                raise GraphError(f"{node.address}: unknown resource type '{node.type}'")
            if schema.mode != node.mode:
                raise GraphError(f"{node.address}: type '{node.type}' must be declared as {schema.mode}")

            if node.is_data and node.depends_on:
                raise GraphError(f"{node.address}: lookups cannot declare depends_on")

            for reference in node.references():
                self._check_target(node.address, reference.address, reference.attribute)
            for address in node.depends_on:
                self._check_target(node.address, address, None)

        for output in self.graph.outputs:
            self._check_target(f"output.{output.name}", output.value.address, output.value.attribute)

    def _check_target(self, source: str, address: str, attribute: Optional[str]) -> None:
        target = str(address) if attribute is None else f"{address}.{attribute}"
        if address not in self.graph:
            raise UnresolvedReferenceError(source, target, "no such resource")
        if attribute is None:
            return
        schema = self.schemas[self.graph.get(address).type]
        if attribute not in schema.attributes:
            raise UnresolvedReferenceError(
                source, target, f"'{schema.type}' has no attribute '{attribute}'"
            )

    def _topological_sort(self) -> List[str]:
        marks: Dict[str, int] = {}
        order: List[str] = []
        path: List[str] = []

        def visit(address: str) -> None:
            mark = marks.get(address)
            if mark == _VISITED:
                return
            if mark == _VISITING:
                cycle = path[path.index(address):] + [address]
                logger.error("Dependency cycle: %s", " -> ".join(cycle))
                raise CycleError(cycle)

            marks[address] = _VISITING
            path.append(address)
            for dependency in sorted(self.graph.get(address).dependencies()):
                visit(dependency)
            path.pop()
            marks[address] = _VISITED
            order.append(address)

        for node in self.graph:
            visit(node.address)

        logger.debug("Resolved apply order: %s", order)
        return order

    def apply_order(self) -> List[str]:
        """
        Addresses in creation order.

        Independent nodes may appear in any relative order.
        """
        if self._order is None:
            self.validate()
        return list(self._order)

    def destroy_order(self) -> List[str]:
        """Addresses in teardown order, the exact reverse of apply_order()."""
        return list(reversed(self.apply_order()))

    def levels(self) -> List[List[str]]:
        """
        Group addresses into batches that can be provisioned concurrently.

        Every node in a batch depends only on nodes from earlier batches.
        """
        depth: Dict[str, int] = {}
        for address in self.apply_order():
            deps = self.graph.get(address).dependencies()
            depth[address] = 1 + max((depth[d] for d in deps), default=-1)

        batches: List[List[str]] = [[] for _ in range(max(depth.values(), default=-1) + 1)]
        for address in self.apply_order():
            batches[depth[address]].append(address)
        return batches

    def dependencies(self, address: str) -> Set[str]:
        """Direct dependencies of a node."""
        return self.graph.get(address).dependencies()

    def dependents(self, address: str) -> Set[str]:
        """Nodes that directly depend on the given node."""
        self.graph.get(address)
        return {node.address for node in self.graph if address in node.dependencies()}


def resolve(graph: ResourceGraph) -> List[str]:
    """Validate a graph and return its apply order."""
    return DependencyResolver(graph).apply_order()
