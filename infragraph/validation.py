"""
Golden-configuration checks for a resource graph.

These checks run before anything is provisioned: mandatory tags on every
taggable resource and a security group that only admits SSH from one CIDR.
"""

import logging
from typing import Dict, List, Optional

from .config import StackSettings
from .ec2.security_groups import IngressRule
from .errors import ConfigDeviationError, TagValidationError
from .graph.model import ResourceGraph
from .graph.schema import SCHEMAS, ResourceSchema
from .utils.tags import missing_mandatory_tags

logger = logging.getLogger(__name__)

SSH_PORT = 22
OPEN_CIDRS = ("0.0.0.0/0", "::/0")


def find_missing_tags(
    graph: ResourceGraph,
    schemas: Optional[Dict[str, ResourceSchema]] = None,
) -> Dict[str, List[str]]:
    """Map each taggable managed resource to the mandatory tags it lacks."""
    schemas = schemas if schemas is not None else SCHEMAS
    missing = {}
    for node in graph:
        schema = schemas.get(node.type)
        if node.is_data or schema is None or not schema.taggable:
            continue
        absent = missing_mandatory_tags(node.tags)
        if absent:
            missing[node.address] = absent
    return missing


def validate_tags(graph: ResourceGraph, schemas: Optional[Dict[str, ResourceSchema]] = None) -> None:
    """
    Raise TagValidationError unless every taggable resource carries Owner,
    Project and Environment.
    """
    missing = find_missing_tags(graph, schemas)
    if missing:
        raise TagValidationError(missing)


def check_ssh_ingress(graph: ResourceGraph, allowed_cidr: Optional[str] = None) -> List[str]:
    """
    Check that each security group admits exactly one ingress: TCP on port 22
    from a single CIDR.

    Args:
        graph: The resource graph
        allowed_cidr: The CIDR SSH must be restricted to, if known

    Returns:
        List[str]: Deviation messages (empty if compliant)
    """
    deviations = []
    for node in graph:
        if node.type != "aws_security_group":
            continue
        rules = node.attributes.get("ingress") or []
        if len(rules) != 1:
            deviations.append(f"{node.address}: expected exactly one ingress rule, found {len(rules)}")

        for rule in rules:
            if isinstance(rule, IngressRule):
                rule = rule.to_dict()
            if rule.get("protocol") != "tcp":
                deviations.append(f"{node.address}: ingress protocol is {rule.get('protocol')!r}, expected 'tcp'")
            if rule.get("from_port") != SSH_PORT or rule.get("to_port") != SSH_PORT:
                deviations.append(
                    f"{node.address}: ingress ports {rule.get('from_port')}-{rule.get('to_port')}, "
                    f"expected {SSH_PORT} only"
                )
            cidrs = list(rule.get("cidr_blocks") or []) + list(rule.get("ipv6_cidr_blocks") or [])
            if len(cidrs) != 1:
                deviations.append(f"{node.address}: ingress allows {len(cidrs)} CIDRs, expected one")
            for cidr in cidrs:
                if cidr in OPEN_CIDRS:
                    deviations.append(f"{node.address}: ingress open to the internet ({cidr})")
                elif allowed_cidr is not None and cidr != allowed_cidr:
                    deviations.append(f"{node.address}: ingress CIDR {cidr} differs from {allowed_cidr}")
    return deviations


def golden_deviations(graph: ResourceGraph, settings: Optional[StackSettings] = None) -> List[str]:
    """Collect every deviation of the graph from the golden configuration."""
    deviations = [
        f"{address}: missing mandatory tags {', '.join(tags)}"
        for address, tags in sorted(find_missing_tags(graph).items())
    ]
    deviations.extend(check_ssh_ingress(graph, settings.ssh_cidr if settings else None))
    for deviation in deviations:
        logger.warning("Golden configuration deviation: %s", deviation)
    return deviations


def assert_golden(graph: ResourceGraph, settings: Optional[StackSettings] = None) -> None:
    """Raise ConfigDeviationError if the graph deviates from the golden configuration."""
    deviations = golden_deviations(graph, settings)
    if deviations:
        raise ConfigDeviationError(deviations)
