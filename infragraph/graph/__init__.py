"""
Declarative resource graph and dependency resolution.
"""

from .model import DATA, MANAGED, OutputValue, Reference, ResourceGraph, ResourceNode, ref
from .resolver import DependencyResolver, resolve
from .schema import SCHEMAS, ResourceSchema, get_schema
from .state import StateStore

__all__ = [
    'DATA',
    'MANAGED',
    'OutputValue',
    'Reference',
    'ResourceGraph',
    'ResourceNode',
    'ref',
    'DependencyResolver',
    'resolve',
    'SCHEMAS',
    'ResourceSchema',
    'get_schema',
    'StateStore',
]
