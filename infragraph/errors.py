"""
Exceptions raised while validating and realizing a resource graph.
"""

from typing import List, Optional


class InfraGraphError(Exception):
    """Base class for all infragraph errors."""


class GraphError(InfraGraphError):
    """The resource graph is malformed and must not be provisioned."""


class CycleError(GraphError):
    """A resource depends, directly or transitively, on itself."""

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(f"Dependency cycle detected: {' -> '.join(cycle)}")


class UnresolvedReferenceError(GraphError):
    """A reference points at a missing resource or a missing attribute."""

    def __init__(self, source: str, target: str, reason: str):
        self.source = source
        self.target = target
        super().__init__(f"{source}: cannot resolve reference '{target}': {reason}")


class TagValidationError(GraphError):
    """One or more resources are missing mandatory tags."""

    def __init__(self, missing: dict):
        self.missing = missing
        details = "; ".join(
            f"{address} missing {', '.join(tags)}" for address, tags in sorted(missing.items())
        )
        super().__init__(f"Mandatory tags missing: {details}")


class ProviderError(InfraGraphError):
    """The cloud provider rejected the creation of a resource."""

    def __init__(self, address: str, cause: Optional[BaseException] = None):
        self.address = address
        self.cause = cause
        message = f"Provider failed to create {address}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class SensitiveValueExposure(InfraGraphError):
    """A sensitive output was about to be rendered in plaintext."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Output '{name}' is sensitive and cannot be shown in plaintext")


class ConfigDeviationError(InfraGraphError):
    """The declared configuration deviates from the golden configuration."""

    def __init__(self, deviations: List[str]):
        self.deviations = deviations
        super().__init__("Configuration deviates from golden settings:\n  " + "\n  ".join(deviations))
