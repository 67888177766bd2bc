"""
Networking infrastructure components.
"""

from .vpc import (
    create_vpc,
    create_internet_gateway,
    create_route_table,
    associate_route_table,
    create_subnet,
)

__all__ = [
    'create_vpc',
    'create_internet_gateway',
    'create_route_table',
    'associate_route_table',
    'create_subnet',
]
