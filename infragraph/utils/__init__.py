"""
Utility functions for infrastructure management.
"""

from .tags import MANDATORY_TAGS, get_default_tags, merge_tags, missing_mandatory_tags
from .ami import get_debian_ami
from .ip import get_local_public_ip, format_cidr_from_ip

__all__ = [
    'MANDATORY_TAGS',
    'get_default_tags',
    'merge_tags',
    'missing_mandatory_tags',
    'get_debian_ami',
    'get_local_public_ip',
    'format_cidr_from_ip',
]
