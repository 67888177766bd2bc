"""
EC2 infrastructure components.
"""

from .instances import create_instance, get_instance_public_ip
from .security_groups import create_security_group, IngressRule
from .keypairs import create_private_key, create_key_pair, default_key_path, save_private_key

__all__ = [
    'create_instance',
    'get_instance_public_ip',
    'create_security_group',
    'IngressRule',
    'create_private_key',
    'create_key_pair',
    'default_key_path',
    'save_private_key',
]
