import os
import stat
import pulumi
import pulumi_aws as aws
import pulumi_tls as tls
from typing import Optional, Dict


def create_private_key(
    name: str,
    algorithm: str = "RSA",
    rsa_bits: int = 4096,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> tls.PrivateKey:
    """
    Generate an SSH private key managed by the TLS provider.

    The key material lives in the Pulumi state, so it is generated once and
    survives later updates of the stack.

    Args:
        name: Name of the key resource
        algorithm: Key algorithm (RSA, ECDSA, ED25519)
        rsa_bits: Key size when the algorithm is RSA
        opts: Optional resource options

    Returns:
        tls.PrivateKey: The generated private key
    """
    return tls.PrivateKey(
        name,
        algorithm=algorithm,
        rsa_bits=rsa_bits if algorithm == "RSA" else None,
        opts=opts,
    )


def create_key_pair(
    name: str,
    public_key: str,
    key_name: Optional[str] = None,
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.KeyPair:
    """
    Register a public key with EC2 as a key pair.

    Args:
        name: Name of the key pair resource
        public_key: Public key in OpenSSH format
        key_name: Name of the key pair in AWS (defaults to name)
        tags: Optional dictionary of tags
        opts: Optional resource options

    Returns:
        aws.ec2.KeyPair: The created key pair
    """
    return aws.ec2.KeyPair(
        name,
        key_name=key_name or name,
        public_key=public_key,
        tags=tags or {},
        opts=opts,
    )


def default_key_path(name: str) -> str:
    """Return ~/.ssh/{name}.pem, creating ~/.ssh if needed."""
    ssh_dir = os.path.join(os.path.expanduser("~"), ".ssh")
    if not os.path.exists(ssh_dir):
        os.makedirs(ssh_dir)
    return os.path.join(ssh_dir, f"{name}.pem")


def save_private_key(
    private_key_pem: str,
    save_path: str,
    force_overwrite: bool = False,
) -> bool:
    """
    Write a PEM private key to disk with owner-only permissions.

    Args:
        private_key_pem: The private key in PEM format
        save_path: Destination file
        force_overwrite: Whether to overwrite an existing key file

    Returns:
        bool: True if the file was written, False if it already existed
    """
    if os.path.exists(save_path):
        if not force_overwrite:
            return False
        # The previous key was saved read-only
        os.chmod(save_path, stat.S_IRUSR | stat.S_IWUSR)

    with open(save_path, "w") as f:
        f.write(private_key_pem)

    os.chmod(save_path, stat.S_IRUSR | stat.S_IWUSR)
    return True
