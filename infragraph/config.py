"""
Stack configuration.

Values come from the Pulumi stack configuration (Pulumi.<stack>.yaml) under the
"infragraph" namespace, with "aws:region" for the provider region:

    pulumi config set infragraph:candidateName jane-doe
    pulumi config set infragraph:sshCidr 203.0.113.10/32
    pulumi config set aws:region us-east-1
"""

import logging
from dataclasses import dataclass
from typing import Optional

import pulumi

from .utils.ip import format_cidr_from_ip, get_local_public_ip

logger = logging.getLogger(__name__)

CONFIG_NAMESPACE = "infragraph"

# Operator-supplied placeholder; AWS rejects it until replaced.
PLACEHOLDER_SSH_CIDR = "X.X.X.X/32"


@dataclass(frozen=True)
class StackSettings:
    region: str = "us-east-1"
    project_name: str = "infragraph-web"
    candidate_name: str = "candidate-name"
    environment: str = "dev"
    instance_type: str = "t2.micro"
    vpc_cidr: str = "10.0.0.0/16"
    subnet_cidr: str = "10.0.1.0/24"
    ssh_cidr: str = PLACEHOLDER_SSH_CIDR
    key_name: Optional[str] = None

    @property
    def resolved_key_name(self) -> str:
        return self.key_name or f"{self.project_name}-key"

    @classmethod
    def from_pulumi_config(
        cls,
        config: Optional[pulumi.Config] = None,
        aws_config: Optional[pulumi.Config] = None,
    ) -> "StackSettings":
        """
        Build settings from the current Pulumi stack configuration.

        Missing keys fall back to the dataclass defaults. When detectSshIp is
        true and sshCidr is unset, the local public IP is used as a /32.
        """
        config = config or pulumi.Config(CONFIG_NAMESPACE)
        aws_config = aws_config or pulumi.Config("aws")
        defaults = cls()

        ssh_cidr = config.get("sshCidr")
        if not ssh_cidr and config.get_bool("detectSshIp"):
            local_ip = get_local_public_ip()
            if local_ip:
                ssh_cidr = format_cidr_from_ip(local_ip)
                logger.info("Using detected public IP %s for SSH ingress", ssh_cidr)
            else:
                logger.warning("Could not detect public IP; keeping SSH CIDR %s", defaults.ssh_cidr)

        return cls(
            region=aws_config.get("region") or defaults.region,
            project_name=config.get("projectName") or defaults.project_name,
            candidate_name=config.get("candidateName") or defaults.candidate_name,
            environment=config.get("environment") or defaults.environment,
            instance_type=config.get("instanceType") or defaults.instance_type,
            vpc_cidr=config.get("vpcCidr") or defaults.vpc_cidr,
            subnet_cidr=config.get("subnetCidr") or defaults.subnet_cidr,
            ssh_cidr=ssh_cidr or defaults.ssh_cidr,
            key_name=config.get("keyName"),
        )
