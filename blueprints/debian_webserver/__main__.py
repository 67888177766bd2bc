"""
Debian Web Server Blueprint

Deploys a single Debian 12 EC2 instance running nginx in its own VPC:
1. An RSA key generated by Pulumi and registered as an EC2 key pair
2. A VPC with one public subnet, an internet gateway and a public route table
3. A security group that admits SSH from a single CIDR only

Configure it with `pulumi config set infragraph:<key> <value>`; see
infragraph/config.py for the available keys.
"""

import pulumi
from infragraph.config import StackSettings
from infragraph.provisioner import provision_graph
from infragraph.stack import build_stack_graph

settings = StackSettings.from_pulumi_config()

pulumi.log.info(
    f"Deploying {settings.project_name} ({settings.environment}) for {settings.candidate_name} "
    f"in {settings.region}"
)

# Validates the whole graph before declaring any resource, then exports
# private_key_pem (as a secret) and public_ip.
provision_graph(build_stack_graph(settings), region=settings.region)
