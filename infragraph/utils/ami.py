import pulumi
import pulumi_aws as aws
from typing import Optional

DEBIAN_OWNER_ID = "136693071363"  # Debian cloud team
DEBIAN_12_NAME_PATTERN = "debian-12-amd64-*"


def get_debian_ami(
    name_pattern: str = DEBIAN_12_NAME_PATTERN,
    virtualization_type: str = "hvm",
    owner: str = DEBIAN_OWNER_ID,
    opts: Optional[pulumi.InvokeOptions] = None,
) -> aws.ec2.GetAmiResult:
    """
    Look up the most recent Debian AMI matching a name pattern.

    This is a read-only query: it creates nothing.

    Args:
        name_pattern: Image name pattern (e.g., "debian-12-amd64-*")
        virtualization_type: Virtualization type (hvm, paravirtual)
        owner: AWS account that publishes the image
        opts: Optional invoke options

    Returns:
        aws.ec2.GetAmiResult: The matching image
    """
    return aws.ec2.get_ami(
        most_recent=True,
        owners=[owner],
        filters=[
            aws.ec2.GetAmiFilterArgs(name="name", values=[name_pattern]),
            aws.ec2.GetAmiFilterArgs(name="virtualization-type", values=[virtualization_type]),
        ],
        opts=opts,
    )
