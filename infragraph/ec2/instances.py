import pulumi
import pulumi_aws as aws
from typing import List, Optional, Dict


def create_instance(
    name: str,
    instance_type: str,
    ami_id: str,
    subnet_id: str,
    security_group_ids: List[str],
    key_name: Optional[str] = None,
    user_data: Optional[str] = None,
    tags: Optional[Dict[str, str]] = None,
    root_volume_size: int = 20,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.ec2.Instance:
    """
    Create an EC2 instance with the specified configuration.

    Args:
        name: Name of the instance
        instance_type: EC2 instance type (e.g., t2.micro)
        ami_id: AMI ID to boot from
        subnet_id: Subnet ID to launch in
        security_group_ids: List of security group IDs to attach
        key_name: Optional key pair name for SSH access
        user_data: Optional user data script run at first boot
        tags: Optional dictionary of tags
        root_volume_size: Root volume size in GiB
        opts: Optional resource options

    Returns:
        aws.ec2.Instance: The created EC2 instance
    """
    return aws.ec2.Instance(
        name,
        instance_type=instance_type,
        ami=ami_id,
        subnet_id=subnet_id,
        vpc_security_group_ids=security_group_ids,
        key_name=key_name,
        user_data=user_data,
        tags=tags,
        associate_public_ip_address=True,  # Public IP for SSH and HTTP
        root_block_device=aws.ec2.InstanceRootBlockDeviceArgs(
            volume_size=root_volume_size,
            volume_type="gp3",
            delete_on_termination=True,
        ),
        opts=opts,
    )


def get_instance_public_ip(instance: aws.ec2.Instance) -> pulumi.Output[str]:
    """
    Get the public IP address of an EC2 instance.

    Args:
        instance: The EC2 instance

    Returns:
        pulumi.Output[str]: The public IP address
    """
    return instance.public_ip
