import pytest
from unittest.mock import MagicMock, patch
from infragraph.config import PLACEHOLDER_SSH_CIDR, StackSettings


def fake_config(values):
    """A stand-in for pulumi.Config backed by a dict."""
    config = MagicMock()
    config.get.side_effect = values.get
    config.get_bool.side_effect = lambda key: values.get(key) == "true"
    return config


def test_defaults():
    """Test the default settings."""
    settings = StackSettings()

    assert settings.region == "us-east-1"
    assert settings.instance_type == "t2.micro"
    assert settings.vpc_cidr == "10.0.0.0/16"
    assert settings.subnet_cidr == "10.0.1.0/24"
    assert settings.ssh_cidr == PLACEHOLDER_SSH_CIDR
    assert settings.resolved_key_name == "infragraph-web-key"


def test_explicit_key_name():
    """Test that a configured key name wins over the derived one."""
    assert StackSettings(key_name="my-key").resolved_key_name == "my-key"


def test_from_pulumi_config():
    """Test reading settings from stack configuration."""
    config = fake_config({
        "projectName": "web",
        "candidateName": "jane-doe",
        "environment": "prod",
        "instanceType": "t3.micro",
        "sshCidr": "198.51.100.7/32",
    })
    aws_config = fake_config({"region": "eu-west-1"})

    settings = StackSettings.from_pulumi_config(config, aws_config)

    assert settings == StackSettings(
        region="eu-west-1",
        project_name="web",
        candidate_name="jane-doe",
        environment="prod",
        instance_type="t3.micro",
        ssh_cidr="198.51.100.7/32",
    )


def test_from_pulumi_config_falls_back_to_defaults():
    """Test that unset keys keep their defaults."""
    settings = StackSettings.from_pulumi_config(fake_config({}), fake_config({}))

    assert settings == StackSettings()


@patch('infragraph.config.get_local_public_ip')
def test_detect_ssh_ip(mock_ip):
    """Test using the detected public IP for SSH ingress."""
    mock_ip.return_value = "203.0.113.42"

    settings = StackSettings.from_pulumi_config(fake_config({"detectSshIp": "true"}), fake_config({}))

    assert settings.ssh_cidr == "203.0.113.42/32"


@patch('infragraph.config.get_local_public_ip')
def test_detect_ssh_ip_failure_keeps_placeholder(mock_ip):
    """Test that a failed lookup keeps the placeholder CIDR."""
    mock_ip.return_value = None

    settings = StackSettings.from_pulumi_config(fake_config({"detectSshIp": "true"}), fake_config({}))

    assert settings.ssh_cidr == PLACEHOLDER_SSH_CIDR


@patch('infragraph.config.get_local_public_ip')
def test_explicit_ssh_cidr_skips_detection(mock_ip):
    """Test that a configured CIDR is used as is."""
    config = fake_config({"detectSshIp": "true", "sshCidr": "198.51.100.7/32"})

    settings = StackSettings.from_pulumi_config(config, fake_config({}))

    assert settings.ssh_cidr == "198.51.100.7/32"
    mock_ip.assert_not_called()
