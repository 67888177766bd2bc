"""
First-boot script for the web server instance.

The script is passed to EC2 as user data and runs once, as root, when the
instance first boots. It is stored verbatim and never parsed.
"""

WEB_SERVER_PACKAGE = "nginx"

USER_DATA_TEMPLATE = """#!/bin/bash
set -e
export DEBIAN_FRONTEND=noninteractive

apt-get update -y
apt-get upgrade -y
apt-get install -y {package}
systemctl enable {package}
systemctl start {package}
"""


def render_user_data(package: str = WEB_SERVER_PACKAGE) -> str:
    """Return the first-boot shell script that installs and enables the web server."""
    return USER_DATA_TEMPLATE.format(package=package)
