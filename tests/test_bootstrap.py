from infragraph.bootstrap import WEB_SERVER_PACKAGE, render_user_data


def test_user_data_installs_web_server():
    """Test the first-boot script."""
    script = render_user_data()

    assert script.startswith("#!/bin/bash\n")
    assert "set -e" in script
    assert "apt-get update -y" in script
    assert f"apt-get install -y {WEB_SERVER_PACKAGE}" in script
    assert f"systemctl enable {WEB_SERVER_PACKAGE}" in script


def test_user_data_other_package():
    """Test rendering the script for another package."""
    script = render_user_data("apache2")

    assert "apt-get install -y apache2" in script
    assert "nginx" not in script
