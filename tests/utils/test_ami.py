import pytest
import pulumi
from infragraph.utils.ami import get_debian_ami, DEBIAN_OWNER_ID, DEBIAN_12_NAME_PATTERN

from conftest import MOCK_AMI_ID


@pulumi.runtime.test
def test_get_debian_ami(mock_pulumi):
    """Test the Debian 12 lookup asks for the latest matching image."""
    ami = get_debian_ami()

    assert ami.id == MOCK_AMI_ID

    call = next(c for c in mock_pulumi.calls if c.token == "aws:ec2/getAmi:getAmi")
    assert call.args["mostRecent"] is True
    assert call.args["owners"] == [DEBIAN_OWNER_ID]
    filters = {f["name"]: f["values"] for f in call.args["filters"]}
    assert filters == {
        "name": [DEBIAN_12_NAME_PATTERN],
        "virtualization-type": ["hvm"],
    }
