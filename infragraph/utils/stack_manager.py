"""
Stack Manager Utility

Drives the web server stack through Pulumi's Automation API: init, plan
(preview), apply (up) and destroy, plus reading outputs. The resource graph is
validated before every command so a malformed graph never reaches the engine.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from pulumi import automation as auto

from ..config import CONFIG_NAMESPACE, StackSettings
from ..ec2.keypairs import default_key_path, save_private_key
from ..errors import ProviderError
from ..graph.model import ResourceGraph
from ..outputs import MASK, render_output
from ..provisioner import Provisioner, provision_graph
from ..stack import build_stack_graph

logger = logging.getLogger(__name__)

DEFAULT_PROJECT = "infragraph"

# Pulumi config keys for StackSettings fields
CONFIG_KEYS = {
    "project_name": "projectName",
    "candidate_name": "candidateName",
    "environment": "environment",
    "instance_type": "instanceType",
    "vpc_cidr": "vpcCidr",
    "subnet_cidr": "subnetCidr",
    "ssh_cidr": "sshCidr",
    "key_name": "keyName",
}


class StackManager:
    """
    Manages one Pulumi stack of the web server project.
    """

    def __init__(
        self,
        stack_name: str = "dev",
        settings: Optional[StackSettings] = None,
        project_name: str = DEFAULT_PROJECT,
        on_output: Callable[[str], None] = print,
    ):
        """
        Initialize the stack manager.

        Args:
            stack_name: Name of the Pulumi stack
            settings: Stack settings (defaults if None)
            project_name: Name of the Pulumi project
            on_output: Callback receiving engine output lines
        """
        self.stack_name = stack_name
        self.settings = settings or StackSettings()
        self.project_name = project_name
        self.on_output = on_output
        self.graph: ResourceGraph = build_stack_graph(self.settings)
        self._stack: Optional[auto.Stack] = None

    def _program(self) -> None:
        provision_graph(self.graph, region=self.settings.region)

    def validate(self) -> List[str]:
        """Validate the graph and return its apply order."""
        return Provisioner(self.graph).plan()

    def init(self, check_graph: bool = True) -> auto.Stack:
        """
        Create or select the stack and write its configuration.

        Args:
            check_graph: Whether to validate the declared graph first

        Returns:
            auto.Stack: The selected stack
        """
        if check_graph:
            self.validate()
        if self._stack is not None:
            return self._stack

        stack = auto.create_or_select_stack(
            stack_name=self.stack_name,
            project_name=self.project_name,
            program=self._program,
        )
        stack.set_config("aws:region", auto.ConfigValue(value=self.settings.region))
        for field_name, key in CONFIG_KEYS.items():
            value = getattr(self.settings, field_name)
            if value is not None:
                stack.set_config(f"{CONFIG_NAMESPACE}:{key}", auto.ConfigValue(value=str(value)))

        logger.info("Stack %s/%s ready", self.project_name, self.stack_name)
        self._stack = stack
        return stack

    def plan(self) -> Dict[str, int]:
        """
        Preview the changes apply would make.

        Returns:
            Dict[str, int]: Change summary (operation -> count)
        """
        stack = self.init()
        result = self._run("preview", stack.preview)
        return dict(result.change_summary or {})

    def apply(self) -> Dict[str, str]:
        """
        Create or update every resource of the stack.

        Returns:
            Dict[str, str]: Rendered outputs, secrets masked
        """
        stack = self.init()
        result = self._run("up", stack.up)
        return self._render(result.outputs)

    def destroy(self) -> Dict[str, int]:
        """
        Remove every resource of the stack, dependents first.

        The engine tears down what its state records, so the declared graph
        is not validated: a stack stays removable after its graph breaks.

        Returns:
            Dict[str, int]: Resource change summary
        """
        stack = self.init(check_graph=False)
        result = self._run("destroy", stack.destroy)
        return dict(result.summary.resource_changes or {})

    def outputs(self, reveal: bool = False) -> Dict[str, str]:
        """
        Read the stack outputs.

        Args:
            reveal: Whether to show sensitive values in plaintext
        """
        stack = self.init()
        return self._render(stack.outputs(), reveal=reveal)

    def save_key(self, path: Optional[str] = None, force_overwrite: bool = False) -> Optional[str]:
        """
        Save the generated private key to disk.

        Args:
            path: Destination (defaults to ~/.ssh/{key_name}.pem)
            force_overwrite: Whether to overwrite an existing key file

        Returns:
            Optional[str]: The path written, or None if the file already existed
        """
        key_pem = self.outputs(reveal=True).get("private_key_pem")
        if not key_pem:
            raise ProviderError(f"stack {self.stack_name}", RuntimeError("no private_key_pem output"))

        path = path or default_key_path(self.settings.resolved_key_name)
        if not save_private_key(key_pem, path, force_overwrite=force_overwrite):
            logger.warning("Key file %s already exists, not overwriting", path)
            return None
        logger.info("Saved private key to %s", path)
        return path

    def _run(self, command: str, operation: Callable[..., Any]) -> Any:
        logger.info("Running %s on stack %s", command, self.stack_name)
        try:
            return operation(on_output=self.on_output)
        except auto.CommandError as e:
            logger.error("%s failed on stack %s: %s", command, self.stack_name, e)
            raise ProviderError(f"stack {self.stack_name}", e) from e

    def _render(self, values: Dict[str, Any], reveal: bool = False) -> Dict[str, str]:
        rendered = {}
        for name, value in (values or {}).items():
            declared = next((o for o in self.graph.outputs if o.name == name), None)
            if declared is not None:
                rendered[name] = render_output(declared, value.value, reveal)
            elif value.secret and not reveal:
                rendered[name] = MASK
            else:
                rendered[name] = str(value.value)
        return rendered
