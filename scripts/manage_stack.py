#!/usr/bin/env python3
"""
Manage Stack Script

Command-line interface for the web server stack: init, plan, apply and destroy
through Pulumi, reading outputs and saving the generated SSH key locally.
"""

import argparse
import json
import logging
import sys
import os

# Add the parent directory to the path so we can import the infragraph package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from infragraph.errors import InfraGraphError
from infragraph.utils.stack_manager import StackManager

from plan_stack import add_settings_args, settings_from_args


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Provision the web server stack with Pulumi"
    )
    parser.add_argument("--stack", default="dev", help="Pulumi stack name")
    parser.add_argument("--verbose", action="store_true", help="Show debug logging")
    add_settings_args(parser)

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    subparsers.add_parser("init", help="Create or select the stack and write its config")
    subparsers.add_parser("plan", help="Preview changes without applying them")
    subparsers.add_parser("apply", help="Create or update the stack's resources")
    subparsers.add_parser("destroy", help="Remove the stack's resources")

    outputs_parser = subparsers.add_parser("outputs", help="Show stack outputs")
    outputs_parser.add_argument("--show-secrets", action="store_true", help="Show sensitive outputs")
    outputs_parser.add_argument("--json", action="store_true", help="Output in JSON format")

    key_parser = subparsers.add_parser("save-key", help="Save the SSH private key locally")
    key_parser.add_argument("--path", help="Destination file (default: ~/.ssh/<key name>.pem)")
    key_parser.add_argument("--force", action="store_true", help="Overwrite an existing key file")

    return parser.parse_args(argv)


def display_outputs(outputs, json_output: bool = False):
    if json_output:
        print(json.dumps(outputs, indent=2))
        return
    for name, value in outputs.items():
        print(f"{name}: {value}")


def main(argv=None) -> int:
    """Main function."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    manager = StackManager(args.stack, settings_from_args(args))

    try:
        if args.command == "init":
            manager.init()
            print(f"Stack {args.stack} is ready.")

        elif args.command == "plan":
            summary = manager.plan()
            print(f"Planned changes: {summary}")

        elif args.command == "apply":
            display_outputs(manager.apply())

        elif args.command == "destroy":
            summary = manager.destroy()
            print(f"Destroyed stack {args.stack}: {summary}")

        elif args.command == "outputs":
            display_outputs(manager.outputs(reveal=args.show_secrets), args.json)

        elif args.command == "save-key":
            path = manager.save_key(args.path, force_overwrite=args.force)
            if path is None:
                print("Key file already exists. Use --force to overwrite it.")
                return 1
            print(f"Saved private key to {path}")

        else:
            print("Please specify a command. Use --help for more information.")
            return 1

    except InfraGraphError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
