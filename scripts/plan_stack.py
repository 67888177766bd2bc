#!/usr/bin/env python3
"""
Plan Stack Script

Inspects the web server stack's resource graph without calling any cloud API:
the order resources are created in, the order they are destroyed in, the
batches that can be provisioned concurrently, and golden-configuration checks.
"""

import argparse
import json
import sys
import os

# Add the parent directory to the path so we can import the infragraph package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from infragraph.config import StackSettings
from infragraph.errors import GraphError
from infragraph.graph.resolver import DependencyResolver
from infragraph.stack import build_stack_graph
from infragraph.validation import golden_deviations


def add_settings_args(parser: argparse.ArgumentParser):
    """Add the stack settings options shared by the stack scripts."""
    defaults = StackSettings()
    parser.add_argument("--region", default=defaults.region, help="AWS region")
    parser.add_argument("--project", default=defaults.project_name, help="Project name")
    parser.add_argument("--candidate", default=defaults.candidate_name, help="Owner of the resources")
    parser.add_argument("--environment", default=defaults.environment, help="Environment tag")
    parser.add_argument("--instance-type", default=defaults.instance_type, help="EC2 instance type")
    parser.add_argument("--ssh-cidr", default=defaults.ssh_cidr, help="CIDR allowed to reach SSH")


def settings_from_args(args) -> StackSettings:
    return StackSettings(
        region=args.region,
        project_name=args.project,
        candidate_name=args.candidate,
        environment=args.environment,
        instance_type=args.instance_type,
        ssh_cidr=args.ssh_cidr,
    )


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Inspect the resource graph of the web server stack"
    )
    add_settings_args(parser)

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    subparsers.add_parser("order", help="Show the order resources are created in")
    subparsers.add_parser("destroy-order", help="Show the order resources are destroyed in")
    subparsers.add_parser("levels", help="Show batches that can be provisioned concurrently")

    graph_parser = subparsers.add_parser("graph", help="Show every resource and its dependencies")
    graph_parser.add_argument("--json", action="store_true", help="Output in JSON format")

    subparsers.add_parser("validate", help="Check the graph against the golden configuration")
    subparsers.add_parser("outputs", help="List the declared outputs")

    return parser.parse_args(argv)


def display_order(addresses):
    for i, address in enumerate(addresses, 1):
        print(f"{i:2d}. {address}")


def display_graph(resolver: DependencyResolver, json_output: bool = False):
    edges = {
        address: sorted(resolver.dependencies(address))
        for address in resolver.apply_order()
    }
    if json_output:
        print(json.dumps(edges, indent=2))
        return

    for address, deps in edges.items():
        print(f"{address}")
        for dep in deps:
            print(f"   -> {dep}")


def main(argv=None) -> int:
    """Main function."""
    args = parse_args(argv)
    settings = settings_from_args(args)
    graph = build_stack_graph(settings)
    resolver = DependencyResolver(graph)

    try:
        resolver.validate()
    except GraphError as e:
        print(f"Invalid resource graph: {e}")
        return 1

    if args.command == "order":
        display_order(resolver.apply_order())

    elif args.command == "destroy-order":
        display_order(resolver.destroy_order())

    elif args.command == "levels":
        for i, batch in enumerate(resolver.levels()):
            print(f"Batch {i}: {', '.join(batch)}")

    elif args.command == "graph":
        display_graph(resolver, args.json)

    elif args.command == "validate":
        deviations = golden_deviations(graph, settings)
        if deviations:
            print(f"Found {len(deviations)} deviations:")
            for deviation in deviations:
                print(f"  - {deviation}")
            return 1
        print("Graph matches the golden configuration.")

    elif args.command == "outputs":
        for output in graph.outputs:
            marker = " (sensitive)" if output.sensitive else ""
            print(f"{output.name}{marker}: {output.value}")

    else:
        print("Please specify a command. Use --help for more information.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
