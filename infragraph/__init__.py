"""
infragraph - a declarative AWS web server stack resolved as a dependency graph
and realized with Pulumi.
"""

__version__ = "0.1.0"
