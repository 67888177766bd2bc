from typing import Dict, List, Optional

MANDATORY_TAGS = ("Owner", "Project", "Environment")


def get_default_tags(project: str, owner: str, environment: str = "dev") -> Dict[str, str]:
    """
    Get the mandatory tags applied to every taggable resource.

    Args:
        project: Name of the project
        owner: Person or team that owns the resources
        environment: Environment name (dev, prod, etc.)

    Returns:
        Dict[str, str]: Dictionary of default tags
    """
    return {
        "Owner": owner,
        "Project": project,
        "Environment": environment,
    }


def merge_tags(default_tags: Dict[str, str], custom_tags: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Merge default tags with custom tags. Custom values win.
    """
    if custom_tags is None:
        return dict(default_tags)

    return {**default_tags, **custom_tags}


def missing_mandatory_tags(tags: Optional[Dict[str, str]]) -> List[str]:
    """Return the mandatory tag keys that are absent or empty."""
    tags = tags or {}
    return [key for key in MANDATORY_TAGS if not tags.get(key)]
