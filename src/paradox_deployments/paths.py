"""Path management utilities for paradox-deployments library."""

from pathlib import Path
from typing import Optional, Union


def get_default_artifacts_dir() -> Path:
    """
    Get default Hardhat artifacts directory.

    Returns:
        Path to ./artifacts
    """
    return Path.cwd() / "artifacts"


def get_default_records_path(network: str) -> Path:
    """
    Get default deployment records file for a network.

    Args:
        network: Network name (e.g., "localhost")

    Returns:
        Path to ./deployments/{network}.json
    """
    return Path.cwd() / "deployments" / f"{network}.json"


def resolve_artifacts_dir(artifacts_dir: Optional[Union[Path, str]] = None) -> Path:
    """
    Resolve the artifacts directory.

    Args:
        artifacts_dir: Custom artifacts directory (defaults to ./artifacts)

    Returns:
        Absolute path to the artifacts directory
    """
    if artifacts_dir is None:
        return get_default_artifacts_dir()
    return Path(artifacts_dir).absolute()
