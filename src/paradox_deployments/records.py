"""Deployment records export for paradox-deployments library."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from .exceptions import RecordsNotFoundError
from .types import DeploymentResult


def build_deployment_records(
    results: Iterable[DeploymentResult],
    network: str,
    chain_id: Optional[int] = None,
    block_explorer_url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the records document for a finished run.

    Args:
        results: Results in plan order
        network: Network name
        chain_id: Chain id of the network
        block_explorer_url: Explorer base URL, used for per-contract links

    Returns:
        Dictionary with "metadata" and "contracts" (step name -> record)
    """
    contracts: Dict[str, Any] = {}
    for result in results:
        record = result.to_dict()
        if block_explorer_url:
            record["url"] = f"{block_explorer_url}/address/{result.address}"
        contracts[result.step_name] = record

    return {
        "metadata": {
            "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
            "network": network,
            "chain_id": chain_id,
        },
        "contracts": contracts,
    }


def save_deployment_records(
    results: Iterable[DeploymentResult],
    output_path: Path,
    network: str,
    chain_id: Optional[int] = None,
    block_explorer_url: Optional[str] = None,
) -> Path:
    """
    Write deployment records to disk.

    Creates parent directories if they don't exist. An existing file is
    overwritten; records are never merged across runs.

    Args:
        results: Results in plan order
        output_path: Where to save the JSON document
        network: Network name
        chain_id: Chain id of the network
        block_explorer_url: Explorer base URL

    Returns:
        Path the records were written to
    """
    records = build_deployment_records(results, network, chain_id, block_explorer_url)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(records, f, indent=2)
    return output_path


def load_deployment_records(records_path: Path) -> Dict[str, Any]:
    """
    Load deployment records written by save_deployment_records().

    Args:
        records_path: Path to the records file

    Returns:
        Records dictionary

    Raises:
        RecordsNotFoundError: If the file doesn't exist
    """
    try:
        with open(records_path) as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise RecordsNotFoundError(f"Deployment records not found at {records_path}") from e
