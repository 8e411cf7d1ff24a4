"""Raw JSON-RPC helpers for paradox-deployments library."""

from typing import Any, List, Optional

import requests

from .exceptions import ChainMismatchError, RpcError


def rpc_call(rpc_url: str, method: str, params: Optional[List[Any]] = None, timeout: float = 30) -> Any:
    """
    Make a single JSON-RPC 2.0 call.

    Args:
        rpc_url: RPC endpoint URL
        method: JSON-RPC method name (e.g., "eth_chainId")
        params: Positional parameters
        timeout: HTTP timeout in seconds

    Returns:
        The "result" member of the response

    Raises:
        RpcError: On network errors, non-200 responses, or JSON-RPC errors
    """
    try:
        response = requests.post(
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "method": method,
                "params": params or [],
                "id": 1,
            },
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise RpcError(f"Network error during RPC call to {rpc_url}: {e}") from e

    # Check for HTTP errors
    if response.status_code != 200:
        raise RpcError(f"RPC request failed with status {response.status_code}")

    try:
        result = response.json()
    except ValueError as e:
        raise RpcError(f"RPC response is not JSON: {e}") from e

    # Check for RPC errors
    if "error" in result:
        raise RpcError(f"RPC error: {result['error']}")

    if "result" not in result:
        raise RpcError(f"RPC response for {method} has no result")

    return result["result"]


def get_chain_id(rpc_url: str) -> int:
    """
    Get the chain id reported by an RPC endpoint.

    Args:
        rpc_url: RPC endpoint URL

    Returns:
        Chain id as an integer
    """
    return int(rpc_call(rpc_url, "eth_chainId"), 16)


def verify_chain_id(rpc_url: str, expected_chain_id: int) -> int:
    """
    Check that an RPC endpoint serves the expected chain.

    Args:
        rpc_url: RPC endpoint URL
        expected_chain_id: Chain id of the configured network

    Returns:
        The chain id reported by the endpoint

    Raises:
        ChainMismatchError: If the endpoint reports a different chain id
        RpcError: If the endpoint cannot be queried
    """
    chain_id = get_chain_id(rpc_url)
    if chain_id != expected_chain_id:
        raise ChainMismatchError(
            f"RPC endpoint {rpc_url} serves chain {chain_id}, expected {expected_chain_id}"
        )
    return chain_id
