"""Environment-driven settings for paradox-deployments library."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .constants import DEFAULT_NETWORK, NETWORK_CONFIG
from .paths import resolve_artifacts_dir


@dataclass
class DeploySettings:
    """Everything a deployment run needs to reach the chain."""

    network: str
    rpc_url: str
    chain_id: Optional[int]
    artifacts_dir: Path
    private_key: Optional[str] = None
    block_explorer_url: Optional[str] = None
    receipt_timeout: Optional[float] = None  # None waits indefinitely
    poll_latency: float = 0.5

    @classmethod
    def from_env(
        cls,
        network: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        rpc_url: Optional[str] = None,
    ) -> "DeploySettings":
        """
        Build settings from environment variables.

        Reads a .env file first when env is not given. Variables:
        DEPLOY_NETWORK, the network's RPC variable (e.g. SEP_RPC_URL),
        RPC_URL, DEPLOYER_PRIVATE_KEY, ARTIFACTS_DIR, RECEIPT_TIMEOUT,
        POLL_LATENCY.

        Args:
            network: Network name (defaults to $DEPLOY_NETWORK or "localhost")
            env: Mapping to read instead of os.environ
            rpc_url: Explicit RPC URL, takes precedence over the environment

        Returns:
            DeploySettings

        Raises:
            ValueError: If the network is unknown, no RPC URL is available, or a
                numeric variable cannot be parsed
        """
        if env is None:
            load_dotenv()
            env = os.environ

        if network is None:
            network = env.get("DEPLOY_NETWORK", DEFAULT_NETWORK)

        if network not in NETWORK_CONFIG:
            raise ValueError(
                f"Unknown network: {network} (expected one of {', '.join(NETWORK_CONFIG)})"
            )
        network_config = NETWORK_CONFIG[network]

        rpc_url = (
            rpc_url
            or env.get(network_config["rpc_env"])
            or env.get("RPC_URL")
            or network_config["default_rpc_url"]
        )
        if not rpc_url:
            raise ValueError(
                f"RPC URL required for network '{network}': "
                f"set ${network_config['rpc_env']} or $RPC_URL"
            )

        return cls(
            network=network,
            rpc_url=rpc_url,
            chain_id=network_config["chain_id"],
            artifacts_dir=resolve_artifacts_dir(env.get("ARTIFACTS_DIR")),
            private_key=env.get("DEPLOYER_PRIVATE_KEY") or None,
            block_explorer_url=network_config["block_explorer_url"],
            receipt_timeout=_optional_float(env, "RECEIPT_TIMEOUT"),
            poll_latency=_optional_float(env, "POLL_LATENCY") or 0.5,
        )


def _optional_float(env: Mapping[str, str], name: str) -> Optional[float]:
    raw = env.get(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"${name} must be a number, got {raw!r}") from e
