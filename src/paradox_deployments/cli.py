"""CLI for deploying the Paradox contract suite."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import requests
from web3.exceptions import Web3Exception

from .artifacts import ArtifactStore
from .backends import Web3Backend
from .config import DeploySettings
from .constants import NETWORK_CONFIG, REWARDS_POOL_SIGNER_INDEX, ZERO_ADDRESS
from .exceptions import DeploymentError
from .logging_utils import configure_logging
from .orchestrator import DeploymentOrchestrator
from .paradox import build_paradox_plan
from .paths import get_default_records_path
from .records import save_deployment_records
from .rpc import verify_chain_id
from .types import DeploymentResult

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="paradox-deploy",
        description="Deploy USDT, ParadoxToken, Parapad, Utilities, StakePool and Lock",
    )
    parser.add_argument("--network", choices=sorted(NETWORK_CONFIG), default=None,
                        help="Target network (defaults to $DEPLOY_NETWORK or localhost)")
    parser.add_argument("--rpc-url", default=None, help="Override the network's RPC URL")
    parser.add_argument("--artifacts-dir", default=None, help="Hardhat artifacts directory")
    parser.add_argument("--rewards-pool", default=None,
                        help="StakePool rewards pool address (defaults to node account #4)")
    parser.add_argument("--output", default=None, help="Write deployment records JSON here")
    parser.add_argument("--save-records", action="store_true",
                        help="Write deployment records to ./deployments/<network>.json")
    parser.add_argument("--receipt-timeout", type=float, default=None,
                        help="Seconds to wait for each receipt (default: wait indefinitely)")
    parser.add_argument("--skip-chain-check", action="store_true",
                        help="Do not verify the endpoint's chain id")
    parser.add_argument("--dry-run", action="store_true",
                        help="Validate the plan and artifacts without sending transactions")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> DeploySettings:
    settings = DeploySettings.from_env(network=args.network, rpc_url=args.rpc_url)
    if args.artifacts_dir:
        settings.artifacts_dir = Path(args.artifacts_dir).absolute()
    if args.receipt_timeout is not None:
        settings.receipt_timeout = args.receipt_timeout
    return settings


def format_result(result: DeploymentResult) -> str:
    return f"{result.label or result.step_name} deployed to {result.address}"


def _rewards_pool_address(backend: Web3Backend) -> str:
    accounts = backend.accounts()
    if len(accounts) <= REWARDS_POOL_SIGNER_INDEX:
        raise ValueError(
            f"Node exposes {len(accounts)} accounts, cannot pick rewards pool "
            f"account #{REWARDS_POOL_SIGNER_INDEX}; pass --rewards-pool"
        )
    return accounts[REWARDS_POOL_SIGNER_INDEX]


def deploy(args: argparse.Namespace) -> List[DeploymentResult]:
    settings = load_settings(args)
    artifacts = ArtifactStore(settings.artifacts_dir)

    if args.dry_run:
        plan = build_paradox_plan(args.rewards_pool or ZERO_ADDRESS)
        # Dry runs never touch the chain
        DeploymentOrchestrator(backend=None, artifacts=artifacts).check(plan)
        return []

    if settings.chain_id is not None and not args.skip_chain_check:
        verify_chain_id(settings.rpc_url, settings.chain_id)

    backend = Web3Backend.from_rpc_url(
        settings.rpc_url,
        private_key=settings.private_key,
        receipt_timeout=settings.receipt_timeout,
        poll_latency=settings.poll_latency,
    )
    rewards_pool = args.rewards_pool or _rewards_pool_address(backend)
    logger.info("Deploying to %s from %s", settings.network, backend.sender)

    plan = build_paradox_plan(rewards_pool)
    orchestrator = DeploymentOrchestrator(backend, artifacts)
    output = args.output or (get_default_records_path(settings.network) if args.save_records else None)

    try:
        return orchestrator.run(plan, on_result=lambda result: print(format_result(result), flush=True))
    finally:
        # Steps confirmed before a failure are live on-chain
        deployed = orchestrator.registry.results()
        if output and deployed:
            path = save_deployment_records(
                deployed,
                Path(output),
                network=settings.network,
                chain_id=settings.chain_id,
                block_explorer_url=settings.block_explorer_url,
            )
            logger.info("Deployment records written to %s (%d contracts)", path, len(deployed))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        deploy(args)
    except (DeploymentError, ValueError, Web3Exception, requests.RequestException) as e:
        logger.error("Deployment failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
