"""Deployment plan for the Paradox contract suite."""

import math
import time
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from web3 import Web3

from .constants import (
    LOCK_AMOUNT_ETHER,
    LOCK_DURATION_SECONDS,
    SECONDS_PER_DAY,
    STAKE_POOL_REWARDS_PER_DAY,
)
from .plan import DeploymentPlan
from .types import DeploymentResult, DeploymentStep, address_of

# 5000 PARA per day, 18 decimals
REWARDS_PER_SECOND = int((STAKE_POOL_REWARDS_PER_DAY / SECONDS_PER_DAY) * 10**18)

LOCK_AMOUNT_WEI = Web3.to_wei(Decimal(LOCK_AMOUNT_ETHER), "ether")


def lock_unlock_time(now: Optional[float] = None) -> int:
    """
    Unlock timestamp for the Lock contract.

    Args:
        now: Unix time in seconds (defaults to the current time)

    Returns:
        now rounded to the nearest second (halves up) plus the lock duration
    """
    if now is None:
        now = time.time()
    return math.floor(now + 0.5) + LOCK_DURATION_SECONDS


def build_paradox_plan(rewards_pool: str, now: Optional[float] = None) -> DeploymentPlan:
    """
    Build the Paradox deployment plan.

    Order: USDT, ParadoxToken, Parapad(USDT, ParadoxToken), Utilities,
    StakePool(Parapad, rewardsPerSecond, rewardsPool), Lock(unlockTime)
    funded with 0.001 ether.

    Args:
        rewards_pool: Address the StakePool pays rewards from
        now: Unix time used for the Lock unlock timestamp
             If None, the clock is read when the Lock step executes

    Returns:
        DeploymentPlan
    """

    def lock_args(registry: Mapping[str, DeploymentResult]) -> Sequence[Any]:
        return [lock_unlock_time(now)]

    def lock_label(args: Sequence[Any]) -> str:
        return f"Lock with {LOCK_AMOUNT_ETHER}ETH and unlock timestamp {args[0]}"

    return DeploymentPlan(
        [
            DeploymentStep("USDT"),
            DeploymentStep("ParadoxToken"),
            DeploymentStep("Parapad", args=[address_of("USDT"), address_of("ParadoxToken")]),
            DeploymentStep("Utilities"),
            # address _para, uint256 _rewardsPerSecond, address _rewardsPoolAddress
            DeploymentStep(
                "StakePool",
                args=[address_of("Parapad"), REWARDS_PER_SECOND, rewards_pool],
            ),
            DeploymentStep(
                "Lock",
                args=lock_args,
                value=LOCK_AMOUNT_WEI,
                label=lock_label,
            ),
        ]
    )
