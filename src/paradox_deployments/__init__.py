"""
paradox-deployments: dependency-ordered smart contract deployments for the Paradox suite
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import ArtifactStore
from .backends import Web3Backend
from .exceptions import (
    ArtifactNotFoundError,
    ChainMismatchError,
    ConfirmationTimeoutError,
    ConstructorRevertedError,
    DeploymentError,
    InvalidArtifactError,
    InvalidPlanError,
    NonPayableValueError,
    RecordsNotFoundError,
    RpcError,
    TransactionRejectedError,
    UnresolvedDependencyError,
)
from .orchestrator import DeploymentOrchestrator
from .paradox import build_paradox_plan
from .plan import DeploymentPlan, ResultRegistry
from .types import Confirmation, ContractArtifact, DeploymentResult, DeploymentStep, Ref, address_of

try:
    __version__ = version("paradox-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentOrchestrator",
    "DeploymentPlan",
    "DeploymentStep",
    "DeploymentResult",
    "ResultRegistry",
    "Ref",
    "address_of",
    "ArtifactStore",
    "ContractArtifact",
    "Confirmation",
    "Web3Backend",
    "build_paradox_plan",
    "DeploymentError",
    "UnresolvedDependencyError",
    "TransactionRejectedError",
    "ConstructorRevertedError",
    "ConfirmationTimeoutError",
    "InvalidPlanError",
    "NonPayableValueError",
    "ArtifactNotFoundError",
    "InvalidArtifactError",
    "RpcError",
    "ChainMismatchError",
    "RecordsNotFoundError",
]
