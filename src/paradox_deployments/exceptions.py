"""Custom exception classes for paradox-deployments library."""

from typing import Optional


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    def __init__(self, message: str = "", step_name: Optional[str] = None):
        super().__init__(message)
        self.step_name = step_name


class UnresolvedDependencyError(DeploymentError, LookupError):
    """Raised when a step references a step that has not been deployed yet."""

    def __init__(
        self, message: str = "", step_name: Optional[str] = None, missing: Optional[str] = None
    ):
        super().__init__(message, step_name=step_name)
        # Name of the step that was looked up but not found
        self.missing = missing



class TransactionRejectedError(DeploymentError, RuntimeError):
    """Raised when the node rejects a contract-creation transaction."""

    pass


class ConstructorRevertedError(DeploymentError, RuntimeError):
    """Raised when a contract constructor reverts on-chain."""

    pass


class ConfirmationTimeoutError(DeploymentError, TimeoutError):
    """Raised when a configured receipt timeout elapses."""

    pass


class InvalidPlanError(DeploymentError, ValueError):
    """Raised when a deployment plan is malformed."""

    pass


class NonPayableValueError(InvalidPlanError):
    """Raised when value is attached to a step whose constructor is not payable."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled contract artifact cannot be located."""

    pass


class InvalidArtifactError(DeploymentError, ValueError):
    """Raised when an artifact file has no ABI or no creation bytecode."""

    pass


class RpcError(DeploymentError, RuntimeError):
    """Raised when a JSON-RPC request fails."""

    pass


class ChainMismatchError(DeploymentError, ValueError):
    """Raised when the RPC endpoint reports an unexpected chain id."""

    pass


class RecordsNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a deployment records file is not found."""

    pass
