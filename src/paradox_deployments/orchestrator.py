"""Sequential, dependency-ordered contract deployment."""

import logging
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from .artifacts import ArtifactStore
from .exceptions import ConstructorRevertedError, InvalidPlanError, NonPayableValueError
from .plan import DeploymentPlan, ResultRegistry, resolve_args
from .types import Confirmation, ContractArtifact, DeploymentResult, DeploymentStep

logger = logging.getLogger(__name__)


class ChainBackend(Protocol):
    """Submits contract-creation transactions and waits for them to be mined."""

    def submit(self, artifact: ContractArtifact, args: Sequence, value: int = 0) -> str:
        ...

    def wait_for_confirmation(self, transaction_hash: str) -> Confirmation:
        ...


class DeploymentOrchestrator:
    """Runs a deployment plan one step at a time."""

    def __init__(self, backend: ChainBackend, artifacts: ArtifactStore):
        """
        Initialize the orchestrator.

        Args:
            backend: Chain backend used to submit and confirm transactions
            artifacts: Store resolving step contract names to artifacts
        """
        self.backend = backend
        self.artifacts = artifacts
        # Registry of the most recent run, kept for inspection after a failure
        self.registry = ResultRegistry()

    def check(self, plan: DeploymentPlan) -> Dict[str, ContractArtifact]:
        """
        Validate a plan without submitting anything.

        Args:
            plan: Plan to check

        Returns:
            Artifacts for every step, keyed by step name

        Raises:
            InvalidPlanError: If the plan is malformed
            UnresolvedDependencyError: If a declared dependency is out of order
            ArtifactNotFoundError: If a step's artifact is missing
            InvalidArtifactError: If a step's artifact cannot be deployed
            NonPayableValueError: If value is attached to a non-payable constructor
        """
        plan.validate()

        artifacts: Dict[str, ContractArtifact] = {}
        for step in plan:
            artifact = self.artifacts.load(step.contract_name)
            if step.value and not artifact.is_payable_constructor:
                raise NonPayableValueError(
                    f"Step '{step.name}' attaches {step.value} wei but the "
                    f"{artifact.name} constructor is not payable",
                    step_name=step.name,
                )
            artifacts[step.name] = artifact

        logger.info("Deployment plan checked: %d steps (%s)", len(plan), ", ".join(plan.names))
        return artifacts

    def run(
        self,
        plan: DeploymentPlan,
        on_result: Optional[Callable[[DeploymentResult], None]] = None,
    ) -> List[DeploymentResult]:
        """
        Deploy every step of a plan in order.

        Each step is submitted only after the previous one is confirmed. The
        first failure aborts the run; nothing is retried.

        Args:
            plan: Plan to execute
            on_result: Called with each result as soon as it is recorded

        Returns:
            One DeploymentResult per step, in plan order

        Raises:
            DeploymentError: Any subclass, unmodified, from the failing step
        """
        self.registry = ResultRegistry()
        artifacts = self.check(plan)

        for step in plan:
            result = self._execute_step(step, artifacts[step.name])
            self.registry.record(result)
            logger.info("%s deployed to %s", result.label, result.address)
            if on_result is not None:
                on_result(result)

        return self.registry.results()

    def _execute_step(self, step: DeploymentStep, artifact: ContractArtifact) -> DeploymentResult:
        args = resolve_args(step, self.registry)

        expected = len(artifact.constructor_inputs)
        if len(args) != expected:
            raise InvalidPlanError(
                f"Step '{step.name}' passes {len(args)} constructor arguments, "
                f"{artifact.name} expects {expected}",
                step_name=step.name,
            )

        tx_hash = self.backend.submit(artifact, args, step.value)
        logger.debug("Submitted %s (%s), waiting for confirmation", step.name, tx_hash)

        confirmation = self.backend.wait_for_confirmation(tx_hash)
        if not confirmation.succeeded:
            raise ConstructorRevertedError(
                f"{artifact.name} constructor reverted in transaction {tx_hash} "
                f"(block {confirmation.block_number})",
                step_name=step.name,
            )

        return DeploymentResult(
            step_name=step.name,
            address=confirmation.contract_address,
            transaction_hash=confirmation.transaction_hash,
            confirmed=True,
            contract_name=artifact.name,
            block_number=confirmation.block_number,
            value=step.value,
            label=step.describe(args),
        )
