"""Integration tests for DeploymentOrchestrator against Hardhat artifacts."""

import logging

import pytest

from paradox_deployments import (
    ArtifactNotFoundError,
    ConstructorRevertedError,
    DeploymentOrchestrator,
    DeploymentPlan,
    DeploymentStep,
    InvalidArtifactError,
    InvalidPlanError,
    NonPayableValueError,
    TransactionRejectedError,
    UnresolvedDependencyError,
    address_of,
    build_paradox_plan,
)
from paradox_deployments.paradox import LOCK_AMOUNT_WEI, REWARDS_PER_SECOND


def address(n: int) -> str:
    """Address the fake backend assigns to the n-th accepted submission."""
    return "0x" + format(n, "040x")


class TestRun:
    """Test DeploymentOrchestrator.run()."""

    def test_results_in_plan_order(self, orchestrator: DeploymentOrchestrator):
        """Test that N steps produce N results in input order."""
        plan = DeploymentPlan(
            [DeploymentStep("USDT"), DeploymentStep("ParadoxToken"), DeploymentStep("Utilities")]
        )

        results = orchestrator.run(plan)

        assert [r.step_name for r in results] == ["USDT", "ParadoxToken", "Utilities"]
        assert [r.address for r in results] == [address(1), address(2), address(3)]
        assert all(r.confirmed for r in results)

    def test_dependent_step_receives_address(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test [A, B(A)]: B is deployed with A's address."""
        plan = DeploymentPlan(
            [
                DeploymentStep("USDT"),
                DeploymentStep("ParadoxToken"),
                DeploymentStep("Parapad", args=[address_of("USDT"), address_of("ParadoxToken")]),
            ]
        )

        results = orchestrator.run(plan)

        assert fake_backend.submissions[2] == ("Parapad", [address(1), address(2)], 0)
        assert [r.step_name for r in results] == ["USDT", "ParadoxToken", "Parapad"]

    def test_result_fields(self, orchestrator: DeploymentOrchestrator):
        """Test that results carry hash, block, contract and label."""
        plan = DeploymentPlan(
            [DeploymentStep("Token", contract="ParadoxToken", label="PARA token")]
        )

        (result,) = orchestrator.run(plan)

        assert result.step_name == "Token"
        assert result.contract_name == "ParadoxToken"
        assert result.transaction_hash == "0x" + format(1, "064x")
        assert result.block_number == 101
        assert result.value == 0
        assert result.label == "PARA token"

    def test_callable_builder(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test that a callable builder reads earlier results."""
        plan = DeploymentPlan(
            [
                DeploymentStep("USDT"),
                DeploymentStep("ParadoxToken"),
                DeploymentStep(
                    "Parapad",
                    args=lambda r: [r["USDT"].address, r["ParadoxToken"].address],
                    depends_on=("USDT", "ParadoxToken"),
                ),
            ]
        )

        orchestrator.run(plan)

        assert fake_backend.submissions[2][1] == [address(1), address(2)]

    def test_registry_holds_run_results(self, orchestrator: DeploymentOrchestrator):
        """Test that the registry of the run is kept for inspection."""
        results = orchestrator.run(DeploymentPlan([DeploymentStep("USDT")]))

        assert list(orchestrator.registry) == ["USDT"]
        assert orchestrator.registry["USDT"] is results[0]

    def test_rerun_produces_independent_results(self, orchestrator: DeploymentOrchestrator):
        """Test that running a plan twice deploys twice with a fresh registry."""
        plan = DeploymentPlan([DeploymentStep("USDT")])

        first = orchestrator.run(plan)
        second = orchestrator.run(plan)

        assert first[0].address != second[0].address
        assert len(orchestrator.registry) == 1
        assert orchestrator.registry["USDT"] is second[0]

    def test_logs_each_address(self, orchestrator: DeploymentOrchestrator, caplog):
        """Test that every deployment is logged with its label and address."""
        plan = DeploymentPlan([DeploymentStep("Lock", args=[1700000060], value=1, label="Lock with 1 wei")])

        with caplog.at_level(logging.INFO, logger="paradox_deployments.orchestrator"):
            orchestrator.run(plan)

        assert f"Lock with 1 wei deployed to {address(1)}" in caplog.text

    def test_on_result_called_as_each_step_confirms(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test that on_result sees each result before the next step is submitted."""
        seen = []

        def on_result(result):
            seen.append((result.step_name, len(fake_backend.submissions)))

        orchestrator.run(
            DeploymentPlan([DeploymentStep("USDT"), DeploymentStep("ParadoxToken")]), on_result=on_result
        )

        assert seen == [("USDT", 1), ("ParadoxToken", 2)]

    def test_empty_plan(self, orchestrator: DeploymentOrchestrator, fake_backend):

        """Test that an empty plan deploys nothing."""
        assert orchestrator.run(DeploymentPlan([])) == []
        assert fake_backend.submissions == []


class TestFailures:
    """Test that the first failure aborts the run."""

    def test_rejected_first_step_leaves_registry_empty(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test [A, B(A)] with A rejected: nothing is recorded."""
        fake_backend.reject.add("USDT")
        plan = DeploymentPlan(
            [
                DeploymentStep("USDT"),
                DeploymentStep("Parapad", args=[address_of("USDT"), address_of("USDT")]),
            ]
        )

        with pytest.raises(TransactionRejectedError):
            orchestrator.run(plan)

        assert len(orchestrator.registry) == 0
        assert fake_backend.submissions == []

    def test_rejected_middle_step_stops_later_steps(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test that no result exists for the failing step or any later step."""
        fake_backend.reject.add("ParadoxToken")
        plan = DeploymentPlan(
            [DeploymentStep("USDT"), DeploymentStep("ParadoxToken"), DeploymentStep("Utilities")]
        )

        with pytest.raises(TransactionRejectedError):
            orchestrator.run(plan)

        assert list(orchestrator.registry) == ["USDT"]
        assert [s[0] for s in fake_backend.submissions] == ["USDT"]

    def test_reverted_constructor(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test that a status 0 receipt raises ConstructorRevertedError."""
        fake_backend.revert.add("ParadoxToken")
        plan = DeploymentPlan(
            [DeploymentStep("USDT"), DeploymentStep("ParadoxToken"), DeploymentStep("Utilities")]
        )

        with pytest.raises(ConstructorRevertedError) as exc_info:
            orchestrator.run(plan)

        assert exc_info.value.step_name == "ParadoxToken"
        assert list(orchestrator.registry) == ["USDT"]
        assert fake_backend.confirmed == ["USDT", "ParadoxToken"]

    def test_out_of_order_ref_fails_before_any_submission(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test that declared dependencies are checked before anything is sent."""
        plan = DeploymentPlan(
            [
                DeploymentStep("USDT"),
                DeploymentStep("Parapad", args=[address_of("USDT"), address_of("ParadoxToken")]),
                DeploymentStep("ParadoxToken"),
            ]
        )

        with pytest.raises(UnresolvedDependencyError):
            orchestrator.run(plan)

        assert fake_backend.submissions == []

    def test_undeclared_builder_dependency_fails_before_its_step(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test that step k reading a missing name fails before step k submits."""
        plan = DeploymentPlan(
            [
                DeploymentStep("USDT"),
                DeploymentStep("Parapad", args=lambda r: [r["USDT"].address, r["ParadoxToken"].address]),
                DeploymentStep("ParadoxToken"),
            ]
        )

        with pytest.raises(UnresolvedDependencyError) as exc_info:
            orchestrator.run(plan)

        assert exc_info.value.step_name == "Parapad"
        assert exc_info.value.missing == "ParadoxToken"
        assert [s[0] for s in fake_backend.submissions] == ["USDT"]
        assert list(orchestrator.registry) == ["USDT"]

    def test_value_on_non_payable_constructor(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test that value attached to a non-payable constructor is rejected up front."""
        plan = DeploymentPlan([DeploymentStep("USDT"), DeploymentStep("ParadoxToken", value=1)])

        with pytest.raises(NonPayableValueError) as exc_info:
            orchestrator.run(plan)

        assert exc_info.value.step_name == "ParadoxToken"
        assert fake_backend.submissions == []

    def test_wrong_argument_count(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test that a constructor argument mismatch is a plan error."""
        plan = DeploymentPlan([DeploymentStep("USDT"), DeploymentStep("Parapad", args=[address_of("USDT")])])

        with pytest.raises(InvalidPlanError) as exc_info:
            orchestrator.run(plan)

        assert "expects 2" in str(exc_info.value)
        assert [s[0] for s in fake_backend.submissions] == ["USDT"]

    def test_missing_artifact_fails_before_any_submission(self, orchestrator: DeploymentOrchestrator, fake_backend):
        """Test that every artifact is resolved before the first transaction."""
        plan = DeploymentPlan([DeploymentStep("USDT"), DeploymentStep("Vault")])

        with pytest.raises(ArtifactNotFoundError):
            orchestrator.run(plan)

        assert fake_backend.submissions == []

    def test_preflight_failure_clears_previous_registry(self, orchestrator: DeploymentOrchestrator):
        """Test that a rerun failing preflight does not leave the last run's results."""
        orchestrator.run(DeploymentPlan([DeploymentStep("USDT")]))

        with pytest.raises(ArtifactNotFoundError):
            orchestrator.run(DeploymentPlan([DeploymentStep("Vault")]))

        assert len(orchestrator.registry) == 0

    def test_interface_cannot_be_deployed(self, orchestrator: DeploymentOrchestrator, fake_backend):

        """Test that an interface artifact is rejected before submission."""
        with pytest.raises(InvalidArtifactError):
            orchestrator.run(DeploymentPlan([DeploymentStep("IERC20")]))

        assert fake_backend.submissions == []


class TestCheck:
    """Test DeploymentOrchestrator.check()."""

    def test_returns_artifacts_without_submitting(self, orchestrator: DeploymentOrchestrator, fake_backend, rewards_pool):
        """Test that check() loads every artifact and sends nothing."""
        artifacts = orchestrator.check(build_paradox_plan(rewards_pool, now=1700000000))

        assert list(artifacts) == ["USDT", "ParadoxToken", "Parapad", "Utilities", "StakePool", "Lock"]
        assert artifacts["Lock"].is_payable_constructor
        assert fake_backend.submissions == []


class TestParadoxDeployment:
    """Test the full Paradox plan end to end."""

    def test_deploys_suite(self, orchestrator: DeploymentOrchestrator, fake_backend, rewards_pool):
        """Test the six deployments and their constructor arguments."""
        results = orchestrator.run(build_paradox_plan(rewards_pool, now=1700000000))

        assert [r.step_name for r in results] == [
            "USDT",
            "ParadoxToken",
            "Parapad",
            "Utilities",
            "StakePool",
            "Lock",
        ]
        assert fake_backend.submissions == [
            ("USDT", [], 0),
            ("ParadoxToken", [], 0),
            ("Parapad", [address(1), address(2)], 0),
            ("Utilities", [], 0),
            ("StakePool", [address(3), REWARDS_PER_SECOND, rewards_pool], 0),
            ("Lock", [1700000060], LOCK_AMOUNT_WEI),
        ]
        assert results[-1].label == "Lock with 0.001ETH and unlock timestamp 1700000060"
        assert results[-1].value == LOCK_AMOUNT_WEI

    def test_lock_unlock_time_follows_slow_confirmations(
        self, orchestrator: DeploymentOrchestrator, fake_backend, rewards_pool, monkeypatch
    ):
        """Test that the Lock unlock time is still in the future when Lock is submitted."""
        clock = [1700000000.0]
        monkeypatch.setattr("paradox_deployments.paradox.time.time", lambda: clock[0])
        submit = fake_backend.submit
        submitted_at = []

        def slow_submit(artifact, args, value=0):
            submitted_at.append(clock[0])
            clock[0] += 15
            return submit(artifact, args, value)

        fake_backend.submit = slow_submit

        results = orchestrator.run(build_paradox_plan(rewards_pool))

        unlock_time = fake_backend.submissions[-1][1][0]
        assert submitted_at[-1] == 1700000075.0
        assert unlock_time == 1700000135
        assert unlock_time > submitted_at[-1]
        assert results[-1].label == "Lock with 0.001ETH and unlock timestamp 1700000135"

