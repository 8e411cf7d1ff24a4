"""Shared pytest fixtures for paradox-deployments tests."""

import shutil
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import pytest

from paradox_deployments.artifacts import ArtifactStore
from paradox_deployments.exceptions import TransactionRejectedError
from paradox_deployments.orchestrator import DeploymentOrchestrator
from paradox_deployments.types import Confirmation, ContractArtifact


class FakeBackend:
    """
    Scripted chain backend.

    Every accepted submission gets a sequential transaction hash and, once
    confirmed, a sequential address (0x...01, 0x...02, ...). Contracts named in
    `reject` fail at submission; contracts named in `revert` are mined with
    status 0.
    """

    def __init__(self) -> None:
        self.reject: set = set()
        self.revert: set = set()
        self.submissions: List[Tuple[str, List[Any], int]] = []
        self.confirmed: List[str] = []
        self._pending: Dict[str, str] = {}
        self._block = 100

    def submit(self, artifact: ContractArtifact, args: Sequence[Any], value: int = 0) -> str:
        if artifact.name in self.reject:
            raise TransactionRejectedError(
                f"Deployment of {artifact.name} was rejected: insufficient funds for gas"
            )
        self.submissions.append((artifact.name, list(args), value))
        tx_hash = "0x" + format(len(self.submissions), "064x")
        self._pending[tx_hash] = artifact.name
        return tx_hash

    def wait_for_confirmation(self, transaction_hash: str) -> Confirmation:
        name = self._pending.pop(transaction_hash)
        self._block += 1
        self.confirmed.append(name)
        if name in self.revert:
            return Confirmation(transaction_hash, None, self._block, 0, 50000)
        address = "0x" + format(int(transaction_hash, 16), "040x")
        return Confirmation(transaction_hash, address, self._block, 1, 21000)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path) -> Path:
    """Return the sample Hardhat artifacts directory."""
    return fixtures_dir / "artifacts"


@pytest.fixture
def temp_artifacts_dir(tmp_path: Path, artifacts_dir: Path) -> Path:
    """Copy the sample artifacts somewhere tests may modify them."""
    target = tmp_path / "artifacts"
    shutil.copytree(artifacts_dir, target)
    return target


@pytest.fixture
def artifact_store(artifacts_dir: Path) -> ArtifactStore:
    return ArtifactStore(artifacts_dir)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def orchestrator(fake_backend: FakeBackend, artifact_store: ArtifactStore) -> DeploymentOrchestrator:
    return DeploymentOrchestrator(fake_backend, artifact_store)


@pytest.fixture
def rewards_pool() -> str:
    """Hardhat's fifth default account."""
    return "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65"
