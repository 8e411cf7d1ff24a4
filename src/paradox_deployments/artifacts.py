"""Hardhat artifact parsing and lookup for paradox-deployments library."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .constants import BUILD_INFO_DIR
from .exceptions import ArtifactNotFoundError, InvalidArtifactError
from .paths import resolve_artifacts_dir
from .types import ContractArtifact

logger = logging.getLogger(__name__)


def parse_hardhat_artifact(file_path: Path) -> ContractArtifact:
    """
    Parse a Hardhat compilation artifact.

    Args:
        file_path: Path to artifacts/<source>.sol/<Contract>.json

    Returns:
        ContractArtifact with ABI and creation bytecode

    Raises:
        InvalidArtifactError: If the file is not valid JSON, has no ABI, or has
            no creation bytecode (interfaces and abstract contracts)
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidArtifactError(f"Artifact is not valid JSON: {file_path}: {e}") from e

    if "abi" not in data:
        raise InvalidArtifactError(f"Missing ABI in artifact file: {file_path}")

    bytecode = data.get("bytecode")
    # Hardhat writes "0x" for contracts that cannot be deployed
    if not bytecode or bytecode == "0x":
        raise InvalidArtifactError(f"Missing creation bytecode in artifact file: {file_path}")

    return ContractArtifact(
        name=data.get("contractName", file_path.stem),
        abi=data["abi"],
        bytecode=bytecode,
        source_name=data.get("sourceName"),
        path=file_path,
    )


class ArtifactStore:
    """Resolves contract names to compiled Hardhat artifacts."""

    def __init__(self, artifacts_dir: Optional[Union[Path, str]] = None):
        """
        Initialize the artifact store.

        Args:
            artifacts_dir: Hardhat artifacts directory
                           If None, uses ./artifacts
        """
        self.artifacts_dir = resolve_artifacts_dir(artifacts_dir)
        self._cache: Dict[str, ContractArtifact] = {}

    def find(self, contract: str) -> Path:
        """
        Locate the artifact file for a contract.

        Accepts a bare name ("Lock") or a fully qualified one
        ("contracts/Lock.sol:Lock").

        Args:
            contract: Contract reference

        Returns:
            Path to the artifact JSON file

        Raises:
            ArtifactNotFoundError: If no file matches, or a bare name matches
                more than one source
        """
        if not self.artifacts_dir.exists():
            raise ArtifactNotFoundError(
                f"Artifacts directory not found at {self.artifacts_dir}. "
                "Run `npx hardhat compile` first."
            )

        if ":" in contract:
            source_name, contract_name = contract.rsplit(":", 1)
            path = self.artifacts_dir / source_name / f"{contract_name}.json"
            if not path.exists():
                raise ArtifactNotFoundError(f"Artifact for '{contract}' not found at {path}")
            return path

        candidates = self._candidates(contract)
        if not candidates:
            raise ArtifactNotFoundError(
                f"Artifact for contract '{contract}' not found under {self.artifacts_dir}"
            )
        if len(candidates) > 1:
            sources = ", ".join(str(p.parent.relative_to(self.artifacts_dir)) for p in candidates)
            raise ArtifactNotFoundError(
                f"Contract name '{contract}' is ambiguous ({sources}); "
                "use a fully qualified name like 'contracts/X.sol:X'"
            )
        return candidates[0]

    def _candidates(self, contract: str) -> List[Path]:
        build_info = self.artifacts_dir / BUILD_INFO_DIR
        return sorted(
            p
            for p in self.artifacts_dir.rglob(f"{contract}.json")
            if build_info not in p.parents
        )

    def load(self, contract: str) -> ContractArtifact:
        """
        Load an artifact, reading each file at most once.

        Args:
            contract: Contract reference (bare or fully qualified)

        Returns:
            Parsed ContractArtifact

        Raises:
            ArtifactNotFoundError: If the artifact cannot be located
            InvalidArtifactError: If the artifact cannot be deployed
        """
        if contract not in self._cache:
            path = self.find(contract)
            logger.debug("Loading artifact for %s from %s", contract, path)
            self._cache[contract] = parse_hardhat_artifact(path)
        return self._cache[contract]
