"""Data types and dataclasses for paradox-deployments library."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Ref:
    """Placeholder for the address of an earlier deployment step."""

    step: str

    def __repr__(self) -> str:
        return f"address_of({self.step!r})"


def address_of(step: str) -> Ref:
    """
    Reference the deployed address of an earlier step.

    Args:
        step: Name of the step whose address is needed

    Returns:
        Ref resolved to the address once that step is confirmed
    """
    return Ref(step)


ArgsBuilder = Callable[[Mapping[str, "DeploymentResult"]], Sequence[Any]]
LabelBuilder = Callable[[Sequence[Any]], str]


@dataclass(frozen=True)
class DeploymentStep:
    """A single contract deployment within a plan."""

    name: str  # Registry key, e.g., "Parapad"
    contract: Optional[str] = None  # Artifact name, defaults to name
    args: Union[Sequence[Any], ArgsBuilder] = ()
    value: int = 0  # Wei attached to the creation transaction
    depends_on: Tuple[str, ...] = ()  # Names read by a callable args builder
    label: Union[str, LabelBuilder, None] = None  # Display text, or built from the resolved args

    @property
    def contract_name(self) -> str:
        return self.contract or self.name

    @property
    def display_name(self) -> str:
        if callable(self.label):
            return self.name
        return self.label or self.name

    def describe(self, args: Sequence[Any]) -> str:
        """Display text for a step about to be deployed with the given arguments."""
        if callable(self.label):
            return self.label(args)
        return self.display_name

    def dependencies(self) -> List[str]:
        """
        Names of earlier steps this step declares it needs.

        Collects explicit depends_on entries plus every Ref found in a
        sequence of arguments (nested lists and tuples included). Callable
        builders are opaque, so only their depends_on is visible here.

        Returns:
            Dependency names in first-seen order, without duplicates
        """
        names: List[str] = []
        for name in self.depends_on:
            if name not in names:
                names.append(name)
        if not callable(self.args):
            for ref in _collect_refs(self.args):
                if ref.step not in names:
                    names.append(ref.step)
        return names


def _collect_refs(value: Any) -> List[Ref]:
    if isinstance(value, Ref):
        return [value]
    if isinstance(value, (list, tuple)):
        refs: List[Ref] = []
        for item in value:
            refs.extend(_collect_refs(item))
        return refs
    return []


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of a confirmed deployment step."""

    # Required fields
    step_name: str
    address: str  # Checksummed contract address
    transaction_hash: str  # 0x-prefixed hash
    confirmed: bool

    # Optional fields
    contract_name: Optional[str] = None
    block_number: Optional[int] = None
    value: int = 0
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract": self.contract_name or self.step_name,
            "address": self.address,
            "transaction_hash": self.transaction_hash,
            "block": self.block_number,
            "value": self.value,
            "confirmed": self.confirmed,
        }


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract as produced by Hardhat."""

    name: str  # e.g., "StakePool"
    abi: List[Dict[str, Any]]
    bytecode: str  # Creation bytecode, 0x-prefixed
    source_name: Optional[str] = None  # e.g., "contracts/StakePool.sol"
    path: Optional[Path] = field(default=None, compare=False)

    @property
    def constructor_abi(self) -> Optional[Dict[str, Any]]:
        for item in self.abi:
            if item.get("type") == "constructor":
                return item
        return None

    @property
    def constructor_inputs(self) -> List[Dict[str, Any]]:
        constructor = self.constructor_abi
        if constructor is None:
            return []
        return list(constructor.get("inputs", []))

    @property
    def is_payable_constructor(self) -> bool:
        """True if the constructor accepts native currency at creation time."""
        constructor = self.constructor_abi
        if constructor is None:
            # Solidity emits no constructor entry for an implicit, non-payable one
            return False
        if "stateMutability" in constructor:
            return constructor["stateMutability"] == "payable"
        # Pre-0.5 ABIs
        return bool(constructor.get("payable", False))


@dataclass(frozen=True)
class Confirmation:
    """Mined receipt of a contract-creation transaction."""

    transaction_hash: str
    contract_address: Optional[str]
    block_number: int
    status: int  # 1 success, 0 reverted
    gas_used: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status == 1 and self.contract_address is not None
