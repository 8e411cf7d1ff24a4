"""Deployment plans and the result registry."""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .exceptions import InvalidPlanError, UnresolvedDependencyError
from .types import DeploymentResult, DeploymentStep, Ref


class ResultRegistry(Mapping):
    """
    Results of the steps confirmed so far, keyed by step name.

    Argument builders receive this mapping read-only. Looking up a step that
    has not been recorded raises UnresolvedDependencyError instead of KeyError,
    so an ordering mistake in a plan is reported as such.
    """

    def __init__(self) -> None:
        self._results: Dict[str, DeploymentResult] = {}

    def __getitem__(self, name: str) -> DeploymentResult:
        try:
            return self._results[name]
        except KeyError:
            raise UnresolvedDependencyError(
                f"Step '{name}' has not been deployed yet", missing=name
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._results

    def __iter__(self) -> Iterator[str]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def get(self, name: str, default: Optional[DeploymentResult] = None) -> Optional[DeploymentResult]:
        return self._results.get(name, default)

    def address_of(self, name: str) -> str:
        return self[name].address

    def record(self, result: DeploymentResult) -> None:
        """Append a confirmed result. Each step is recorded once per run."""
        if result.step_name in self._results:
            raise InvalidPlanError(
                f"Step '{result.step_name}' was already recorded", step_name=result.step_name
            )
        self._results[result.step_name] = result

    def results(self) -> List[DeploymentResult]:
        """Recorded results in the order they were confirmed."""
        return list(self._results.values())


class DeploymentPlan:
    """Ordered, read-only sequence of deployment steps."""

    def __init__(self, steps: Iterable[DeploymentStep]):
        self._steps: Tuple[DeploymentStep, ...] = tuple(steps)

    def __iter__(self) -> Iterator[DeploymentStep]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, index: int) -> DeploymentStep:
        return self._steps[index]

    def __repr__(self) -> str:
        return f"DeploymentPlan({[s.name for s in self._steps]!r})"

    @property
    def names(self) -> List[str]:
        return [s.name for s in self._steps]

    def step(self, name: str) -> DeploymentStep:
        for s in self._steps:
            if s.name == name:
                return s
        raise InvalidPlanError(f"No step named '{name}' in plan", step_name=name)

    def validate(self) -> None:
        """
        Check the plan before anything is submitted.

        Every declared dependency (Ref arguments and depends_on names) must
        name a step that appears earlier in the plan.

        Raises:
            InvalidPlanError: If a name is empty or duplicated, or a value is negative
            UnresolvedDependencyError: If a step depends on itself, a later
                step, or an unknown step
        """
        declared: List[str] = []
        for s in self._steps:
            if not s.name:
                raise InvalidPlanError("Deployment step name must not be empty")
            if s.name in declared:
                raise InvalidPlanError(f"Duplicate step name '{s.name}'", step_name=s.name)
            if s.value < 0:
                raise InvalidPlanError(
                    f"Step '{s.name}' attaches a negative value ({s.value})", step_name=s.name
                )

            for dependency in s.dependencies():
                if dependency not in declared:
                    raise UnresolvedDependencyError(
                        f"Step '{s.name}' depends on '{dependency}', "
                        "which is not declared by an earlier step",
                        step_name=s.name,
                        missing=dependency,
                    )

            declared.append(s.name)


def resolve_args(step: DeploymentStep, registry: ResultRegistry) -> List[Any]:
    """
    Build concrete constructor arguments for a step.

    Args:
        step: Step being executed
        registry: Results of the steps already confirmed

    Returns:
        Constructor arguments with every Ref replaced by an address

    Raises:
        UnresolvedDependencyError: If an argument refers to a step missing from
            the registry
    """
    try:
        if callable(step.args):
            raw = step.args(registry)
        else:
            raw = step.args
        return [_resolve_value(value, registry) for value in raw]
    except UnresolvedDependencyError as e:
        raise UnresolvedDependencyError(
            f"Cannot build arguments for step '{step.name}': {e}",
            step_name=step.name,
            missing=e.missing,
        ) from e


def _resolve_value(value: Any, registry: ResultRegistry) -> Any:
    if isinstance(value, Ref):
        return registry.address_of(value.step)
    if isinstance(value, list):
        return [_resolve_value(v, registry) for v in value]
    if isinstance(value, tuple):
        return tuple(_resolve_value(v, registry) for v in value)
    return value
