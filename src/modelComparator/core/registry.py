"""
Model registry for modelComparator.

The registry is populated once at startup and frozen before tuning starts;
workers only read from it.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .base import EstimatorKind, ModelFamily
from .exceptions import DuplicateFamilyError, RegistryFrozenError
from ..utils.logger import get_logger


class ModelRegistry:
    """Name -> ModelFamily mapping with unique names."""

    def __init__(self):
        self.logger = get_logger("ModelRegistry")
        self._families: Dict[str, ModelFamily] = {}
        self._frozen = False

    def register_family(
        self,
        name: str,
        estimator_kind: Any,
        fixed_params: Optional[Mapping[str, Any]] = None,
        search_space: Optional[Mapping[str, Any]] = None
    ) -> ModelFamily:
        """
        Register a model family.

        Args:
            name: Unique family name
            estimator_kind: EstimatorKind or its string value
            fixed_params: Parameters held constant during tuning
            search_space: Parameter name -> search dimension

        Returns:
            The registered ModelFamily

        Raises:
            DuplicateFamilyError: If the name is already registered
            RegistryFrozenError: If the registry was frozen
            ValueError: If a parameter is not accepted by the estimator kind
        """
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register '{name}': registry is frozen")
        if not name:
            raise ValueError("Family name must be non-empty")
        if name in self._families:
            raise DuplicateFamilyError(f"Model family '{name}' is already registered")

        kind = EstimatorKind.parse(estimator_kind)
        fixed_params = dict(fixed_params or {})
        search_space = dict(search_space or {})

        overlap = set(fixed_params) & set(search_space)
        if overlap:
            raise ValueError(f"Parameters both fixed and tunable for '{name}': {sorted(overlap)}")
        unknown = (set(fixed_params) | set(search_space)) - kind.parameters
        if unknown:
            raise ValueError(
                f"Parameters {sorted(unknown)} are not valid for {kind.value}; "
                f"accepted: {sorted(kind.parameters)}"
            )

        family = ModelFamily(name=name, kind=kind, fixed_params=fixed_params, search_space=search_space)
        self._families[name] = family
        self.logger.debug(f"Registered {name} ({kind.value}) tunable={sorted(search_space)}")
        return family

    def freeze(self) -> 'ModelRegistry':
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def list_families(self) -> List[ModelFamily]:
        """Families in registration order."""
        return list(self._families.values())

    def names(self) -> List[str]:
        return list(self._families)

    def get(self, name: str) -> ModelFamily:
        if name not in self._families:
            raise KeyError(f"Unknown model family '{name}'. Registered: {self.names()}")
        return self._families[name]

    def subset(self, names: Iterable[str]) -> 'ModelRegistry':
        """New registry with the named families, in the given order."""
        registry = ModelRegistry()
        for name in names:
            family = self.get(name)
            registry.register_family(family.name, family.kind, family.fixed_params, family.search_space)
        return registry

    def __len__(self) -> int:
        return len(self._families)

    def __contains__(self, name: str) -> bool:
        return name in self._families


def build_default_registry(
    names: Optional[Iterable[str]] = None,
    overrides: Optional[Mapping[str, Mapping[str, Any]]] = None
) -> ModelRegistry:
    """
    Registry with the default model families.

    Args:
        names: Families to include, default all in configured order
        overrides: Family name -> fixed parameters to add or replace
            (e.g. fewer trees for a quick run)

    Raises:
        ValueError: If a name is not a default family
    """
    from ..config.model_configs import MODEL_CONFIGS

    selected = list(names) if names else list(MODEL_CONFIGS)
    overrides = overrides or {}
    registry = ModelRegistry()
    for name in selected:
        if name not in MODEL_CONFIGS:
            raise ValueError(f"Unknown model family '{name}'. Available: {list(MODEL_CONFIGS)}")
        spec = MODEL_CONFIGS[name]
        fixed = dict(spec["fixed_params"])
        fixed.update(overrides.get(name, {}))
        search_space = {k: v for k, v in spec["search_space"].items() if k not in fixed}
        registry.register_family(name, spec["kind"], fixed, search_space)
    return registry
