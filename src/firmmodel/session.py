"""Presentation-layer state for the interactive firm model.

A ModelSession owns the current parameters (the slider values) and hands
them by value to the engine. The last result is kept and reused until the
parameters or the sampling settings change.
"""

from dataclasses import replace
from typing import Any, Optional, Tuple

from .config import Settings, get_settings
from .logging import get_logger
from .models.engine import ModelResult, compute_model
from .models.parameters import FirmParameters
from .validation.parameter_validation import log_parameter_warnings

logger = get_logger(__name__)


class ModelSession:
    """Current parameters plus an equality-gated cache of the last result."""

    def __init__(
        self,
        parameters: Optional[FirmParameters] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._parameters = parameters or FirmParameters.defaults()
        self.settings = settings or get_settings()
        self._cache_key: Optional[Tuple[Any, ...]] = None
        self._result: Optional[ModelResult] = None
        self.recompute_count = 0

    @property
    def parameters(self) -> FirmParameters:
        return self._parameters

    @parameters.setter
    def parameters(self, value: FirmParameters) -> None:
        self._parameters = value

    def update(self, **changes: float) -> FirmParameters:
        """Replace one or more parameter values.

        Raises:
            TypeError: If a name is not a parameter field
        """
        self._parameters = replace(self._parameters, **changes)
        return self._parameters

    def _key(self) -> Tuple[Any, ...]:
        s = self.settings
        return (
            self._parameters.as_tuple(),
            s.q_max,
            s.display_step,
            s.root_scan_step,
            s.bisection_iterations,
            s.root_dedup_tolerance,
            s.profit_limit_min_gap,
        )

    @property
    def result(self) -> ModelResult:
        """Series and markers for the current parameters."""
        key = self._key()
        if self._result is not None and key == self._cache_key:
            return self._result

        log_parameter_warnings(self._parameters)
        s = self.settings
        self._result = compute_model(
            self._parameters,
            q_max=s.q_max,
            step=s.display_step,
            scan_step=s.root_scan_step,
            iterations=s.bisection_iterations,
            tolerance=s.root_dedup_tolerance,
            min_gap=s.profit_limit_min_gap,
        )
        self._cache_key = key
        self.recompute_count += 1
        return self._result
