"""
Training configuration for multinomial logistic regression.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Hashable, Optional, Tuple, Union

from mlogit.config import INTERCEPT
from mlogit.data.schema import ResponseColumn


@dataclass(frozen=True)
class TrainingConfig:
    """
    Configuration for one training call.

    Optional numeric parameters use None for "not supplied": the engine
    then applies its own default, which is not the same as passing one.

    Attributes
    ----------
    intercept : bool
        Whether an intercept term is fitted.
    shift_and_rescale : bool
        Whether features are shifted to zero mean and unit variance before
        fitting. Requires ``intercept``.
    tolerance : float | None
        Convergence tolerance.
    outer_iter_max : int | None
        Maximum number of outer (Newton) iterations.
    inner_iter_max : int | None
        Maximum number of inner (conjugate gradient) iterations, 0 = no max.
    reg_lambda : float | None
        L2 regularization strength.
    label_names : tuple[str, ...]
        Class names in class-number order; empty to synthesize them.
    feature_names : tuple[Hashable, ...]
        Feature column labels of the training matrix, response excluded.
    response : ResponseColumn | Hashable | None
        Response column identity; a name or position until resolved.
    """

    intercept: bool = True
    shift_and_rescale: bool = False
    tolerance: Optional[float] = None
    outer_iter_max: Optional[int] = None
    inner_iter_max: Optional[int] = None
    reg_lambda: Optional[float] = None
    label_names: Tuple[str, ...] = ()
    feature_names: Tuple[Hashable, ...] = ()
    response: Union[ResponseColumn, Hashable, None] = None

    @property
    def model_feature_names(self) -> Tuple[Hashable, ...]:
        """Coefficient row names: features, then the intercept if fitted."""
        if self.intercept:
            return self.feature_names + (INTERCEPT,)
        return self.feature_names

    def describe_call(self) -> str:
        """Render the user-facing training parameters as a call string."""
        skip = {"feature_names", "response"}
        parts = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in skip or value is None or value == ():
                continue
            parts.append(f"{f.name}={value!r}")
        response = self.response.name if isinstance(self.response, ResponseColumn) else self.response
        return f"mlogit(response={response!r}, {', '.join(parts)})"
