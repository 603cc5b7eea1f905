"""
The trained multinomial logistic regression model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Tuple

import pandas as pd


@dataclass(frozen=True, eq=False)
class MLogitModel:
    """
    Coefficients and metadata of a fitted model.

    ``coefficients`` has one row per feature (the intercept last, if used)
    and one column per non-baseline class, so ``classes`` is its column
    count plus one.
    """

    coefficients: pd.DataFrame
    classes: int
    label_names: Tuple[str, ...]
    feature_names: Tuple[Hashable, ...]
    y_idx: int
    y_col_name: Hashable
    label_column_name: Hashable
    intercept: bool
    shift_and_rescale: bool
    model_path: str = ""
    transform_path: str = ""
    call: str = ""
    model_type: str = "classification"

    def coef(self) -> pd.DataFrame:
        """Return a copy of the coefficient table."""
        return self.coefficients.copy()

    def show(self) -> str:
        """Render model metadata followed by the coefficient table."""
        lines = [
            f"Model type: {self.model_type}",
            f"Call: {self.call}",
            f"Response: {self.y_col_name} (column {self.y_idx})",
            f"Classes: {self.classes} ({', '.join(self.label_names)})",
            f"Features: {', '.join(str(f) for f in self.feature_names)}",
            f"Intercept: {self.intercept}, shift and rescale: {self.shift_and_rescale}",
        ]
        if self.model_path:
            lines.append(f"Model path: {self.model_path}")
        lines += ["", "", "Coefficients: ", self.coef().to_string()]
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.show()
