"""
Argument protocol for one engine script invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Tuple

import pandas as pd

NAMED_PREFIX = "$"


def _named(name: str) -> str:
    return name if name.startswith(NAMED_PREFIX) else NAMED_PREFIX + name


@dataclass(frozen=True, eq=False)
class ArgumentBundle:
    """
    Inputs, named parameters and output bindings for a single script run.

    Attributes
    ----------
    script : str
        Path of the engine script to execute.
    inputs : Mapping[str, pandas.DataFrame]
        Matrix-valued arguments, in the order they were added.
    params : Mapping[str, Any]
        Named scalar arguments. Keys carry the ``$`` prefix that marks an
        argument as named rather than positional.
    outputs : tuple[str, ...]
        Names under which the engine's results are returned.
    """

    script: str
    inputs: Mapping[str, pd.DataFrame] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)
    outputs: Tuple[str, ...] = ()

    def with_inputs(self, **inputs: pd.DataFrame) -> "ArgumentBundle":
        return replace(self, inputs={**self.inputs, **inputs})

    def with_params(self, **params: Any) -> "ArgumentBundle":
        named = {_named(k): v for k, v in params.items()}
        return replace(self, params={**self.params, **named})

    def with_outputs(self, *names: str) -> "ArgumentBundle":
        return replace(self, outputs=self.outputs + tuple(names))

    def param(self, name: str, default: Any = None) -> Any:
        """Look up a named parameter with or without its ``$`` prefix."""
        return self.params.get(_named(name), default)
