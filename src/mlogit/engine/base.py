"""
The engine contract and backend lookup.

An engine is an opaque synchronous service: it receives an
`ArgumentBundle`, runs the script, and returns the result artifacts keyed
by the bundle's output bindings. Failures surface as
`EngineInvocationError`.
"""

from __future__ import annotations

from typing import Mapping, Protocol

import pandas as pd

from mlogit.config import DEFAULT_ENGINE
from mlogit.engine.bundle import ArgumentBundle
from mlogit.errors import EngineInvocationError

EngineOutputs = Mapping[str, pd.DataFrame]


class Engine(Protocol):
    def invoke(self, bundle: ArgumentBundle) -> EngineOutputs:
        ...


def get_engine(name: str | None = None) -> Engine:
    """
    Return an engine backend by name.

    Parameters
    ----------
    name : str | None
        ``"local"`` or ``"external"``. If None, uses DEFAULT_ENGINE.

    Returns
    -------
    Engine
        A ready-to-use engine instance.
    """
    # Imported here so the protocol module stays free of backend imports
    from mlogit.engine.external import CommandLineEngine
    from mlogit.engine.local import LocalEngine

    backend = name or DEFAULT_ENGINE
    if backend == "local":
        return LocalEngine()
    if backend == "external":
        return CommandLineEngine()
    raise EngineInvocationError(f"Unknown engine backend: {backend!r}")
