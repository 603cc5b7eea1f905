"""
Engine backend that runs scripts through an external matrix engine command.

Each invocation runs

    <command> -f <script> -nvargs name=value ...

Matrix inputs are written as headerless CSV files (with a JSON ``.mtd``
metadata sidecar) into a temporary directory, scalars are passed as
``name=value`` and every output binding is passed as ``name=<path>``.
Output files the script produced are read back after it exits.
"""

from __future__ import annotations

import json
import subprocess
import tempfile
from pathlib import Path
from typing import Dict, List, Sequence

import pandas as pd

from mlogit.config import EXTERNAL_ENGINE_COMMAND, OUTPUT_FORMAT
from mlogit.engine.bundle import NAMED_PREFIX, ArgumentBundle
from mlogit.errors import EngineInvocationError
from mlogit.utils.logging_utils import get_logger
from mlogit.utils.paths import PathLike

logger = get_logger(__name__)


def write_matrix(df: pd.DataFrame, path: Path) -> None:
    """Write a matrix as headerless CSV plus its metadata file."""
    df.to_csv(path, header=False, index=False)
    metadata = {
        "data_type": "matrix",
        "format": OUTPUT_FORMAT,
        "header": False,
        "rows": int(df.shape[0]),
        "cols": int(df.shape[1]),
    }
    path.with_name(path.name + ".mtd").write_text(json.dumps(metadata))


def read_matrix(path: Path) -> pd.DataFrame:
    return pd.read_csv(path, header=None)


def _format_scalar(value) -> str:
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


class CommandLineEngine:
    """
    Runs engine scripts as a subprocess.

    Parameters
    ----------
    command : Sequence[str] | None
        Launcher command, e.g. ``["spark-submit", "SystemML.jar"]``.
        If None, uses EXTERNAL_ENGINE_COMMAND from config.
    workspace : str | Path | None
        Parent directory for temporary argument files.
    """

    def __init__(
        self,
        command: Sequence[str] | None = None,
        workspace: PathLike | None = None,
    ) -> None:
        self.command = list(command) if command is not None else list(EXTERNAL_ENGINE_COMMAND)
        self.workspace = workspace

    def build_command(self, bundle: ArgumentBundle, workdir: Path) -> List[str]:
        args = [*self.command, "-f", bundle.script, "-nvargs"]

        for name, value in bundle.inputs.items():
            path = workdir / f"{name}.csv"
            write_matrix(pd.DataFrame(value), path)
            args.append(f"{name}={path}")

        for name, value in bundle.params.items():
            args.append(f"{name[len(NAMED_PREFIX):]}={_format_scalar(value)}")

        for name in bundle.outputs:
            args.append(f"{name}={workdir / f'{name}.csv'}")

        return args

    def invoke(self, bundle: ArgumentBundle) -> Dict[str, pd.DataFrame]:
        with tempfile.TemporaryDirectory(dir=self.workspace) as tmp:
            workdir = Path(tmp)
            args = self.build_command(bundle, workdir)
            logger.info("Running engine command: %s", " ".join(args[:3]))

            try:
                subprocess.run(args, check=True, capture_output=True, text=True)
            except FileNotFoundError as exc:
                raise EngineInvocationError(
                    f"Engine command not found: {self.command[0]}"
                ) from exc
            except subprocess.CalledProcessError as exc:
                raise EngineInvocationError(
                    f"Script {bundle.script} failed with exit code "
                    f"{exc.returncode}: {exc.stderr.strip()[-500:]}"
                ) from exc

            outputs: Dict[str, pd.DataFrame] = {}
            for name in bundle.outputs:
                path = workdir / f"{name}.csv"
                if path.exists():
                    outputs[name] = read_matrix(path)
                else:
                    logger.warning("Engine produced no output for %s.", name)
            return outputs
