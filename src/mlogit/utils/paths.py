"""
Helper functions for file and directory paths used in mlogit.
"""

import uuid
from pathlib import Path
from typing import Union

from mlogit.config import (
    ALGORITHMS_DIR,
    WORKSPACE_DIR,
    MODELS_DIR,
    DEFAULT_MODEL_FILENAME,
    STATISTICS_FILENAME,
)


PathLike = Union[str, Path]


def get_script_path(script_name: str) -> str:
    """Return the full path of an engine script as a string."""
    return str(ALGORITHMS_DIR / script_name)


def get_workspace_dir(name: str = "mlogit") -> Path:
    """
    Return (and create) a scratch directory inside the workspace.

    Parameters
    ----------
    name : str
        Subdirectory name, usually the model type.

    Returns
    -------
    Path
        Existing directory for engine side-channel files.
    """
    path = WORKSPACE_DIR / name
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_statistics_path(workspace: PathLike | None = None) -> Path:
    """
    Return a fresh statistics file location for one prediction call.

    Each call gets its own file name so concurrent predictions never
    write to the same file.
    """
    directory = Path(workspace) if workspace is not None else get_workspace_dir()
    directory.mkdir(parents=True, exist_ok=True)
    stem = Path(STATISTICS_FILENAME).stem
    suffix = Path(STATISTICS_FILENAME).suffix
    return directory / f"{stem}_{uuid.uuid4().hex}{suffix}"


def get_model_path(filename: str | None = None) -> Path:
    """
    Return the path to a model artifact file.

    Parameters
    ----------
    filename : str | None
        Specific filename, or None for the default model file.

    Returns
    -------
    Path
        Full path to the model artifact.
    """
    if filename is None:
        filename = DEFAULT_MODEL_FILENAME
    return MODELS_DIR / filename
