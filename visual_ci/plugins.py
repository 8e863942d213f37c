"""Loads collaborator factories from "module:attribute" import paths."""

from __future__ import annotations

import importlib
from typing import Any


def load_factory(import_path: str) -> Any:
    """Resolve "package.module:attr" (attr may be dotted) to the named object."""
    module_name, sep, attr_path = import_path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Expected 'module:attribute', got '{import_path}'")

    obj: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ValueError(f"'{module_name}' has no attribute '{attr_path}'") from e
    return obj
