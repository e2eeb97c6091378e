"""Import a generated parser package from its output directory."""

from __future__ import annotations

import hashlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from .paths import PACKAGE_MARKER


def load_generated(root: str | Path, *, reload: bool = False) -> ModuleType:
    """Import the package written under ``root`` and return it.

    The package is registered under a name derived from its absolute path so
    its relative imports (``.parser``, ``.antlr``) resolve. Later calls return
    the already imported package; pass ``reload=True`` after regenerating
    ``root`` in the same process to import it afresh.
    """
    root = Path(root).expanduser().resolve()
    init = root / PACKAGE_MARKER
    if not init.is_file():
        raise FileNotFoundError(f"No generated package at {root}")
    digest = hashlib.sha1(str(root).encode("utf-8")).hexdigest()[:12]
    name = f"_parsegen_{digest}"
    if reload:
        for loaded in [m for m in sys.modules if m == name or m.startswith(name + ".")]:
            del sys.modules[loaded]
    elif name in sys.modules:
        return sys.modules[name]
    spec = importlib.util.spec_from_file_location(
        name, init, submodule_search_locations=[str(root)]
    )
    if spec is None or spec.loader is None:  # pragma: no cover
        raise ImportError(f"Cannot load generated package from {root}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(name, None)
        raise
    return module


__all__ = ["load_generated"]
