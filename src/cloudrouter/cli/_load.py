"""Loading the router behind a cloud function for ``cloudrouter invoke``/``actions``.

A target names where the function lives and, optionally, which object
in it to use::

    notes.app                 module on sys.path
    notes.app:router          explicit attribute
    functions/notes/app.py    source file, as deployed
    functions/notes/app.py:main

Without an attribute the module's ``router`` is used, falling back to
its ``main`` entry point. An entry point counts when it exposes its
router the way ``Router.entry()`` does.
"""

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from cloudrouter.router import Router

DEFAULT_ATTRIBUTES = ("router", "main")


def _import_source(path: Path) -> ModuleType:
    if not path.is_file():
        msg = f"no function source at {str(path)!r}"
        raise FileNotFoundError(msg)
    name = f"_cloudrouter_function_{path.stem}"
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        msg = f"can not load {str(path)!r} as a Python module"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    # Sibling modules of the function source import as they do when deployed
    sys.path.insert(0, str(path.parent))
    try:
        spec.loader.exec_module(module)
    finally:
        sys.path.remove(str(path.parent))
    return module


def _import(location: str) -> ModuleType:
    if location.endswith(".py"):
        return _import_source(Path(location))
    return importlib.import_module(location)


def _router_of(obj: Any) -> Router | None:
    if isinstance(obj, Router):
        return obj
    exposed = getattr(obj, "router", None)
    return exposed if isinstance(exposed, Router) else None


def load_router(target: str) -> Router:
    """Return the Router a cloud function target points at.

    Raises:
        ImportError: If the module can not be imported.
        FileNotFoundError: If a ``.py`` target does not exist.
        AttributeError: If the attribute (or every default) is missing.
        TypeError: If the object is neither a Router nor an entry point
            exposing one.
    """
    location, sep, attr_name = target.rpartition(":")
    if not sep:
        location, attr_name = target, ""
    module = _import(location)

    names = (attr_name,) if attr_name else DEFAULT_ATTRIBUTES
    for name in names:
        if hasattr(module, name):
            break
    else:
        msg = f"{location!r} defines none of {', '.join(names)}"
        raise AttributeError(msg)

    router = _router_of(getattr(module, name))
    if router is None:
        kind = type(getattr(module, name)).__name__
        msg = f"{location}:{name} is a {kind}, not a Router or an entry point from Router.entry()"
        raise TypeError(msg)
    return router
