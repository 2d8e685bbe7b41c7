"""Router configuration.

RouterConfig is a frozen dataclass, immutable after creation, shared
read-only by every concurrent invocation.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# Failure code used when an error carries no code of its own
FAILED_CODE = "FAILED"

SERVICE_DIR = "service"
CONTROLLER_DIR = "controller"


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(debug=True, base_dir="/var/task")

    ``middleware`` lists middleware registered right after the built-in
    transport middleware, in order. Each item is a callable or a
    ``(callable, MatchOptions | None)`` pair.
    """

    base_dir: str | Path = "."
    debug: bool = False

    # Handler roots, relative to base_dir
    controller_dir: str = CONTROLLER_DIR
    service_dir: str = SERVICE_DIR

    failed_code: Any = FAILED_CODE

    middleware: tuple[Callable[..., Any] | tuple[Callable[..., Any], Any], ...] = ()

    @property
    def controller_path(self) -> Path:
        """Absolute directory holding controller modules."""
        return (Path(self.base_dir) / self.controller_dir).resolve()

    @property
    def service_path(self) -> Path:
        """Absolute directory holding service modules."""
        return (Path(self.base_dir) / self.service_dir).resolve()
