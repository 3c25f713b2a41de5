"""
RootLoader: an isolated module namespace over an explicit classpath.

Framework code is imported only while a loader is activated. Activation
puts the loader's entries at the front of ``sys.path`` and its private
modules into ``sys.modules``; deactivation moves the modules it installed,
and those first imported from one of its entries during the activation,
back into the loader and restores the host's import state. Two loaders
over the same archives therefore never share module objects, and the host
interpreter never sees framework modules outside an activation.

Names the host has already imported are served from the host (parent
first). Activation mutates interpreter-wide state: a loader must not be
activated from two threads at once.
"""

from __future__ import annotations

import importlib
import logging
import os
import sys
from contextlib import contextmanager, nullcontext
from pathlib import Path
from types import MappingProxyType, ModuleType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from .exceptions import ClassNotFoundError

logger = logging.getLogger(__name__)


class RootLoader:
    def __init__(self, urls: Iterable[os.PathLike], parent: Optional["RootLoader"] = None):
        self.urls: Tuple[Path, ...] = tuple(Path(os.path.abspath(u)) for u in urls)
        self.parent = parent
        self._modules: Dict[str, ModuleType] = {}
        self._depth = 0
        self._saved_path: List[str] = []
        self._host_names: Set[str] = set()
        self._installed: List[str] = []

    def __repr__(self) -> str:
        return f"RootLoader({len(self.urls)} entries, {len(self._modules)} modules)"

    @property
    def modules(self) -> Mapping[str, ModuleType]:
        """Modules loaded through this loader, keyed by dotted name."""
        return MappingProxyType(self._modules)

    @property
    def active(self) -> bool:
        return self._depth > 0

    def owns(self, module: object) -> bool:
        """True when the module was loaded from one of this loader's entries."""
        locations = []
        filename = getattr(module, "__file__", None)
        if filename:
            locations.append(filename)
        else:
            locations.extend(getattr(module, "__path__", None) or [])
        for loc in locations:
            p = Path(os.path.abspath(loc))
            if any(p == url or p.is_relative_to(url) for url in self.urls):
                return True
        return False

    @contextmanager
    def activated(self) -> Iterator["RootLoader"]:
        """Make the loader's modules importable for the duration of the block."""
        if self._depth:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        with self.parent.activated() if self.parent is not None else nullcontext():
            self._enter()
            self._depth = 1
            try:
                yield self
            finally:
                self._depth = 0
                self._exit()

    def _enter(self) -> None:
        self._saved_path = list(sys.path)
        sys.path[:0] = [str(u) for u in self.urls]
        self._host_names = set(sys.modules)
        # host (and active parent) modules win over private ones
        self._installed = [name for name in self._modules if name not in self._host_names]
        importlib.invalidate_caches()
        for name in self._installed:
            sys.modules[name] = self._modules[name]

    def _exit(self) -> None:
        added = [name for name in sys.modules if name not in self._host_names]
        taken = set(self._installed)
        taken.update(name for name in added if self.owns(sys.modules[name]))
        for name in taken:
            module = sys.modules.pop(name, None)
            if module is not None:
                self._modules[name] = module
        self._host_names = set()
        self._installed = []
        sys.path[:] = self._saved_path
        logger.debug("Deactivated %r", self)

    def load_class(self, qualified_name: str) -> object:
        """Resolve ``package.module.Name`` to the attribute ``Name``."""
        module_name, _, attr = qualified_name.rpartition(".")
        if not module_name or not attr:
            raise ClassNotFoundError(f"not a qualified name: {qualified_name!r}")
        with self.activated():
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                raise ClassNotFoundError(f"{qualified_name}: {e}") from e
        try:
            return getattr(module, attr)
        except AttributeError as e:
            raise ClassNotFoundError(f"{qualified_name}: module has no attribute {attr!r}") from e
