from __future__ import annotations

import importlib
import pkgutil
from collections.abc import Iterable
from types import ModuleType

from pet_runner.kernel.step_registry import StepRegistry

HOOK_NAME = "register_steps"


class StepModuleError(ImportError):
    pass


def load_step_modules(module_names: Iterable[str], registry: StepRegistry) -> list[ModuleType]:
    """Import step libraries and let each register its steps.

    A plain module must define ``register_steps(registry)``. A package is
    walked and every submodule with the hook is used; a package without any
    such submodule is an error. Registration order follows the module list,
    then the package walk order.
    """
    loaded: list[ModuleType] = []
    seen: set[str] = set()
    for module_name in module_names:
        try:
            root = importlib.import_module(module_name)
        except ImportError as exc:
            raise StepModuleError(f"Cannot import step module {module_name!r}: {exc}") from exc
        candidates = _expand(root)
        hooked = [module for module in candidates if callable(getattr(module, HOOK_NAME, None))]
        if not hooked:
            raise StepModuleError(f"Step module {module_name!r} defines no {HOOK_NAME}(registry)")
        for module in hooked:
            if module.__name__ in seen:
                continue
            seen.add(module.__name__)
            getattr(module, HOOK_NAME)(registry)
            loaded.append(module)
    return loaded


def _expand(root: ModuleType) -> list[ModuleType]:
    module_path = getattr(root, "__path__", None)
    if module_path is None:
        return [root]
    modules = [root]
    for info in sorted(pkgutil.walk_packages(module_path, prefix=f"{root.__name__}."), key=lambda item: item.name):
        modules.append(importlib.import_module(info.name))
    return modules
