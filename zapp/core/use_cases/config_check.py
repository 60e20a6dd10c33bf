"""
Config check use case — load everything, run nothing, report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from zapp.adapters.registry import AdapterRegistry, default_registry
from zapp.core.config.loader import FILES_DIR
from zapp.core.errors import ConfigError
from zapp.core.models.task import CopyTask, SymlinkTask, Task, TemplateTask
from zapp.core.services.template_renderer import TemplateRenderer
from zapp.core.use_cases.run import load_provisioning


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config_dir: Path | None = None
    tree: Task | None = None
    param_count: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def task_count(self) -> int:
        """Number of leaf tasks in the tree."""
        if self.tree is None:
            return 0
        return sum(1 for _, t in self.tree.walk() if not t.is_group)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_dir": str(self.config_dir) if self.config_dir else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "task_count": self.task_count,
            "param_count": self.param_count,
        }


def check_config(
    config_dir: Path | None = None,
    registry: AdapterRegistry | None = None,
) -> ConfigCheckResult:
    """Validate the config directory and report issues.

    Args:
        config_dir: Config directory (default: resolved from the environment).
        registry: Adapters whose availability is checked (default: the real ones).

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    try:
        prov = load_provisioning(config_dir)
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    result.config_dir = prov.layout.root
    result.tree = prov.tree
    result.param_count = len(prov.context)

    if not prov.tree.children:
        result.warnings.append("No tasks defined. Nothing will run.")

    renderer = TemplateRenderer(prov.layout.templates_dir)

    for _, task in prov.tree.walk():
        v = task.variant

        if task.privileged:
            result.warnings.append(
                f"Task '{task.name}' requires elevated privileges and will be skipped."
            )

        if task.kind == "unknown":
            result.warnings.append("Unrecognised task entry will be skipped.")
        elif isinstance(v, (CopyTask, SymlinkTask)):
            src = prov.layout.asset(FILES_DIR, v.src)
            if not src.exists():
                result.warnings.append(f"Task '{task.name}': source does not exist: {src}")
        elif isinstance(v, TemplateTask) and not renderer.exists(v.src):
            result.warnings.append(f"Task '{task.name}': template not found: {v.src}")

    kinds = sorted({t.kind for _, t in prov.tree.walk() if t.kind not in ("group", "unknown")})
    if registry is None:
        registry = default_registry()
    for kind, adapter in registry.unavailable(kinds).items():
        result.errors.append(f"Cannot run {kind} tasks: {adapter!r} is unavailable")

    result.valid = len(result.errors) == 0
    return result
