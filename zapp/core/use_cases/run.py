"""
Run use case — load the configuration and execute the task tree.

The full vertical slice: config.yaml → params → task tree → execution.
Loading completes before anything runs, so a configuration error never
leaves a half-applied run behind.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from zapp.adapters.registry import AdapterRegistry, default_registry
from zapp.core.config.loader import (
    AssetLayout,
    RootConfig,
    default_config_dir,
    load_config,
    load_params,
)
from zapp.core.config.task_loader import load_task_tree
from zapp.core.engine.executor import ExecutionParams, ExecutionReport, execute_tree
from zapp.core.errors import FatalError
from zapp.core.models.task import Status, Task

logger = logging.getLogger(__name__)


@dataclass
class Provisioning:
    """Everything loaded from a config directory, ready to execute."""

    layout: AssetLayout
    config: RootConfig
    context: dict[str, Any]
    tree: Task


def load_provisioning(config_dir: Path | None = None) -> Provisioning:
    """Load config, parameters and the task tree.

    Raises:
        ConfigError: If anything in the config directory is invalid.
    """
    layout = AssetLayout(config_dir or default_config_dir())
    logger.debug("Using config directory %s", layout.root)

    config = load_config(layout)
    context = load_params(layout, config.params)
    tree = load_task_tree(layout, config.tasks)
    return Provisioning(layout=layout, config=config, context=context, tree=tree)


@dataclass
class RunResult:
    """Result of a provisioning run."""

    report: ExecutionReport | None = None
    config_dir: Path | None = None
    error: str | None = None

    @property
    def status(self) -> Status | None:
        return self.report.root_status if self.report else None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status != Status.FAILURE

    def to_dict(self) -> dict:
        result: dict = {"config_dir": str(self.config_dir) if self.config_dir else None}
        if self.error:
            result["error"] = self.error
            return result
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def run_provision(
    config_dir: Path | None = None,
    emit: Callable[[str], None] | None = click.echo,
    styled: bool = False,
    registry: AdapterRegistry | None = None,
    mock_mode: bool = False,
    capture_output: bool = False,
) -> RunResult:
    """Load the config directory and run its task tree.

    Args:
        config_dir: Config directory (default: resolved from the environment).
        emit: Sink for status lines; None to collect the report silently.
        styled: Colour the status word in emitted lines.
        registry: Pre-configured adapter registry.
        mock_mode: Report every leaf as successful without running it.
        capture_output: Capture shell task output instead of passing it through.

    Returns:
        RunResult with the execution report, or ``error`` set when a
        fatal error stopped the run.
    """
    result = RunResult()

    try:
        prov = load_provisioning(config_dir)
    except FatalError as e:
        result.error = str(e)
        return result

    result.config_dir = prov.layout.root

    if registry is None:
        registry = default_registry(mock_mode=mock_mode, capture_output=capture_output)

    params = ExecutionParams(
        context=prov.context,
        layout=prov.layout,
        registry=registry,
        emit=emit,
        styled=styled,
    )

    try:
        result.report = execute_tree(prov.tree, params)
    except FatalError as e:
        logger.error("Run aborted: %s", e)
        result.error = str(e)

    return result
