"""
zapp — declarative provisioning for a personal environment.

Reads a tree of tasks (copy, symlink, template, shell, groups) from
the config directory and runs it in declared order, printing one
status line per task.
"""

__version__ = "0.1.0"
