"""
Tests for domain models — task tree, status aggregation, receipts.
"""

import pytest
from pydantic import ValidationError

from zapp.core.models import (
    CopyTask,
    GroupTask,
    Receipt,
    ShellTask,
    Status,
    Task,
    UnknownTask,
    aggregate_status,
)


def _shell(name: str, command: str = "true") -> Task:
    return Task(name=name, variant=ShellTask(command=command))


class TestAggregateStatus:
    def test_empty_is_success(self):
        assert aggregate_status([]) == Status.SUCCESS

    def test_all_success(self):
        assert aggregate_status([Status.SUCCESS, Status.SUCCESS]) == Status.SUCCESS

    def test_all_skipped_is_success(self):
        assert aggregate_status([Status.SKIPPED, Status.SKIPPED]) == Status.SUCCESS

    def test_any_failure(self):
        statuses = [Status.SUCCESS, Status.SKIPPED, Status.FAILURE, Status.SUCCESS]
        assert aggregate_status(statuses) == Status.FAILURE

    def test_accepts_generator(self):
        assert aggregate_status(s for s in [Status.FAILURE]) == Status.FAILURE


class TestStatus:
    def test_rendering(self):
        assert str(Status.SUCCESS) == "SUCCESS"
        assert str(Status.FAILURE) == "FAILURE"
        assert str(Status.SKIPPED) == "SKIPPED"


class TestTask:
    def test_validate_discriminated_variant(self):
        task = Task.model_validate({
            "name": "dotfile",
            "variant": {"kind": "copy", "src": "a.txt", "dst": "~/a.txt", "mode": "600"},
        })
        assert task.kind == "copy"
        assert isinstance(task.variant, CopyTask)
        assert task.variant.mode == 0o600

    def test_mode_defaults_to_none(self):
        task = Task.model_validate({"variant": {"kind": "template", "src": "t", "dst": "d"}})
        assert task.variant.mode is None

    def test_invalid_mode_rejected(self):
        with pytest.raises(ValidationError):
            Task.model_validate({
                "variant": {"kind": "copy", "src": "a", "dst": "b", "mode": "rwx"},
            })

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            Task.model_validate({"variant": {"kind": "rsync", "src": "a"}})

    def test_defaults(self):
        task = _shell("s")
        assert task.privileged is False
        assert task.children == ()
        assert not task.is_group

    def test_frozen(self):
        task = _shell("s")
        with pytest.raises(ValidationError):
            task.name = "other"

    def test_group_helper(self):
        group = Task.group("g", [_shell("a"), _shell("b")])
        assert group.is_group
        assert isinstance(group.variant, GroupTask)
        assert [c.name for c in group.children] == ["a", "b"]

    def test_unknown_helper(self):
        task = Task.unknown()
        assert task.name == "unknown"
        assert isinstance(task.variant, UnknownTask)

    def test_walk_preorder_with_depth(self):
        tree = Task.group("main", [
            Task.group("setup", [_shell("a"), _shell("b")]),
            _shell("c"),
        ])
        assert [(d, t.name) for d, t in tree.walk()] == [
            (0, "main"),
            (1, "setup"),
            (2, "a"),
            (2, "b"),
            (1, "c"),
        ]

    def test_count(self):
        tree = Task.group("main", [Task.group("g", [_shell("a")]), _shell("b")])
        assert tree.count() == 4

    def test_describe(self):
        copy = Task.model_validate({
            "variant": {"kind": "copy", "src": "a", "dst": "~/a", "mode": "644"},
        })
        assert copy.describe() == "copy a → ~/a (mode 0644)"
        assert _shell("s", "echo hi").describe() == "shell: echo hi"
        assert Task.unknown().describe() == "unknown"


class TestReceipt:
    def test_success(self):
        r = Receipt.success(adapter="shell", task_name="t", output="done")
        assert r.ok
        assert not r.failed
        assert r.status == Status.SUCCESS

    def test_failure(self):
        r = Receipt.failure(adapter="shell", task_name="t", error="boom")
        assert r.failed
        assert r.error == "boom"

    def test_skip(self):
        r = Receipt.skip(adapter="shell", reason="not now")
        assert r.status == Status.SKIPPED
        assert r.output == "not now"
        assert not r.ok and not r.failed
