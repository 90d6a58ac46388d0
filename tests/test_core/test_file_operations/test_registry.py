"""Tests for the benchmark registry."""

import os
from dataclasses import FrozenInstanceError

import pytest

from writebench.config.models import BenchmarkSettings
from writebench.core.file_operations import (
    TransferMethod,
    build_default_registry,
    missing_prerequisites,
    modifiers,
)
from writebench.core.file_operations.registry import advice_variants
from writebench.core.file_operations.strategies import SendfileStrategy


EXPECTED_LABELS = [
    "dummy",
    "read+write 1k",
    "read+write bs",
    "read+write 4bs",
    "read+write 16bs",
    "read+write 16bs + advices",
    "read+write 16bs + advices + falloc",
    "read+write 16bs + advices + trunc",
    "read+write 256bs",
    "mmap+write",
    "mmap+write + advices",
    "mmap+write + advices + falloc",
    "mmap+write + advices + trunc",
    "pipe+splice",
    "pipe+splice + advices",
    "pipe+splice + advices + falloc",
    "pipe+splice + advices + trunc",
    "sendfile",
    "sendfile + advices",
    "sendfile + advices + falloc",
    "sendfile + advices + trunc",
]


class TestDefaultRegistry:
    """Test the catalog of benchmark entries."""

    def test_labels_in_report_order(self):
        registry = build_default_registry()

        assert [d.label for d in registry] == EXPECTED_LABELS

    def test_has_twenty_one_entries(self):
        assert len(build_default_registry()) == 21

    def test_labels_match_strategy_names(self):
        for descriptor in build_default_registry():
            assert descriptor.label == descriptor.strategy.name

    def test_labels_fit_report_column(self):
        for descriptor in build_default_registry():
            assert len(descriptor.label) <= 40

    def test_only_baseline_skips_output(self):
        registry = build_default_registry()

        non_writing = [d.label for d in registry if not d.strategy.writes_output]
        assert non_writing == ["dummy"]

    def test_methods_per_entry(self):
        methods = [d.strategy.method for d in build_default_registry()]

        assert methods.count(TransferMethod.DRAIN) == 1
        assert methods.count(TransferMethod.READ_WRITE) == 8
        assert methods.count(TransferMethod.MMAP_WRITE) == 4
        assert methods.count(TransferMethod.PIPE_SPLICE) == 4
        assert methods.count(TransferMethod.SENDFILE) == 4

    def test_registry_is_immutable(self):
        registry = build_default_registry()

        assert isinstance(registry, tuple)
        with pytest.raises(FrozenInstanceError):
            registry[0].label = "renamed"

    def test_settings_flow_into_strategies(self):
        settings = BenchmarkSettings(drain_chunk_size=4096, splice_chunk_size=16384)
        registry = {d.label: d.strategy for d in build_default_registry(settings)}

        assert registry["dummy"].chunk_size == 4096
        assert registry["pipe+splice"].chunk_size == 16384

    def test_order_is_stable(self):
        first = [d.label for d in build_default_registry()]
        second = [d.label for d in build_default_registry()]

        assert first == second


class TestAdviceVariants:
    """Test the four-way hint expansion of a base strategy."""

    def test_variants(self):
        base = SendfileStrategy()
        variants = advice_variants(base)

        assert variants[0] is base
        assert [v.name for v in variants] == [
            "sendfile",
            "sendfile + advices",
            "sendfile + advices + falloc",
            "sendfile + advices + trunc",
        ]


class TestMissingPrerequisites:
    """Test prerequisite discovery across the registry."""

    @pytest.mark.skipif(
        not hasattr(os, "splice"), reason="splice system call not available"
    )
    def test_nothing_missing_on_linux(self):
        assert missing_prerequisites(build_default_registry()) == {}

    def test_missing_fadvise_marks_advised_entries(self, monkeypatch):
        monkeypatch.delattr(modifiers.os, "posix_fadvise")

        missing = missing_prerequisites(build_default_registry())

        assert "read+write 16bs + advices" in missing
        assert "sendfile + advices + trunc" in missing
        assert "sendfile" not in missing
        assert missing["mmap+write + advices"] == ["posix_fadvise not available"]

    def test_missing_splice_marks_pipe_entries(self, monkeypatch):
        if hasattr(os, "splice"):
            monkeypatch.delattr(os, "splice")

        missing = missing_prerequisites(build_default_registry())

        assert sorted(label for label in missing if label.startswith("pipe")) == [
            "pipe+splice",
            "pipe+splice + advices",
            "pipe+splice + advices + falloc",
            "pipe+splice + advices + trunc",
        ]
        assert missing["pipe+splice"] == ["splice system call not available"]
