"""Timed, isolated execution of registry entries."""

import os
import resource
import time
from collections.abc import Callable, Iterable

from writebench.config.models import BenchmarkSettings
from writebench.core.errors import InvariantViolationError
from writebench.core.structlog_logger import (
    get_struct_logger,
    get_struct_logger_with_context,
)

from .models import (
    SAMPLES_PER_ENTRY,
    BenchmarkResult,
    FileDescriptorPair,
    Sample,
    SampleSet,
    StrategyDescriptor,
)
from .probe import file_size


logger = get_struct_logger(__name__)

ResultCallback = Callable[[BenchmarkResult], None]


def _cpu_ms(
    before: resource.struct_rusage, after: resource.struct_rusage
) -> tuple[int, int]:
    user = int((after.ru_utime - before.ru_utime) * 1000)
    system = int((after.ru_stime - before.ru_stime) * 1000)
    return user, system


class FileOperationsBenchmark:
    """Runs every registry entry three times and reports sorted durations.

    Each sample goes through reset, one timed run and verification. Entries
    and samples run strictly one after another; the reset step is what keeps
    runs from observing each other's output.
    """

    def __init__(
        self,
        settings: BenchmarkSettings | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], int] = time.monotonic_ns,
        usage: Callable[[int], resource.struct_rusage] = resource.getrusage,
    ) -> None:
        self.settings = settings or BenchmarkSettings()
        self._sleep = sleep
        self._clock = clock
        self._usage = usage

    def reset(self, pair: FileDescriptorPair) -> None:
        """Rewind both descriptors, empty the output and let the system settle."""
        os.lseek(pair.input_fd, 0, os.SEEK_SET)
        os.lseek(pair.output_fd, 0, os.SEEK_SET)
        os.ftruncate(pair.output_fd, 0)
        self._sleep(self.settings.settle_interval_seconds)

    def run_once(
        self, descriptor: StrategyDescriptor, pair: FileDescriptorPair
    ) -> Sample:
        """Invoke the strategy exactly once between two clock readings."""
        usage_before = self._usage(resource.RUSAGE_SELF)
        start = self._clock()
        transferred = descriptor.strategy.transfer(pair.input_fd, pair.output_fd)
        end = self._clock()
        usage_after = self._usage(resource.RUSAGE_SELF)

        user_ms, system_ms = _cpu_ms(usage_before, usage_after)
        return Sample(
            wall_ms=(end - start) // 1_000_000,
            user_cpu_ms=user_ms,
            system_cpu_ms=system_ms,
            bytes_transferred=transferred,
        )

    def verify(self, descriptor: StrategyDescriptor, pair: FileDescriptorPair) -> None:
        """Check the output is as long as the input.

        Raises:
            InvariantViolationError: If a writing strategy left the sizes unequal.
        """
        if not descriptor.strategy.writes_output:
            return
        in_size = file_size(pair.input_fd)
        out_size = file_size(pair.output_fd)
        if in_size != out_size:
            raise InvariantViolationError(
                f"'{descriptor.label}' produced {out_size} bytes, "
                f"input has {in_size}"
            )

    def run_entry(
        self, descriptor: StrategyDescriptor, pair: FileDescriptorPair
    ) -> BenchmarkResult:
        """Collect and aggregate the samples of one registry entry."""
        entry_logger = get_struct_logger_with_context(
            __name__, label=descriptor.label
        )
        samples = []
        for run in range(SAMPLES_PER_ENTRY):
            self.reset(pair)
            sample = self.run_once(descriptor, pair)
            self.verify(descriptor, pair)
            entry_logger.debug(
                "sample_complete",
                run=run,
                wall_ms=sample.wall_ms,
                user_cpu_ms=sample.user_cpu_ms,
                system_cpu_ms=sample.system_cpu_ms,
                bytes=sample.bytes_transferred,
            )
            samples.append(sample)

        result = BenchmarkResult(
            label=descriptor.label, samples=SampleSet.from_samples(samples)
        )
        entry_logger.info(
            "benchmark_entry_complete",
            durations_ms=list(result.durations_ms),
            speed=result.speed_summary,
        )
        return result

    def run_all(
        self,
        registry: Iterable[StrategyDescriptor],
        pair: FileDescriptorPair,
        on_result: ResultCallback | None = None,
    ) -> list[BenchmarkResult]:
        """Run every entry in registry order, reporting each as it finishes."""
        results = []
        for descriptor in registry:
            logger.debug(
                "benchmark_entry_started",
                label=descriptor.label,
                method=descriptor.strategy.method.value,
            )
            result = self.run_entry(descriptor, pair)
            if on_result is not None:
                on_result(result)
            results.append(result)
        return results


def create_benchmark_runner(
    settings: BenchmarkSettings | None = None,
) -> FileOperationsBenchmark:
    """Factory function to create benchmark runner."""
    return FileOperationsBenchmark(settings)
