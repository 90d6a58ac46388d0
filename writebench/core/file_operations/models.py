"""Models for benchmark entries, samples and results."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from writebench.core.errors import InvariantViolationError

from .protocols import TransferStrategyProtocol


# Timed runs per registry entry
SAMPLES_PER_ENTRY = 3


@dataclass(frozen=True)
class FileDescriptorPair:
    """Input and output descriptors borrowed from the surrounding process."""

    input_fd: int
    output_fd: int

    @classmethod
    def standard_streams(cls) -> "FileDescriptorPair":
        """Standard input as the source, standard output as the destination."""
        return cls(input_fd=0, output_fd=1)


@dataclass(frozen=True)
class StrategyDescriptor:
    """A transfer capability paired with its report label."""

    strategy: TransferStrategyProtocol
    label: str

    @classmethod
    def from_strategy(cls, strategy: TransferStrategyProtocol) -> "StrategyDescriptor":
        """Describe a strategy under its own composed name."""
        return cls(strategy=strategy, label=strategy.name)


@dataclass(frozen=True)
class Sample:
    """One timed invocation of a strategy."""

    wall_ms: int
    user_cpu_ms: int
    system_cpu_ms: int
    bytes_transferred: int


class SampleSet:
    """Exactly three samples of one entry, sorted ascending by wall time."""

    def __init__(self, samples: tuple[Sample, ...]) -> None:
        self._samples = samples

    @classmethod
    def from_samples(cls, samples: Iterable[Sample]) -> "SampleSet":
        """Validate and sort raw samples.

        Raises:
            InvariantViolationError: If the count is not SAMPLES_PER_ENTRY or
                any duration is negative.
        """
        collected = tuple(samples)
        if len(collected) != SAMPLES_PER_ENTRY:
            raise InvariantViolationError(
                f"Expected {SAMPLES_PER_ENTRY} samples, got {len(collected)}"
            )
        if any(sample.wall_ms < 0 for sample in collected):
            raise InvariantViolationError(
                f"Negative duration in samples: {[s.wall_ms for s in collected]}"
            )
        return cls(tuple(sorted(collected, key=lambda sample: sample.wall_ms)))

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    @property
    def durations_ms(self) -> tuple[int, ...]:
        """Wall-clock durations in ascending order."""
        return tuple(sample.wall_ms for sample in self._samples)

    @property
    def fastest(self) -> Sample:
        return self._samples[0]


@dataclass
class BenchmarkResult:
    """Label and sorted samples of one registry entry."""

    label: str
    samples: SampleSet

    @property
    def durations_ms(self) -> tuple[int, ...]:
        return self.samples.durations_ms

    @property
    def throughput_mbps(self) -> float:
        """Throughput of the fastest sample in MB/s."""
        fastest = self.samples.fastest
        if fastest.wall_ms > 0:
            return (fastest.bytes_transferred / (1024 * 1024)) / (
                fastest.wall_ms / 1000
            )
        return 0.0

    @property
    def speed_summary(self) -> str:
        """Human-readable speed summary."""
        if self.throughput_mbps > 1000:
            return f"{self.throughput_mbps / 1024:.1f} GB/s"
        else:
            return f"{self.throughput_mbps:.1f} MB/s"


def format_report_line(result: BenchmarkResult, label_width: int = 40) -> str:
    """Render one report line: padded label, then each duration in ms."""
    label = f"{result.label:<{label_width}.{label_width}}"
    return label + "".join(f" {ms:8d}ms" for ms in result.durations_ms)
