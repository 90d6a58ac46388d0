"""File transfer strategies and the benchmark harness that times them."""

from .benchmarks import FileOperationsBenchmark, create_benchmark_runner
from .enums import AdviceKind, TransferMethod
from .models import (
    SAMPLES_PER_ENTRY,
    BenchmarkResult,
    FileDescriptorPair,
    Sample,
    SampleSet,
    StrategyDescriptor,
    format_report_line,
)
from .protocols import AdviceModifierProtocol, TransferStrategyProtocol
from .registry import build_default_registry, missing_prerequisites


__all__ = [
    "AdviceKind",
    "AdviceModifierProtocol",
    "BenchmarkResult",
    "build_default_registry",
    "create_benchmark_runner",
    "FileDescriptorPair",
    "FileOperationsBenchmark",
    "format_report_line",
    "missing_prerequisites",
    "Sample",
    "SampleSet",
    "SAMPLES_PER_ENTRY",
    "StrategyDescriptor",
    "TransferMethod",
    "TransferStrategyProtocol",
]
