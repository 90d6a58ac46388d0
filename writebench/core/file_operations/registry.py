"""Ordered catalog of benchmark entries."""

from writebench.config.models import BenchmarkSettings

from .models import StrategyDescriptor
from .modifiers import (
    FallocatePreallocation,
    ReadaheadAdvice,
    TruncatePreallocation,
    with_modifiers,
)
from .protocols import AdviceModifierProtocol, TransferStrategyProtocol
from .strategies import (
    DrainStrategy,
    MmapWriteStrategy,
    PipeSpliceStrategy,
    ReadWriteStrategy,
    SendfileStrategy,
)


def advice_variants(
    base: TransferStrategyProtocol,
) -> list[TransferStrategyProtocol]:
    """The base plus its advice, fallocate and truncate combinations."""
    combinations: list[tuple[AdviceModifierProtocol, ...]] = [
        (),
        (ReadaheadAdvice(),),
        (ReadaheadAdvice(), FallocatePreallocation()),
        (ReadaheadAdvice(), TruncatePreallocation()),
    ]
    return [with_modifiers(base, *modifiers) for modifiers in combinations]


def build_default_registry(
    settings: BenchmarkSettings | None = None,
) -> tuple[StrategyDescriptor, ...]:
    """Build the catalog in report order.

    The order is fixed here and never changes with measured results.
    """
    settings = settings or BenchmarkSettings()
    min_bs = settings.min_block_size

    def read_write(factor: int) -> ReadWriteStrategy:
        return ReadWriteStrategy(block_factor=factor, min_block_size=min_bs)

    strategies: list[TransferStrategyProtocol] = [
        DrainStrategy(chunk_size=settings.drain_chunk_size),
        ReadWriteStrategy(fixed_block_size=1024),
        read_write(1),
        read_write(4),
        *advice_variants(read_write(16)),
        read_write(256),
        *advice_variants(MmapWriteStrategy()),
        *advice_variants(PipeSpliceStrategy(chunk_size=settings.splice_chunk_size)),
        *advice_variants(SendfileStrategy()),
    ]
    return tuple(StrategyDescriptor.from_strategy(s) for s in strategies)


def missing_prerequisites(
    registry: tuple[StrategyDescriptor, ...],
) -> dict[str, list[str]]:
    """Map entry labels to the kernel features they lack on this system."""
    missing = {}
    for descriptor in registry:
        problems = descriptor.strategy.validate_prerequisites()
        if problems:
            missing[descriptor.label] = problems
    return missing
