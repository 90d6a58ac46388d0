"""Pre-transfer hints that wrap a base transfer strategy.

Modifiers never move data themselves. They are composed around a base
strategy with ``with_modifiers`` and run in order before it.
"""

import os

from writebench.core.structlog_logger import get_struct_logger

from .enums import AdviceKind, TransferMethod
from .probe import file_size
from .protocols import AdviceModifierProtocol, TransferStrategyProtocol


logger = get_struct_logger(__name__)


class ReadaheadAdvice:
    """Tell the kernel the whole input will be read soon, sequentially."""

    @property
    def name(self) -> str:
        return "advices"

    @property
    def kind(self) -> AdviceKind:
        return AdviceKind.READAHEAD

    def validate_prerequisites(self) -> list[str]:
        missing = []
        if not hasattr(os, "posix_fadvise"):
            missing.append("posix_fadvise not available")
        return missing

    def apply(self, in_fd: int, out_fd: int) -> None:
        length = file_size(in_fd)
        for advice in (os.POSIX_FADV_WILLNEED, os.POSIX_FADV_SEQUENTIAL):
            try:
                os.posix_fadvise(in_fd, 0, length, advice)
            except OSError as e:
                logger.debug(
                    "advice_declined", advice=advice, length=length, error=str(e)
                )


class FallocatePreallocation:
    """Ask for input-length bytes of physical storage behind the output."""

    @property
    def name(self) -> str:
        return "falloc"

    @property
    def kind(self) -> AdviceKind:
        return AdviceKind.FALLOCATE

    def validate_prerequisites(self) -> list[str]:
        missing = []
        if not hasattr(os, "posix_fallocate"):
            missing.append("posix_fallocate not available")
        return missing

    def apply(self, in_fd: int, out_fd: int) -> None:
        length = file_size(in_fd)
        try:
            os.posix_fallocate(out_fd, 0, length)
        except OSError as e:
            # EINVAL for empty ranges, EOPNOTSUPP on filesystems without support
            logger.debug("fallocate_declined", length=length, error=str(e))


class TruncatePreallocation:
    """Extend the output's logical length to the input length up front."""

    @property
    def name(self) -> str:
        return "trunc"

    @property
    def kind(self) -> AdviceKind:
        return AdviceKind.TRUNCATE

    def validate_prerequisites(self) -> list[str]:
        return []

    def apply(self, in_fd: int, out_fd: int) -> None:
        os.ftruncate(out_fd, file_size(in_fd))


class ModifiedStrategy:
    """A base strategy preceded by one or more advice modifiers."""

    def __init__(
        self,
        base: TransferStrategyProtocol,
        modifiers: tuple[AdviceModifierProtocol, ...],
    ) -> None:
        self.base = base
        self.modifiers = modifiers

    @property
    def name(self) -> str:
        return " + ".join([self.base.name, *(m.name for m in self.modifiers)])

    @property
    def description(self) -> str:
        kinds = ", ".join(m.kind.value for m in self.modifiers)
        return f"{self.base.description} (after {kinds})"

    @property
    def method(self) -> TransferMethod:
        return self.base.method

    @property
    def writes_output(self) -> bool:
        return self.base.writes_output

    def validate_prerequisites(self) -> list[str]:
        missing = list(self.base.validate_prerequisites())
        for modifier in self.modifiers:
            missing.extend(modifier.validate_prerequisites())
        return missing

    def transfer(self, in_fd: int, out_fd: int) -> int:
        for modifier in self.modifiers:
            modifier.apply(in_fd, out_fd)
        return self.base.transfer(in_fd, out_fd)


def with_modifiers(
    base: TransferStrategyProtocol, *modifiers: AdviceModifierProtocol
) -> TransferStrategyProtocol:
    """Wrap ``base`` so ``modifiers`` run, in order, before every transfer."""
    if not modifiers:
        return base
    return ModifiedStrategy(base, tuple(modifiers))
