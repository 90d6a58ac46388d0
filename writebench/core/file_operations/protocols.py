"""Protocols for transfer strategies and advice modifiers."""

from typing import Protocol, runtime_checkable

from .enums import AdviceKind, TransferMethod


@runtime_checkable
class TransferStrategyProtocol(Protocol):
    """Copies the input descriptor's contents to the output descriptor."""

    @property
    def name(self) -> str:
        """Report label of the strategy."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description of the I/O path."""
        ...

    @property
    def method(self) -> TransferMethod:
        """Kernel I/O path the strategy exercises."""
        ...

    @property
    def writes_output(self) -> bool:
        """Whether the strategy produces output that can be verified."""
        ...

    def validate_prerequisites(self) -> list[str]:
        """Return missing kernel features; empty when the strategy can run."""
        ...

    def transfer(self, in_fd: int, out_fd: int) -> int:
        """Run the copy once and return the number of bytes transferred."""
        ...


@runtime_checkable
class AdviceModifierProtocol(Protocol):
    """Hint issued before a wrapped strategy runs; transfers no data."""

    @property
    def name(self) -> str:
        """Label fragment appended to the wrapped strategy's name."""
        ...

    @property
    def kind(self) -> AdviceKind:
        """Which hint this modifier issues."""
        ...

    def validate_prerequisites(self) -> list[str]:
        """Return missing kernel features; empty when the hint can be issued."""
        ...

    def apply(self, in_fd: int, out_fd: int) -> None:
        """Issue the hint for the given descriptor pair."""
        ...
