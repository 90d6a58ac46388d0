"""Error handling decorators for CLI commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

import typer

from writebench.core.errors import InvariantViolationError, UsageError, WriteBenchError
from writebench.core.structlog_logger import get_struct_logger


__all__ = ["handle_errors", "print_stack_trace_if_verbose"]

logger = get_struct_logger(__name__)

USAGE_EXIT_CODE = 2


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to turn write-bench failures into exit codes.

    A usage error prints the usage line and exits with status 2. Everything
    else is fatal: it is logged and the command exits with status 1.

    Args:
        func: The function to decorate

    Returns:
        Decorated function with error handling
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except UsageError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(USAGE_EXIT_CODE) from e
        except InvariantViolationError as e:
            logger.error("invariant_violation", error=str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except WriteBenchError as e:
            logger.error("benchmark_error", error=str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except OSError as e:
            logger.error("io_error", error=str(e), errno=e.errno)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except Exception as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e

    return wrapper


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if any(arg in sys.argv for arg in ["-v", "-vv", "--verbose", "--debug"]):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
