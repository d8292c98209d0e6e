"""Terminal rendering exports."""

from .terminal import TerminalAnimator

__all__ = ["TerminalAnimator"]
