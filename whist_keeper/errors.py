from __future__ import annotations


class ValidationError(ValueError):
    """An operator input the score keeper refuses; always recoverable."""


class PhaseError(ValidationError):
    """Raised when an operation is attempted outside the phase that allows it."""

    def __init__(self, operation: str, phase: object) -> None:
        super().__init__(f"Cannot {operation} during the {phase} phase")
        self.operation = operation
        self.phase = phase
