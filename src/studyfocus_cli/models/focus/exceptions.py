"""Exceptions raised by the focus timer."""


class FocusError(Exception):
    """Base exception for focus timer errors."""


class SessionCreateError(FocusError):
    """Raised when the service refuses or fails to create a session."""


class InvalidTransitionError(FocusError):
    """Raised when an operation is not allowed in the engine's current state."""

    def __init__(self, operation: str, state: str):
        super().__init__(f"Cannot {operation} while {state}")
        self.operation = operation
        self.state = state
