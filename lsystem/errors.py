from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorInfo:
    """A named error record, e.g. ErrorInfo('NameError', 'no parameter x')."""
    name: str
    message: str


class LSystemError(Exception):
    """Base exception for every error raised by the lsystem package."""
    def __init__(self, err: ErrorInfo):
        super().__init__(f"{err.name}: {err.message}")
        self.err = err
        # Filled in by the iteration engine with the position, module context
        # and rule that were being processed.
        self.context: Optional[str] = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.context:
            return f"{base} (at {self.context})"
        return base


class GrammarError(LSystemError):
    """Raised when a module string, rule or expression cannot be parsed."""
    def __init__(self, message: str, text: str = '', line: Optional[int] = None, column: Optional[int] = None):
        if line is not None and column is not None:
            message = f"{message} at {line}:{column}"
        super().__init__(ErrorInfo('GrammarError', message))
        self.text = text
        self.line = line
        self.column = column


class UnboundParameterError(LSystemError):
    def __init__(self, name: str, environment: str = '{}'):
        super().__init__(ErrorInfo('NameError', f"no definition for parameter '{name}' in environment {environment}"))
        self.name = name


class ParameterRedefinitionError(LSystemError):
    def __init__(self, name: str, existing: float, value: float):
        super().__init__(ErrorInfo(
            'RedefinitionError',
            f"tried to define parameter '{name}' as {value} but it already exists as {existing}",
        ))
        self.name = name
        self.existing = existing
        self.value = value


class WeightError(LSystemError):
    def __init__(self, message: str):
        super().__init__(ErrorInfo('WeightError', message))


class ContextError(LSystemError):
    """Raised when a pattern is bound against a context it cannot match."""
    def __init__(self, message: str):
        super().__init__(ErrorInfo('ContextError', message))
