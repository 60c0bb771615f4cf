from typing import Dict, Iterator

from lsystem.ast import format_number
from lsystem.errors import ParameterRedefinitionError, UnboundParameterError


class Environment:
    """Binds single-character parameter names to numeric values.

    An environment is built fresh for every match/instantiate cycle. A name
    may be defined only once; defining it again means the pattern that is
    being bound declares the same parameter twice.
    """
    def __init__(self):
        self.values: Dict[str, float] = {}

    def has(self, name: str) -> bool:
        return name in self.values

    def get(self, name: str) -> float:
        if name in self.values:
            return self.values[name]
        raise UnboundParameterError(name, str(self))

    def define(self, name: str, value: float):
        if name in self.values:
            raise ParameterRedefinitionError(name, self.values[name], value)
        self.values[name] = float(value)

    def as_dict(self) -> Dict[str, float]:
        return dict(self.values)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __str__(self) -> str:
        inner = ', '.join(f"{name}: {format_number(value)}" for name, value in self.values.items())
        return '{' + inner + '}'
