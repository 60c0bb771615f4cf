"""Modules, module patterns and rewrite rules.

A module is one symbol of an L-system string, e.g. ``F`` or ``A(1, 2.5)``.
Rules are built from a pattern (the left side, describing which modules
and which neighbours they apply to) and a list of templates (the right
side, describing the modules that replace a match).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .ast import ArithNode, BoolNode, BoolConst, TRUE, format_number
from .environment import Environment
from .errors import ContextError
from .evaluator import evaluate_arith, evaluate_bool


DETERMINISTIC = -1.0


class ModuleAnnotation(Enum):
    """Marks a module occurrence for special treatment by the interpreter.

    Annotations are a fixed set so that a leading character can't be
    confused with an identifier: ``+-A`` is three modules, ``~A`` is one.
    """
    CREATE_PATCH = '~'

    def __str__(self) -> str:
        return self.value


def _format_call(identifier: str, args: Sequence[str], annotation: Optional[ModuleAnnotation] = None) -> str:
    prefix = str(annotation) if annotation is not None else ''
    if not args:
        return f"{prefix}{identifier}"
    return f"{prefix}{identifier}(" + ','.join(args) + ')'


@dataclass(frozen=True)
class Module:
    identifier: str
    parameters: Tuple[float, ...] = ()
    annotation: Optional[ModuleAnnotation] = None

    def has_parameters(self) -> bool:
        return len(self.parameters) > 0

    def parameter_count(self) -> int:
        return len(self.parameters)

    def has_annotation(self) -> bool:
        return self.annotation is not None

    def __str__(self) -> str:
        return _format_call(self.identifier, [format_number(p) for p in self.parameters], self.annotation)


def format_module_string(modules: Sequence[Module]) -> str:
    """Render a module sequence in the same syntax the parser accepts."""
    return ''.join(str(m) for m in modules)


@dataclass(frozen=True)
class ModuleSignature:
    """The shape of a module inside a pattern, e.g. ``A(x,y)``."""
    identifier: str
    parameters: Tuple[str, ...] = ()

    def has_parameters(self) -> bool:
        return len(self.parameters) > 0

    def parameter_count(self) -> int:
        return len(self.parameters)

    def fits(self, module: Optional[Module]) -> bool:
        """True if the module exists and has this identifier and arity."""
        if module is None:
            return False
        return module.identifier == self.identifier and module.parameter_count() == self.parameter_count()

    def extract(self, module: Module, env: Environment):
        for name, value in zip(self.parameters, module.parameters):
            env.define(name, value)

    def __str__(self) -> str:
        return _format_call(self.identifier, self.parameters)


@dataclass(frozen=True)
class ModuleTemplate:
    """A module on the right side of a rule, e.g. ``A(x+1, y)``."""
    identifier: str
    expressions: Tuple[ArithNode, ...] = ()
    annotation: Optional[ModuleAnnotation] = None

    def has_parameters(self) -> bool:
        return len(self.expressions) > 0

    def parameter_count(self) -> int:
        return len(self.expressions)

    def instantiate(self, env: Environment) -> Module:
        """Create a concrete module by evaluating every parameter expression."""
        values = tuple(evaluate_arith(expr, env) for expr in self.expressions)
        return Module(self.identifier, values, self.annotation)

    def __str__(self) -> str:
        return _format_call(self.identifier, [str(e) for e in self.expressions], self.annotation)


@dataclass(frozen=True)
class ModuleContext:
    """A module together with its immediate neighbours, if they exist."""
    center: Module
    left: Optional[Module] = None
    right: Optional[Module] = None

    def __str__(self) -> str:
        text = str(self.center)
        if self.left is not None:
            text = f"{self.left} < {text}"
        if self.right is not None:
            text = f"{text} > {self.right}"
        return text


@dataclass(frozen=True)
class ModulePattern:
    """Left side of a rule.

    ``L < C > R : cond`` matches a module with the identifier and arity of
    ``C`` whose left and right neighbours fit ``L`` and ``R`` (each
    optional), provided ``cond`` holds once the parameter names of all
    three signatures are bound to the actual values.
    """
    center: ModuleSignature
    left: Optional[ModuleSignature] = None
    right: Optional[ModuleSignature] = None
    condition: BoolNode = TRUE

    def fits(self, context: ModuleContext) -> bool:
        if not self.center.fits(context.center):
            return False
        if self.left is not None and not self.left.fits(context.left):
            return False
        if self.right is not None and not self.right.fits(context.right):
            return False
        return True

    def matches(self, context: ModuleContext) -> bool:
        if not self.fits(context):
            return False
        return evaluate_bool(self.condition, self.bind(context))

    def bind(self, context: ModuleContext) -> Environment:
        """Bind the pattern's parameter names to the values in `context`.

        Only valid for a context this pattern fits; anything else is a
        programming error and raises ContextError.
        """
        if not self.fits(context):
            raise ContextError(f"pattern {self} can not be bound to context {context}")
        env = Environment()
        if self.left is not None:
            self.left.extract(context.left, env)
        self.center.extract(context.center, env)
        if self.right is not None:
            self.right.extract(context.right, env)
        return env

    def __str__(self) -> str:
        parts: List[str] = []
        if self.left is not None:
            parts.append(f"{self.left} < ")
        parts.append(str(self.center))
        if self.right is not None:
            parts.append(f" > {self.right}")
        if self.condition == BoolConst(True):
            parts.append(' : *')
        else:
            parts.append(f" : {self.condition}")
        return ''.join(parts)


@dataclass(frozen=True)
class Rule:
    pattern: ModulePattern
    right_side: Tuple[ModuleTemplate, ...] = ()
    probability: float = DETERMINISTIC

    def is_deterministic(self) -> bool:
        """A negative probability marks a rule that always wins.

        This is not the same as a probability of 1.0: probabilities are
        relative weights among the probabilistic rules matching a module.
        """
        return self.probability < 0.0

    def apply(self, context: ModuleContext) -> List[Module]:
        env = self.pattern.bind(context)
        return [template.instantiate(env) for template in self.right_side]

    def __str__(self) -> str:
        text = str(self.pattern)
        if not self.is_deterministic():
            text += f" : {format_number(self.probability)}"
        text += ' ->'
        for template in self.right_side:
            text += f" {template}"
        return text
