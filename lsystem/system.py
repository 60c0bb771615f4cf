"""Top level entry point for describing and iterating an L-system.

Typical use::

    system = LSystem(iteration_depth=5)
    system.parse('A(0)', 'A(x) -> A(x+1)')
    modules = system.iterate()

The resulting modules are handed to an interpreter that maps each
identifier to a drawing operation; that part lives outside this package.
"""

from __future__ import annotations

from typing import List, Optional, Union

from .engine import IterationEngine
from .errors import GrammarError
from .module import Module, Rule, format_module_string
from .parser import parse_module_string, parse_rule, parse_rule_list
from .presets import get_preset


class LSystem:
    """Parses an axiom and a rule list and drives the iteration engine."""
    def __init__(
        self,
        seed: Optional[int] = None,
        iteration_depth: int = 0,
        debug_level: int = 0,
        debug_file: Optional[str] = None,
    ):
        self.engine = IterationEngine(
            iteration_depth=iteration_depth,
            seed=seed,
            debug_level=debug_level,
            debug_file=debug_file,
        )

    @classmethod
    def from_preset(cls, name: str, seed: Optional[int] = None, debug_level: int = 0) -> 'LSystem':
        preset = get_preset(name)
        system = cls(seed=seed, iteration_depth=preset.iterations, debug_level=debug_level)
        system.parse(preset.axiom, preset.rules, strict=True)
        return system

    def parse(self, axiom: str, rules: str, strict: bool = False):
        """Parse and install an axiom and a newline separated rule list.

        With ``strict=False`` a text that fails to parse is replaced by an
        empty module string or an empty rule list, so the system still
        iterates (over nothing). With ``strict=True`` the GrammarError is
        raised to the caller instead.
        """
        try:
            modules = parse_module_string(axiom)
        except GrammarError as e:
            if strict:
                raise
            self.engine.debug(f"axiom ignored: {e}")
            modules = []
        try:
            rule_list = parse_rule_list(rules)
        except GrammarError as e:
            if strict:
                raise
            self.engine.debug(f"rules ignored: {e}")
            rule_list = []
        self.engine.set_axiom(modules)
        self.engine.rules = rule_list

    def add_rule(self, rule: Union[str, Rule]):
        if isinstance(rule, str):
            rule = parse_rule(rule)
        self.engine.add_rule(rule)

    def set_iteration_depth(self, depth: int):
        self.engine.set_iteration_depth(depth)

    def set_seed(self, seed: int):
        self.engine.set_seed(seed)

    @property
    def axiom(self) -> List[Module]:
        return list(self.engine.axiom)

    @property
    def rules(self) -> List[Rule]:
        return list(self.engine.rules)

    @property
    def module_string(self) -> List[Module]:
        return list(self.engine.module_string)

    def iterate(self) -> List[Module]:
        return self.engine.iterate()

    def close(self):
        self.engine.close()

    def __str__(self) -> str:
        return format_module_string(self.engine.module_string)


def run_lsystem(axiom: str, rules: str, depth: int, seed: Optional[int] = None) -> List[Module]:
    """Convenience function: parse strictly, iterate and return the modules."""
    system = LSystem(seed=seed, iteration_depth=depth)
    system.parse(axiom, rules, strict=True)
    return system.iterate()
