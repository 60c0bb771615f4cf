"""Generation-by-generation rewriting of module strings.

Each generation reads only the previous generation's sequence: for every
position a fresh `ModuleContext` is built from the module and its two
neighbours, all matching rules are collected, one is selected and its
right side replaces the module in a brand new sequence.

Selection policy for a position:

* no matching rule: the module is copied unchanged;
* at least one deterministic rule: the first one in definition order;
* only probabilistic rules: one weighted draw among them, using the
  engine's own seeded random generator.
"""

from __future__ import annotations

import random
import sys
from typing import Iterable, List, Optional, Sequence, TextIO

from .errors import LSystemError
from .module import Module, ModuleContext, Rule, format_module_string
from .sampling import Weighted, WeightedChoice

DEFAULT_SEED = 133742


class IterationEngine:
    """Applies a rule set to an axiom for a fixed number of generations."""
    def __init__(
        self,
        rules: Iterable[Rule] = (),
        axiom: Iterable[Module] = (),
        iteration_depth: int = 0,
        seed: Optional[int] = None,
        debug_level: int = 0,
        debug_file: Optional[str] = None,
    ):
        self.rules: List[Rule] = list(rules)
        self.axiom: List[Module] = list(axiom)
        self.module_string: List[Module] = list(self.axiom)
        self.iteration_depth = 0
        self.set_iteration_depth(iteration_depth)
        self.seed = DEFAULT_SEED
        self.rng = random.Random(DEFAULT_SEED)
        if seed is not None:
            self.set_seed(seed)
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp: Optional[TextIO] = (
            open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None
        )

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Configuration

    def set_iteration_depth(self, depth: int):
        if depth < 0:
            raise ValueError(f"iteration depth must be >= 0, got {depth}")
        self.iteration_depth = depth

    def set_seed(self, seed: int):
        self.seed = seed
        self.rng = random.Random(seed)

    def add_rule(self, rule: Rule):
        self.rules.append(rule)

    def set_axiom(self, axiom: Iterable[Module]):
        self.axiom = list(axiom)
        self.module_string = list(self.axiom)

    # Rewriting

    @staticmethod
    def build_context(sequence: Sequence[Module], index: int) -> ModuleContext:
        left = sequence[index - 1] if index > 0 else None
        right = sequence[index + 1] if index < len(sequence) - 1 else None
        return ModuleContext(center=sequence[index], left=left, right=right)

    def matching_rules(self, context: ModuleContext) -> List[Rule]:
        matches = []
        for rule in self.rules:
            matched = rule.pattern.matches(context)
            if self.debug_level >= 3:
                self.debug(f"  test {rule} against {context} -> {matched}")
            if matched:
                matches.append(rule)
        return matches

    def choose_rule(self, matches: Sequence[Rule]) -> Rule:
        """Pick the rule to apply among the rules matching one position."""
        for rule in matches:
            if rule.is_deterministic():
                return rule
        choice = WeightedChoice([Weighted(rule.probability, rule) for rule in matches])
        return choice.sample(self.rng)

    def rewrite(self, sequence: Sequence[Module]) -> List[Module]:
        """Compute one generation from `sequence`; the input is not modified."""
        result: List[Module] = []
        for index, module in enumerate(sequence):
            context = self.build_context(sequence, index)
            rule = None
            try:
                matches = self.matching_rules(context)
                if not matches:
                    result.append(module)
                    continue
                rule = self.choose_rule(matches)
                replacement = rule.apply(context)
            except LSystemError as e:
                if e.context is None:
                    e.context = f"position {index}, context {context}"
                    if rule is not None:
                        e.context += f", rule {rule}"
                raise
            if self.debug_level >= 2:
                self.debug(f"  {index}: {module} => {format_module_string(replacement)} by {rule}")
            result.extend(replacement)
        return result

    def iterate(self) -> List[Module]:
        """Rewrite the axiom `iteration_depth` times and return the result.

        The random generator is reseeded first, so repeated calls with the
        same seed, rules and axiom produce the same module string.
        """
        self.rng = random.Random(self.seed)
        self.module_string = list(self.axiom)
        self.debug(f"iterate: {len(self.rules)} rules, depth {self.iteration_depth}, seed {self.seed}")
        for generation in range(self.iteration_depth):
            self.module_string = self.rewrite(self.module_string)
            self.debug(f"generation {generation + 1}: {len(self.module_string)} modules")
        return list(self.module_string)
