from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Preset:
    name: str
    axiom: str
    rules: str
    iterations: int
    description: str


PRESETS: Dict[str, Preset] = {}


def _register(preset: Preset) -> Preset:
    PRESETS[preset.name] = preset
    return preset


_register(Preset(
    name='algae',
    axiom='A',
    rules='A -> AB\nB -> A',
    iterations=5,
    description="Lindenmayer's algae; string lengths follow the Fibonacci numbers",
))

_register(Preset(
    name='koch',
    axiom='F',
    rules='F -> F+F-F-F+F',
    iterations=3,
    description='Quadratic Koch curve (turn angle 90)',
))

_register(Preset(
    name='stochastic_plant',
    axiom='F',
    rules=(
        'F : 0.33 -> F[+F]F[-F]F\n'
        'F : 0.33 -> F[+F]F\n'
        'F : 0.34 -> F[-F]F'
    ),
    iterations=4,
    description='Three equally likely branchings for every segment (turn angle 25.7)',
))

_register(Preset(
    name='growing_branch',
    axiom='A(1)',
    rules=(
        'A(s) : s < 4 -> F(s)[+A(s*1.5)][-A(s*1.5)]\n'
        'A(s) : s >= 4 -> ~L(s)\n'
        'F(l) -> F(l*1.2)'
    ),
    iterations=6,
    description='Parametric branching that ends in leaf patches once the branches are long enough',
))

_register(Preset(
    name='signal',
    axiom='F(1)F(0)F(0)F(0)F(0)',
    rules='F(a) < F(b) : a == 1 && b == 0 -> F(1)',
    iterations=4,
    description='Context-sensitive propagation of a signal from left to right',
))

_register(Preset(
    name='leaf',
    axiom='X',
    rules=(
        'X -> F[+~L(1)][-~L(1)]X\n'
        'F -> FF'
    ),
    iterations=3,
    description='Stem with pairs of leaves created as patches',
))


def preset_names() -> List[str]:
    return sorted(PRESETS)


def get_preset(name: str) -> Preset:
    if name not in PRESETS:
        raise KeyError(f"unknown preset {name!r}; known presets: {', '.join(preset_names())}")
    return PRESETS[name]
