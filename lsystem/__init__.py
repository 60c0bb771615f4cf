# L-system package
# This package provides a parser and a rewriting engine for parametric,
# context-sensitive, stochastic L-systems.
from .errors import (
    LSystemError, GrammarError, UnboundParameterError,
    ParameterRedefinitionError, WeightError, ContextError,
)
from .module import (
    Module, ModuleAnnotation, ModuleSignature, ModuleTemplate,
    ModuleContext, ModulePattern, Rule, format_module_string,
)
from .parser import (
    parse_module_string, parse_template_string, parse_rule,
    parse_rule_list, parse_bool_expr, parse_arith_expr,
)
from .engine import IterationEngine
from .system import LSystem, run_lsystem
from .presets import Preset, PRESETS, get_preset, preset_names

__all__ = [
    'LSystemError',
    'GrammarError',
    'UnboundParameterError',
    'ParameterRedefinitionError',
    'WeightError',
    'ContextError',
    'Module',
    'ModuleAnnotation',
    'ModuleSignature',
    'ModuleTemplate',
    'ModuleContext',
    'ModulePattern',
    'Rule',
    'format_module_string',
    'parse_module_string',
    'parse_template_string',
    'parse_rule',
    'parse_rule_list',
    'parse_bool_expr',
    'parse_arith_expr',
    'IterationEngine',
    'LSystem',
    'run_lsystem',
    'Preset',
    'PRESETS',
    'get_preset',
    'preset_names',
]
