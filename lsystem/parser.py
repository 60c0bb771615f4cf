"""Parser for L-system module strings and rules.

The grammar is written for Lark and parsed with the Earley algorithm and
its dynamic lexer. A plain LALR lexer can't be used here: the identifier
alphabet contains characters that double as operators (``+``, ``-``,
``^``, ``|``, ``&``, ``!``), so whether ``+`` is a turtle command or an
addition depends on where it appears. Earley parsing is noticeably slower
than LALR: an axiom of a few thousand modules or a list of a few hundred
rules takes around a second.

Textual forms:

* module string:   ``F(1)[+F(0.5)]~L``
* template string: ``F(x*2)[+A(x/1.5)]``
* rule:            ``A(l) < B(x) > C : x > l : 0.5 -> B(x+1)``
* rule list:       newline separated rules, blank lines allowed

The parse tree is converted into AST and model objects by
`LSystemTransformer`. Every public function raises `GrammarError` when
the text does not conform to the grammar.
"""

from __future__ import annotations

from typing import Any, List

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput, VisitError

from .ast import (
    Add, Sub, Mul, Div, Pow, Neg, Const, Param,
    Not, And, Or, Lth, Leq, Gth, Geq, Eq, BoolConst, TRUE,
    ArithNode, BoolNode,
)
from .errors import GrammarError
from .module import (
    DETERMINISTIC, Module, ModuleAnnotation, ModuleSignature,
    ModuleTemplate, ModulePattern, Rule,
)


LSYSTEM_GRAMMAR = r"""
    // Rule lists
    rule_list: _NL* [lsystem_rule (_NL+ lsystem_rule)* _NL*]
    lsystem_rule: pattern [probability] "->" template_string
    probability: ":" SIGNED_NUMBER

    // Left side
    pattern: [left_context] signature [right_context] [condition]
    left_context: signature "<"
    right_context: ">" signature
    condition: ":" bool_expr
    signature: [ANNOTATION] IDENT ["(" [PARAM ("," PARAM)*] ")"]

    // Right side
    template_string: template*
    template: [ANNOTATION] IDENT ["(" [arith ("," arith)*] ")"]

    // Concrete modules
    module_string: module*
    module: [ANNOTATION] IDENT ["(" [SIGNED_NUMBER ("," SIGNED_NUMBER)*] ")"]

    // Boolean expressions
    bool_start: bool_expr
    ?bool_expr: or_expr
    ?or_expr: and_expr
            | or_expr "||" and_expr -> or_
    ?and_expr: relation
             | and_expr "&&" relation -> and_
    ?relation: arith "<" arith -> lth
             | arith "<=" arith -> leq
             | arith ">" arith -> gth
             | arith ">=" arith -> geq
             | arith "==" arith -> eq
             | unary_bool
    ?unary_bool: "!" unary_bool -> not_
               | bool_atom
    ?bool_atom: "(" bool_expr ")"
              | "true" -> true_
              | "*" -> true_
              | "false" -> false_

    // Arithmetic expressions
    arith_start: arith
    ?arith: sum
    ?sum: product
        | sum "+" product -> add
        | sum "-" product -> sub
    ?product: power
            | product "*" power -> mul
            | product "/" power -> div
    ?power: unary_arith
          | unary_arith "^" power -> pow
    ?unary_arith: "-" unary_arith -> neg
                | "+" unary_arith
                | arith_atom
    ?arith_atom: NUMBER -> const
               | PARAM -> param
               | "(" arith ")"

    // Tokens
    ANNOTATION: "~"
    IDENT: /[a-zA-Z0-9!^+'\-\[\]\\\/|#&{}.]/
    PARAM: /[a-z]/
    NUMBER: /\d+(\.\d+)?([eE][+-]?\d+)?/
    SIGNED_NUMBER: /[+-]?\d+(\.\d+)?([eE][+-]?\d+)?/
    _NL: /\r?\n/

    %ignore /[ \t]+/
"""


START_SYMBOLS = [
    'rule_list', 'lsystem_rule', 'module_string', 'template_string',
    'bool_start', 'arith_start',
]


LSYSTEM_PARSER = Lark(
    LSYSTEM_GRAMMAR,
    start=START_SYMBOLS,
    parser='earley',
    lexer='dynamic',
    maybe_placeholders=False,
)


def _annotation(token: Token) -> ModuleAnnotation:
    return ModuleAnnotation(str(token))


def _split_head(items: List[Any]):
    """Split [ANNOTATION?] IDENT rest... into (annotation, identifier, rest)."""
    annotation = None
    i = 0
    if isinstance(items[0], Token) and items[0].type == 'ANNOTATION':
        annotation = _annotation(items[0])
        i = 1
    identifier = str(items[i])
    return annotation, identifier, items[i + 1:]


class LSystemTransformer(Transformer):
    """Transforms the raw parse tree into model and AST objects."""

    # Rules

    def rule_list(self, items):
        return list(items)

    def lsystem_rule(self, items):
        pattern = items[0]
        right_side = items[-1]
        probability = items[1] if len(items) == 3 else DETERMINISTIC
        return Rule(pattern=pattern, right_side=tuple(right_side), probability=probability)

    def probability(self, items):
        return float(items[0])

    def pattern(self, items):
        left = right = None
        center = None
        condition: BoolNode = TRUE
        for item in items:
            if isinstance(item, ModuleSignature):
                center = item
                continue
            kind, value = item
            if kind == 'left':
                left = value
            elif kind == 'right':
                right = value
            else:
                condition = value
        return ModulePattern(center=center, left=left, right=right, condition=condition)

    def left_context(self, items):
        return ('left', items[0])

    def right_context(self, items):
        return ('right', items[0])

    def condition(self, items):
        return ('condition', items[0])

    def signature(self, items):
        # An annotation on a signature is accepted but plays no part in matching.
        _, identifier, rest = _split_head(items)
        return ModuleSignature(identifier, tuple(str(p) for p in rest))

    def template_string(self, items):
        return list(items)

    def template(self, items):
        annotation, identifier, rest = _split_head(items)
        return ModuleTemplate(identifier, tuple(rest), annotation)

    def module_string(self, items):
        return list(items)

    def module(self, items):
        annotation, identifier, rest = _split_head(items)
        return Module(identifier, tuple(float(v) for v in rest), annotation)

    # Boolean expressions

    def bool_start(self, items):
        return items[0]

    def or_(self, items):
        return Or(items[0], items[1])

    def and_(self, items):
        return And(items[0], items[1])

    def not_(self, items):
        return Not(items[0])

    def lth(self, items):
        return Lth(items[0], items[1])

    def leq(self, items):
        return Leq(items[0], items[1])

    def gth(self, items):
        return Gth(items[0], items[1])

    def geq(self, items):
        return Geq(items[0], items[1])

    def eq(self, items):
        return Eq(items[0], items[1])

    def true_(self, items):
        return BoolConst(True)

    def false_(self, items):
        return BoolConst(False)

    # Arithmetic expressions

    def arith_start(self, items):
        return items[0]

    def add(self, items):
        return Add(items[0], items[1])

    def sub(self, items):
        return Sub(items[0], items[1])

    def mul(self, items):
        return Mul(items[0], items[1])

    def div(self, items):
        return Div(items[0], items[1])

    def pow(self, items):
        return Pow(items[0], items[1])

    def neg(self, items):
        return Neg(items[0])

    def const(self, items):
        return Const(float(items[0]))

    def param(self, items):
        return Param(str(items[0]))


def _parse(text: str, start: str) -> Any:
    try:
        tree = LSYSTEM_PARSER.parse(text, start=start)
        return LSystemTransformer().transform(tree)
    except UnexpectedInput as e:
        line = e.line if e.line is not None and e.line > 0 else None
        column = e.column if e.column is not None and e.column > 0 else None
        raise GrammarError(f"invalid {start.replace('_', ' ')} {text!r}", text, line, column) from e
    except VisitError as e:
        raise GrammarError(f"invalid {start.replace('_', ' ')} {text!r}: {e.orig_exc}", text) from e


def parse_module_string(text: str) -> List[Module]:
    """Parse an axiom such as ``F(1)[+F(2)]`` into a list of modules."""
    return _parse(text, 'module_string')


def parse_template_string(text: str) -> List[ModuleTemplate]:
    return _parse(text, 'template_string')


def parse_rule(text: str) -> Rule:
    """Parse a single rule, e.g. ``A(x) : x < 5 -> A(x+1)``."""
    return _parse(text, 'lsystem_rule')


def parse_rule_list(text: str) -> List[Rule]:
    """Parse newline separated rules. Blank lines are ignored."""
    return _parse(text, 'rule_list')


def parse_bool_expr(text: str) -> BoolNode:
    return _parse(text, 'bool_start')


def parse_arith_expr(text: str) -> ArithNode:
    return _parse(text, 'arith_start')
