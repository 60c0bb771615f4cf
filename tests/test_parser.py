import pytest

from lsystem.ast import Add, Mul, Gth, Lth, Const, Param, BoolConst, TRUE
from lsystem.errors import GrammarError
from lsystem.module import (
    Module, ModuleAnnotation, ModuleSignature, ModuleTemplate, format_module_string,
)
from lsystem.parser import (
    parse_module_string, parse_template_string, parse_rule, parse_rule_list,
)


def test_module_string_with_parameters_and_symbols():
    modules = parse_module_string('F(1)[+F(-2.5)]~L')
    assert modules == [
        Module('F', (1.0,)),
        Module('['),
        Module('+'),
        Module('F', (-2.5,)),
        Module(']'),
        Module('L', (), ModuleAnnotation.CREATE_PATCH),
    ]


def test_module_string_whitespace_and_multiple_parameters():
    modules = parse_module_string('  A(1, 2,3)  B C ')
    assert [m.identifier for m in modules] == ['A', 'B', 'C']
    assert modules[0].parameters == (1.0, 2.0, 3.0)
    assert modules[0].parameter_count() == 3
    assert not modules[1].has_parameters()


def test_empty_module_string():
    assert parse_module_string('') == []


@pytest.mark.parametrize('text', ['A(1', 'A(x)', 'A<B', 'A(1,)', 'A(1 2)'])
def test_malformed_module_string(text):
    with pytest.raises(GrammarError):
        parse_module_string(text)


def test_grammar_error_has_position():
    with pytest.raises(GrammarError) as info:
        parse_module_string('AB<C')
    assert info.value.line == 1
    assert info.value.column == 3
    assert info.value.text == 'AB<C'


def test_template_string():
    templates = parse_template_string('~L(x*2)F')
    assert templates == [
        ModuleTemplate('L', (Mul(Param('x'), Const(2.0)),), ModuleAnnotation.CREATE_PATCH),
        ModuleTemplate('F'),
    ]


def test_context_sensitive_rule():
    rule = parse_rule('A < B > C -> D')
    assert rule.pattern.left == ModuleSignature('A')
    assert rule.pattern.center == ModuleSignature('B')
    assert rule.pattern.right == ModuleSignature('C')
    assert rule.pattern.condition == TRUE
    assert rule.right_side == (ModuleTemplate('D'),)
    assert rule.is_deterministic()


def test_one_sided_contexts():
    left_only = parse_rule('A(x) < B -> C')
    assert left_only.pattern.left == ModuleSignature('A', ('x',))
    assert left_only.pattern.right is None
    right_only = parse_rule('B > C(y, z) -> C')
    assert right_only.pattern.left is None
    assert right_only.pattern.right == ModuleSignature('C', ('y', 'z'))


def test_rule_with_condition():
    rule = parse_rule('A(x) : x < 5 -> A(x+1)')
    assert rule.pattern.center == ModuleSignature('A', ('x',))
    assert rule.pattern.condition == Lth(Param('x'), Const(5.0))
    assert rule.right_side[0].expressions == (Add(Param('x'), Const(1.0)),)
    assert rule.probability < 0


def test_rule_with_probability():
    rule = parse_rule('A : 0.5 -> B')
    assert rule.probability == 0.5
    assert rule.pattern.condition == TRUE
    assert not rule.is_deterministic()


def test_rule_with_condition_and_probability():
    rule = parse_rule('A(x) : x > 1 : 2 -> B')
    assert rule.pattern.condition == Gth(Param('x'), Const(1.0))
    assert rule.probability == 2.0


def test_star_condition():
    rule = parse_rule('A(x) : * -> B(x)')
    assert rule.pattern.condition == BoolConst(True)


def test_rule_with_empty_right_side():
    rule = parse_rule('A ->')
    assert rule.right_side == ()


def test_rule_with_turtle_symbols():
    rule = parse_rule('- -> F-F+[F]')
    assert rule.pattern.center.identifier == '-'
    assert ''.join(t.identifier for t in rule.right_side) == 'F-F+[F]'


def test_rule_list():
    rules = parse_rule_list('A -> AB\n\n   \nB -> A\n')
    assert len(rules) == 2
    assert [t.identifier for t in rules[0].right_side] == ['A', 'B']
    assert rules[1].pattern.center.identifier == 'B'


def test_empty_rule_list():
    assert parse_rule_list('') == []
    assert parse_rule_list('\n\n') == []


def test_malformed_rule_list():
    with pytest.raises(GrammarError):
        parse_rule_list('A -> B\nthis is not a rule')
    with pytest.raises(GrammarError):
        parse_rule('A(1) -> B')


def test_rule_text_form_parses_back():
    rule = parse_rule('A(l) < B(x) > C : x > l : 0.5 -> B(x+1)~L(-x)')
    assert str(rule) == 'A(l) < B(x) > C : (x > l) : 0.5 -> B((x + 1)) ~L((-x))'
    assert parse_rule(str(rule)) == rule


def test_template_with_leading_plus():
    rule = parse_rule('A(x) -> A(+1) B(x*+2)')
    assert rule.right_side == (
        ModuleTemplate('A', (Const(1.0),)),
        ModuleTemplate('B', (Mul(Param('x'), Const(2.0)),)),
    )


def test_module_string_with_exponents():
    modules = parse_module_string('F(1e-05)G(-2.5E+20,3e2)')
    assert modules == [Module('F', (1e-05,)), Module('G', (-2.5e20, 300.0))]


def test_very_small_and_large_parameters_parse_back():
    modules = [Module('F', (1e-05,)), Module('G', (1e20,)), Module('H', (-3.5e-7,))]
    assert parse_module_string(format_module_string(modules)) == modules


def test_module_text_form_parses_back():
    modules = parse_module_string('F(1,2.5)~L(-3)+')
    assert [str(m) for m in modules] == ['F(1,2.5)', '~L(-3)', '+']
    assert parse_module_string(''.join(str(m) for m in modules)) == modules
