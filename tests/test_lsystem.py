import pytest

from lsystem import LSystem, GrammarError, Module, ModuleAnnotation, run_lsystem
from lsystem.module import format_module_string
from lsystem.parser import parse_module_string
from lsystem.presets import PRESETS, get_preset, preset_names


def test_parse_and_iterate():
    system = LSystem(iteration_depth=5)
    system.parse('A(0)', 'A(x) -> A(x+1)')
    assert system.iterate() == [Module('A', (5.0,))]
    assert str(system) == 'A(5)'


def test_invalid_axiom_is_replaced_by_empty_string():
    system = LSystem(iteration_depth=2)
    system.parse('A(1', 'A -> AB')
    assert system.axiom == []
    assert len(system.rules) == 1
    assert system.iterate() == []


def test_invalid_rules_are_replaced_by_empty_list():
    system = LSystem(iteration_depth=2)
    system.parse('AB', 'A -> B\nA(1) -> C')
    assert system.rules == []
    assert format_module_string(system.iterate()) == 'AB'


def test_strict_parse_raises():
    system = LSystem()
    with pytest.raises(GrammarError):
        system.parse('A(1', 'A -> AB', strict=True)
    with pytest.raises(GrammarError):
        system.parse('A', 'A ->> B', strict=True)


def test_permissive_parse_logs_failure(capsys):
    system = LSystem(debug_level=1)
    system.parse('A(1', '')
    assert 'axiom ignored' in capsys.readouterr().err


def test_permissive_parse_logs_to_debug_file(tmp_path, capsys):
    debug_file = tmp_path / 'debug.txt'
    system = LSystem(iteration_depth=1, debug_level=1, debug_file=str(debug_file))
    system.parse('A(1', 'A -> B')
    system.iterate()
    system.close()
    text = debug_file.read_text(encoding='utf-8')
    assert 'axiom ignored' in text
    assert 'generation 1: 0 modules' in text
    assert capsys.readouterr().err == ''


def test_shrinking_parameters_parse_back():
    system = LSystem(iteration_depth=6)
    system.parse('A(1)', 'A(x) -> A(x*0.1)')
    modules = system.iterate()
    assert modules[0].parameters[0] < 1e-5
    assert parse_module_string(str(system)) == modules


def test_add_rule_from_text():
    system = LSystem(iteration_depth=1)
    system.parse('AB', '')
    system.add_rule('A -> C')
    system.add_rule('B -> DD')
    assert format_module_string(system.iterate()) == 'CDD'


def test_seed_and_depth_can_be_changed():
    system = LSystem(seed=1)
    system.parse('A' * 12, 'A : 1 -> X\nA : 1 -> Y')
    system.set_iteration_depth(1)
    first = system.iterate()
    system.set_seed(1)
    assert system.iterate() == first
    system.set_iteration_depth(0)
    assert format_module_string(system.iterate()) == 'A' * 12


def test_module_string_holds_last_result():
    system = LSystem(iteration_depth=2)
    system.parse('A', 'A -> AB\nB -> A')
    assert system.module_string == [Module('A')]
    system.iterate()
    assert format_module_string(system.module_string) == 'ABA'


def test_run_lsystem():
    assert format_module_string(run_lsystem('A', 'A -> AB\nB -> A', 4)) == 'ABAABABA'
    with pytest.raises(GrammarError):
        run_lsystem('A', 'not a rule', 1)


@pytest.mark.parametrize('name', preset_names())
def test_presets_parse_and_iterate(name):
    system = LSystem.from_preset(name, seed=5)
    preset = get_preset(name)
    assert system.engine.iteration_depth == preset.iterations
    assert len(system.iterate()) > 0


def test_algae_preset():
    modules = LSystem.from_preset('algae').iterate()
    assert len(modules) == 13


def test_koch_preset():
    modules = LSystem.from_preset('koch').iterate()
    assert sum(1 for m in modules if m.identifier == 'F') == 125


def test_signal_preset():
    modules = LSystem.from_preset('signal').iterate()
    assert modules == [Module('F', (1.0,))] * 5


def test_growing_branch_ends_in_leaves():
    modules = LSystem.from_preset('growing_branch').iterate()
    leaves = [m for m in modules if m.annotation is ModuleAnnotation.CREATE_PATCH]
    assert leaves
    assert all(m.identifier == 'L' and m.parameters[0] >= 4 for m in leaves)


def test_stochastic_preset_depends_on_seed():
    results = {format_module_string(LSystem.from_preset('stochastic_plant', seed=s).iterate()) for s in range(5)}
    assert len(results) > 1


def test_unknown_preset():
    with pytest.raises(KeyError):
        get_preset('fern')
    assert set(preset_names()) == set(PRESETS)
