'''
Command line tests
'''

import regex

from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from trigcalc.cli import CLI, InteractiveInput, definition

from argparse import ArgumentTypeError
from pytest import fixture, raises


def run(capsys, *args):
    CLI().run(args=list(args))
    return capsys.readouterr()


def test_expression(capsys):
    captured = run(capsys, '-e', '3 + 4 * 2')
    assert captured.out == '11.0\n'
    assert captured.err == ''


def test_several_expressions(capsys):
    captured = run(capsys, '-e', '2^3^2', '-2^2')
    assert captured.out.splitlines() == ['512.0', '-4.0']


def test_defines(capsys):
    captured = run(capsys, '-d', 'x=3', '-d', 'y=4', '-e', 'x*2+y')
    assert captured.out == '10.0\n'


def test_error_does_not_stop(capsys):
    captured = run(capsys, '-e', '1/0', '3@4', '(3+4', '1 + 1')
    assert captured.out == '2.0\n'
    assert captured.err.splitlines() == [
        'evaluation error: Cannot divide by zero',
        "lexical error: Invalid character '@' at position 1",
        "syntax error: Expected ')' to close parenthesis at position 0, "
        "found end of input at position 4",
    ]


def test_undefined_without_prompt(capsys):
    captured = run(capsys, '-e', 'x + 1')
    assert captured.err == 'evaluation error: Variable x is not defined\n'


def test_verbose_traceback(capsys):
    captured = run(capsys, '-v', '-e', '1/0')
    assert 'Traceback' in captured.err
    assert 'DivisionByZero' in captured.err


def test_blank_and_quit(capsys):
    captured = run(capsys, '-e', '', '1', 'exit', '2')
    assert captured.out == '1.0\n'


def test_tree(capsys):
    captured = run(capsys, '-T', '-e', '1 + 2')
    assert captured.out.splitlines() == ['[+]', '├── 1', '└── 2', '3.0']


def test_dump(capsys):
    captured = run(capsys, '-D', '-e', 'sin(x)')
    lines = captured.out.splitlines()
    assert lines[0] == '<kind>\t<lexeme>\t<value>\t<position>'
    assert [line.split('\t')[0] for line in lines[1:]] == [
        'SIN', 'L_PAREN', 'VAR', 'R_PAREN', 'EOF']


def test_raw_grammar(capsys):
    captured = run(capsys, '-G')
    assert '(?<number>' in captured.out


def test_selftest(capsys):
    captured = run(capsys, '-t')
    assert captured.out.endswith('24 passed, 0 failed\n')


def test_selftest_command(capsys):
    captured = run(capsys, '-e', 'test')
    assert '24 passed' in captured.out


def test_definition():
    assert definition('x=2.5') == ('x', 2.5)
    assert definition(' y =1') == ('y', 1.0)


def test_bad_definitions():
    for text in ['x', 'x=abc', 'pi=3', '1x=3', '=3', 'x=nan', 'x=inf']:
        with raises(ArgumentTypeError):
            definition(text)


def test_bad_define_exits(capsys):
    with raises(SystemExit):
        run(capsys, '-d', 'x', '-e', 'x')
    assert regex.search('expected NAME=VALUE', capsys.readouterr().err)


def test_deep_nesting_does_not_stop(capsys):
    deep = '(' * 300 + '1' + ')' * 300
    captured = run(capsys, '-e', deep, '1 + 1')
    assert captured.out == '2.0\n'
    assert captured.err == 'syntax error: Expression nested too deeply\n'


def test_command_aliases(capsys):
    captured = run(capsys, '-e', 'PRUEBAS', 'Salir', '1')
    assert '24 passed' in captured.out
    assert not captured.out.endswith('1.0\n')


@fixture
def terminal(monkeypatch, tmp_path):
    monkeypatch.setattr(CLI, 'HISTORY_FILE', str(tmp_path / 'history'))
    with create_pipe_input() as pipe:
        yield pipe


def interact(capsys, terminal, text, *args):
    terminal.send_text(text)
    CLI(input=terminal, output=DummyOutput()).run(args=['-p', *args])
    return capsys.readouterr()


def test_prompt_asks_for_variables(capsys, terminal):
    captured = interact(capsys, terminal, 'x*2+y\n3\n4\nexit\n')
    assert captured.out == '10.0\n'
    assert captured.err == ''


def test_prompt_uses_defines_first(capsys, terminal):
    captured = interact(capsys, terminal, 'x*2+y\n4\nexit\n', '-d', 'x=3')
    assert captured.out == '10.0\n'


def test_prompt_bad_value(capsys, terminal):
    captured = interact(capsys, terminal, 'x + 1\nabc\nx + 1\nnan\n2 * 3\n'
                                          'exit\n')
    assert captured.out == '6.0\n'
    assert captured.err.splitlines() == [
        "calculator error: Cannot convert 'abc' to a value for x",
        "calculator error: Cannot convert 'nan' to a value for x",
    ]


def test_prompt_end_of_input_at_value(capsys, terminal):
    captured = interact(capsys, terminal, 'x + 1\n\x041 + 2\nexit\n')
    assert captured.err == 'calculator error: No value given for x\n'
    assert captured.out == '3.0\n'


def test_prompt_test_command(capsys, terminal):
    captured = interact(capsys, terminal, 'test\nexit\n')
    assert captured.out.endswith('24 passed, 0 failed\n')


def test_ask_keeps_prompt_and_history(terminal):
    terminal.send_text('x\n2\n')
    interactive = InteractiveInput('> ', input=terminal, output=DummyOutput())
    lines = iter(interactive)
    assert next(lines) == 'x'
    assert interactive.ask('x') == '2'
    assert interactive.session.message == '> '
    assert list(interactive.session.history.get_strings()) == ['x']
