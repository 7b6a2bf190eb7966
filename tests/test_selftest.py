'''
Built-in self-test tests
'''

from trigcalc import selftest
from trigcalc.selftest import Failure, Scenario, check, check_failure
from trigcalc.util import DivisionByZero, ParseError


def test_all_scenarios_pass(capsys):
    report = selftest.run()
    assert report == (24, 0)
    out = capsys.readouterr().out
    assert 'FAIL' not in out
    assert out.endswith('24 passed, 0 failed\n')


def test_wrong_value_fails():
    ok, detail = check(Scenario('1 + 1', None, 3.0, 1e-6, 'wrong'))
    assert not ok
    assert '(expected 3.0)' in detail


def test_error_in_value_scenario_fails():
    ok, detail = check(Scenario('1 +', None, 1.0, 1e-6, 'broken'))
    assert not ok
    assert detail.startswith('unexpected syntax error')


def test_missing_error_fails():
    ok, detail = check_failure(Failure('1 + 1', ParseError, 'fine'))
    assert not ok
    assert detail == 'expected ParseError but got 2.0'


def test_wrong_error_fails():
    ok, detail = check_failure(Failure('1/0', ParseError, 'not syntax'))
    assert not ok
    assert 'DivisionByZero' in detail


def test_expected_error_passes():
    ok, _ = check_failure(Failure('2/0', DivisionByZero, 'zero'))
    assert ok
