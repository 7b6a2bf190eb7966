'''
Built-in self-test: replays a fixed table of expressions through the pipeline.
'''

from collections import namedtuple
import math

from .evaluator import Evaluator
from .lexer import Lexer
from .parser import Parser
from .util import CalcError, DivisionByZero, LexError, ParseError

DEFAULT_TOLERANCE = 1e-6

Scenario = namedtuple('Scenario', 'expression env expected tolerance '
                                  'description')
Failure = namedtuple('Failure', 'expression error description')
Report = namedtuple('Report', 'passed failed')


SCENARIOS = (
    Scenario('3 + 4 * 2', None, 11.0, DEFAULT_TOLERANCE,
             'Multiplication before addition'),
    Scenario('(3 + 4) * 2', None, 14.0, DEFAULT_TOLERANCE,
             'Parentheses override precedence'),
    Scenario('-2^2', None, -4.0, DEFAULT_TOLERANCE,
             'Negation binds looser than power: -(2^2)'),
    Scenario('2^3^2', None, 512.0, DEFAULT_TOLERANCE,
             'Power is right associative: 2^(3^2)'),
    Scenario('sin(pi/2)', None, 1.0, 1e-4, 'sin(π/2) = 1'),
    Scenario('cos(0) + sin(pi)', None, 1.0, 1e-4, 'cos(0) + sin(π) ≈ 1'),
    Scenario('x*2+y', {'x': 3.0, 'y': 4.0}, 10.0, DEFAULT_TOLERANCE,
             'Variables x=3, y=4'),
    Scenario('3.5 * 2.0 + .5', None, 7.5, DEFAULT_TOLERANCE,
             'Decimal literals, leading dot'),
    Scenario('tan(pi/4)', None, 1.0, 1e-4, 'tan(π/4) = 1'),
    Scenario('2^(1/2)', None, 1.41421356, 1e-5, 'Square root as power'),
    Scenario('cos(x)^2 + sin(x)^2', {'x': 0.5}, 1.0, 1e-4,
             'Pythagorean identity'),
    Scenario('sin(cos(x))', {'x': 0.0}, 0.8414709848, 1e-4,
             'Function composition'),
    Scenario('-(-5)', None, 5.0, DEFAULT_TOLERANCE, 'Double negation'),
    Scenario('e^1', None, math.e, 1e-5, 'Constant e'),
    Scenario('2*pi', None, 2 * math.pi, 1e-5, 'Multiple of π'),
)

FAILURES = (
    Failure('3+*4', ParseError, 'Operator without operand'),
    Failure('5..3', LexError, 'Malformed number'),
    Failure('(3+4', ParseError, 'Unclosed parenthesis'),
    Failure('3+4)', ParseError, 'Unmatched closing parenthesis'),
    Failure('', ParseError, 'Empty expression'),
    Failure('1/0', DivisionByZero, 'Division by zero'),
    Failure('3@4', LexError, 'Invalid character'),
    Failure('sin1', ParseError, 'Function without parentheses'),
    Failure('3++4', ParseError, 'Consecutive operators'),
)


def calculate(expression, env=None):
    '''
    Run expression through every phase and return its value.
    '''
    tokens = Lexer().tokenize(expression)
    root = Parser(tokens).parse()
    return Evaluator().evaluate(root, env)


def check(scenario):
    '''
    Return (passed, detail) for a value scenario.
    '''
    try:
        result = calculate(scenario.expression, scenario.env)
    except CalcError as e:
        return False, 'unexpected {} error: {}'.format(e.kind, e)
    detail = '{!r} (expected {!r})'.format(result, scenario.expected)
    return abs(result - scenario.expected) < scenario.tolerance, detail


def check_failure(failure):
    '''
    Return (passed, detail) for a scenario that must raise.
    '''
    try:
        result = calculate(failure.expression)
    except failure.error as e:
        return True, '{} error: {}'.format(e.kind, e)
    except CalcError as e:
        return False, 'wrong error {}: {}'.format(type(e).__name__, e)
    return False, 'expected {} but got {!r}'.format(failure.error.__name__,
                                                     result)


def run(file=None):
    '''
    Print a line per scenario and a summary, return the Report.
    '''
    passed = failed = 0
    cases = [(scenario, check) for scenario in SCENARIOS] + \
            [(failure, check_failure) for failure in FAILURES]
    for case, checker in cases:
        ok, detail = checker(case)
        if ok:
            passed += 1
        else:
            failed += 1
        print('PASS' if ok else 'FAIL', repr(case.expression), detail,
              '# ' + case.description, sep='\t', file=file)
    print('{} passed, {} failed'.format(passed, failed), file=file)
    return Report(passed, failed)
