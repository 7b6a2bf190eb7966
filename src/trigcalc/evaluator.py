import math
import operator

from . import nodes
from .nodes import (BinaryOp, BinaryOperator, FunctionCall, NumberLiteral,
                    UnaryOp, VariableRef, children)
from .util import DivisionByZero, EvalError, InvalidFunction, UndefinedVariable


def _odd(exponent):
    return exponent % 2 == 1


def _power(base, exponent):
    '''
    Real power with IEEE results instead of Python's exceptions.

    Undefined over the reals gives NaN, overflow and 0^-n give infinity.
    '''
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _odd(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0:
            # IEEE: (-0)^-n is -inf for odd n
            return math.copysign(math.inf, base) if _odd(exponent) \
                else math.inf
        return math.nan


def _trig(f):
    def wrapped(argument):
        # math.sin(inf) and friends raise rather than giving NaN.
        if math.isinf(argument):
            return math.nan
        return f(argument)
    wrapped.__name__ = f.__name__
    wrapped.__doc__ = f.__doc__
    return wrapped


class Evaluator:
    '''
    Tree-walking evaluator of expression ASTs.

    Holds no state: the environment is passed per call and never written to.
    '''
    OPERATORS = {
        BinaryOperator.ADD: operator.add,
        BinaryOperator.SUB: operator.sub,
        BinaryOperator.MUL: operator.mul,
        BinaryOperator.DIV: operator.truediv,
        BinaryOperator.POW: _power,
    }
    FUNCTIONS = {
        'sin': _trig(math.sin),
        'cos': _trig(math.cos),
        'tan': _trig(math.tan),
    }
    assert set(FUNCTIONS) == nodes.FUNCTIONS

    def evaluate(self, root, env=None):
        '''
        Return the value of root, children before parents.

        :param root: AST node.
        :param env: Mapping of variable names to values.
        :raises EvalError: UndefinedVariable, DivisionByZero, InvalidFunction.
        '''
        try:
            return self._evaluate(root, {} if env is None else env)
        except RecursionError:
            raise EvalError('Expression nested too deeply') from None

    def _evaluate(self, node, env):
        if isinstance(node, NumberLiteral):
            return float(node.value)
        elif isinstance(node, VariableRef):
            try:
                return float(env[node.name])
            except KeyError:
                raise UndefinedVariable(node.name) from None
        elif isinstance(node, UnaryOp):
            return -self._evaluate(node.operand, env)
        elif isinstance(node, BinaryOp):
            left = self._evaluate(node.left, env)
            right = self._evaluate(node.right, env)
            if node.op is BinaryOperator.DIV and right == 0:
                raise DivisionByZero()
            return type(self).OPERATORS[node.op](left, right)
        elif isinstance(node, FunctionCall):
            argument = self._evaluate(node.argument, env)
            try:
                f = type(self).FUNCTIONS[node.name]
            except KeyError:
                raise InvalidFunction(node.name) from None
            return f(argument)
        raise EvalError('Cannot evaluate {!r}'.format(node))

    def free_variables(self, root):
        '''
        Return the distinct variable names of root, in order of appearance.
        '''
        names = dict()
        pending = [root]
        while pending:
            node = pending.pop()
            if isinstance(node, VariableRef):
                names.setdefault(node.name)
            # Reversed, so the leftmost child is popped first.
            pending.extend(reversed(children(node)))
        return tuple(names)


def evaluate(root, env=None):
    '''
    Return the value of root given env.
    '''
    return Evaluator().evaluate(root, env)


def collect_free_variables(root):
    '''
    Return the variable names root needs bound, in order of appearance.
    '''
    return Evaluator().free_variables(root)
