'''
AST node variants.

A closed set of immutable nodes. Every consumer (children, the evaluator, the
printer) checks each variant in turn and fails loudly on anything else.
'''

from collections import namedtuple
from enum import Enum


class UnaryOperator(Enum):
    NEG = '-'


class BinaryOperator(Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    POW = '^'


# Function names a FunctionCall may carry.
FUNCTIONS = frozenset({'sin', 'cos', 'tan'})


def _require(*children):
    if any(child is None for child in children):
        raise ValueError('AST node children must be present')


class NumberLiteral(namedtuple('NumberLiteral', 'value')):
    __slots__ = ()


class VariableRef(namedtuple('VariableRef', 'name')):
    __slots__ = ()


class UnaryOp(namedtuple('UnaryOp', 'op operand')):
    __slots__ = ()

    def __new__(cls, op, operand):
        _require(operand)
        return super().__new__(cls, op, operand)


class BinaryOp(namedtuple('BinaryOp', 'op left right')):
    __slots__ = ()

    def __new__(cls, op, left, right):
        _require(left, right)
        return super().__new__(cls, op, left, right)


class FunctionCall(namedtuple('FunctionCall', 'name argument')):
    __slots__ = ()

    def __new__(cls, name, argument):
        _require(argument)
        return super().__new__(cls, name, argument)


def children(node):
    '''
    Return the child nodes of node, left to right.
    '''
    if isinstance(node, (NumberLiteral, VariableRef)):
        return ()
    elif isinstance(node, UnaryOp):
        return (node.operand,)
    elif isinstance(node, BinaryOp):
        return (node.left, node.right)
    elif isinstance(node, FunctionCall):
        return (node.argument,)
    raise TypeError('Not an AST node: {!r}'.format(node))
