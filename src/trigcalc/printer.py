'''
AST visualizer.

Renders a tree top down, root first, one node per line:

    [+]
    ├── 3
    └── [*]
        ├── 4
        └── 2
'''

import math

from .nodes import (BinaryOp, FunctionCall, NumberLiteral, UnaryOp,
                    VariableRef, children)
from .util import CalcError

# Closeness at which a number is shown as its constant's symbol.
CONSTANT_TOLERANCE = 1e-6
CONSTANTS = (
    (math.pi, 'π'),
    (math.e, 'e'),
)


def format_number(value):
    if math.isfinite(value) and value == math.floor(value):
        return '{:.0f}'.format(value)
    for constant, symbol in CONSTANTS:
        if abs(value - constant) < CONSTANT_TOLERANCE:
            return symbol
    return repr(value)


def label(node):
    '''
    Return the one-line description of node, without its children.
    '''
    if isinstance(node, NumberLiteral):
        return format_number(node.value)
    elif isinstance(node, VariableRef):
        return node.name
    elif isinstance(node, (BinaryOp, UnaryOp)):
        return '[{}]'.format(node.op.value)
    elif isinstance(node, FunctionCall):
        return '{}()'.format(node.name)
    raise TypeError('Not an AST node: {!r}'.format(node))


def render(node):
    '''
    Return the lines of the tree drawing of node.
    '''
    try:
        return _render(node)
    except RecursionError:
        raise CalcError('Expression nested too deeply to draw') from None


def _render(node):
    lines = [label(node)]
    branches = children(node)
    for i, child in enumerate(branches):
        last = i == len(branches) - 1
        head, tail = ('└── ', '    ') if last else ('├── ', '│   ')
        child_lines = _render(child)
        lines.append(head + child_lines[0])
        lines.extend(tail + line for line in child_lines[1:])
    return lines


def draw(node, file=None):
    '''
    Print the tree drawing of node.
    '''
    print(*render(node), sep='\n', file=file)
