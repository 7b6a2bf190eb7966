'''
Expression calculator.

Supports plain old arithmetic (+, -, *, /, ^), the trigonometric functions sin
(or sen), cos and tan in radians, the constants pi and e, and free variables
bound at evaluation time. Not intended to be Turing-complete!

Three phases, each failing on its first error:

- Lexer: string to tokens.
- Parser: tokens to an AST, by recursive descent.
- Evaluator: AST and variable bindings to a float.
'''

from .cli import CLI
from .evaluator import Evaluator, collect_free_variables, evaluate
from .lexer import Lexer, Token, TokenType, tokenize
from .parser import Parser, parse
from .util import (CalcError, DivisionByZero, EvalError, InvalidFunction,
                   LexError, ParseError, UndefinedVariable)


__all__ = ('tokenize', 'parse', 'evaluate', 'collect_free_variables',
           'Lexer', 'Parser', 'Evaluator', 'CLI', 'Token', 'TokenType',
           'CalcError', 'LexError', 'ParseError', 'EvalError',
           'UndefinedVariable', 'DivisionByZero', 'InvalidFunction')
