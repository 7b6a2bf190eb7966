from collections import namedtuple
from enum import Enum
from functools import reduce
import math
import operator

import regex

from .util import LexError


class TokenType(Enum):
    NUMBER = 'number'
    VAR = 'variable'
    PLUS = '+'
    MINUS = '-'
    MULTI = '*'
    DIV = '/'
    POW = '^'
    L_PAREN = '('
    R_PAREN = ')'
    SIN = 'sin'
    COS = 'cos'
    TAN = 'tan'
    PI = 'pi'
    E = 'e'
    EOF = 'end of input'


class Token(namedtuple('Token', 'kind lexeme value position')):
    '''
    Lexeme of an expression.

    value is the numeric payload of numbers and constants, None otherwise.
    position is the offset of the lexeme in the input line.
    '''
    __slots__ = ()

    def describe(self):
        '''
        Return how the token reads in an error message.
        '''
        if self.kind is TokenType.EOF:
            return self.kind.value
        return repr(self.lexeme)

    def __str__(self):
        return '{}\t{!r}\t{}\t@{}'.format(self.kind.name, self.lexeme,
                                          self.value, self.position)


class Lexer:
    '''
    Lexer for the expression *regular* grammar.

    For consistency with Parser and Evaluator, needs to be instantiated,
    despite holding no internal state.
    '''
    OPERATORS = {
        '+': TokenType.PLUS,
        '-': TokenType.MINUS,
        '*': TokenType.MULTI,
        '/': TokenType.DIV,
        '^': TokenType.POW,
        '(': TokenType.L_PAREN,
        ')': TokenType.R_PAREN,
    }
    # sen is the Spanish spelling, kept as an alias.
    KEYWORDS = {
        'sin': TokenType.SIN,
        'sen': TokenType.SIN,
        'cos': TokenType.COS,
        'tan': TokenType.TAN,
        'pi': TokenType.PI,
        'e': TokenType.E,
    }
    CONSTANTS = {
        TokenType.PI: math.pi,
        TokenType.E: math.e,
    }

    # Number, at most one decimal point.
    NUMBER = r'''
              (?:
                  # 1, 12, 1. (notice trailing dot), 1.3
                  \d+
                  (?:
                      \.
                      \d*
                  )?
              )|(?:
                  # .5
                  \.
                  \d+
              )
              '''
    # Letters only. Digits never continue a name, so sin1 is sin then 1.
    NAME = r'\p{L}+'

    assert not [symbol
                for symbol
                in OPERATORS
                if len(symbol) != 1]
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, OPERATORS)) + r')'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<name>' + NAME + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<space>' + SPACE + r')'
    # What to report when a number runs into a second decimal point.
    MALFORMED = r'[\d.]+'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    def lex(self, line):
        '''
        Take a line and yield all tokens, ending with EOF.

        Raises LexError on the first bad character or malformed number.
        '''
        position = 0
        while position < len(line):
            match = type(self).PATTERN.match(line, position)
            if match is None:
                raise self._error(line, position)
            groups = self.matchedgroups(match)
            if 'number' in groups and line.startswith('.', match.end()):
                raise self._malformed(line, position)
            position = match.end()
            if 'space' not in groups:
                yield self.token(groups, match.start())
        yield Token(TokenType.EOF, '', None, len(line))

    def tokenize(self, line):
        '''
        Return the complete token list of line.
        '''
        return list(self.lex(line))

    def token(self, groups, position):
        '''
        Build token from the matched groups of a lexeme.
        '''
        if 'number' in groups:
            lexeme = groups['number']
            return Token(TokenType.NUMBER, lexeme, float(lexeme), position)
        elif 'name' in groups:
            lexeme = groups['name']
            kind = type(self).KEYWORDS.get(lexeme, TokenType.VAR)
            return Token(kind, lexeme, type(self).CONSTANTS.get(kind),
                         position)
        else:
            lexeme = groups['operator']
            return Token(type(self).OPERATORS[lexeme], lexeme, None, position)

    def matchedgroups(self, match):
        '''
        Return the lexeme groups that matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def _malformed(self, line, position):
        lexeme = regex.match(type(self).MALFORMED, line[position:]).group(0)
        return LexError('Malformed number {!r} at position {}'
                        .format(lexeme, position),
                        position=position)

    def _error(self, line, position):
        # A dot that starts no number: ".", ".x"
        if line[position] == '.':
            return self._malformed(line, position)
        return LexError('Invalid character {!r} at position {}'
                        .format(line[position], position),
                        position=position)


def tokenize(line):
    '''
    Return the token list of line, ending with exactly one EOF.
    '''
    return Lexer().tokenize(line)
