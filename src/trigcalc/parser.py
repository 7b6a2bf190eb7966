from . import nodes
from .lexer import TokenType
from .nodes import (BinaryOp, BinaryOperator, FunctionCall, NumberLiteral,
                    UnaryOp, UnaryOperator, VariableRef)
from .util import ParseError


class Parser:
    '''
    Recursive descent parser, one method per grammar rule.

    Expression := Term (('+' | '-') Term)*
    Term       := Unary (('*' | '/') Unary)*
    Unary      := '-' Unary | Power
    Power      := Primary ('^' Unary)?
    Primary    := NUMBER | PI | E | VAR
                | (SIN | COS | TAN) '(' Expression ')'
                | '(' Expression ')'

    Single use: tokens are consumed once.
    '''
    ADDITIVE = {
        TokenType.PLUS: BinaryOperator.ADD,
        TokenType.MINUS: BinaryOperator.SUB,
    }
    MULTIPLICATIVE = {
        TokenType.MULTI: BinaryOperator.MUL,
        TokenType.DIV: BinaryOperator.DIV,
    }
    FUNCTIONS = {
        TokenType.SIN: 'sin',
        TokenType.COS: 'cos',
        TokenType.TAN: 'tan',
    }
    assert set(FUNCTIONS.values()) == nodes.FUNCTIONS
    LITERALS = {TokenType.NUMBER, TokenType.PI, TokenType.E}

    def __init__(self, tokens):
        '''
        :param tokens: Token sequence ending with exactly one EOF.
        '''
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].kind is not TokenType.EOF:
            raise ValueError('Token stream must end with EOF')
        self.index = 0

    @property
    def current(self):
        return self.tokens[self.index]

    def _advance(self):
        token = self.current
        # Never move past EOF.
        if token.kind is not TokenType.EOF:
            self.index += 1
        return token

    def _expect(self, kind, context):
        token = self.current
        if token.kind is not kind:
            raise ParseError('Expected {!r} {}, found {} at position {}'
                             .format(kind.value, context, token.describe(),
                                     token.position),
                             position=token.position, token=token)
        return self._advance()

    def parse(self):
        '''
        Return the root node of the whole token sequence.
        '''
        if self.current.kind is TokenType.EOF:
            raise ParseError('Empty expression',
                             position=self.current.position,
                             token=self.current)
        try:
            root = self.expression()
        except RecursionError:
            raise ParseError('Expression nested too deeply',
                             position=self.current.position,
                             token=self.current) from None
        token = self.current
        if token.kind is not TokenType.EOF:
            raise ParseError('Unexpected token {} after expression at '
                             'position {}'.format(token.describe(),
                                                  token.position),
                             position=token.position, token=token)
        return root

    def expression(self):
        node = self.term()
        while self.current.kind in type(self).ADDITIVE:
            op = type(self).ADDITIVE[self._advance().kind]
            node = BinaryOp(op, node, self.term())
        return node

    def term(self):
        node = self.unary()
        while self.current.kind in type(self).MULTIPLICATIVE:
            op = type(self).MULTIPLICATIVE[self._advance().kind]
            node = BinaryOp(op, node, self.unary())
        return node

    def unary(self):
        if self.current.kind is TokenType.MINUS:
            self._advance()
            return UnaryOp(UnaryOperator.NEG, self.unary())
        return self.power()

    def power(self):
        base = self.primary()
        if self.current.kind is TokenType.POW:
            self._advance()
            # Recursing into unary, not looping, makes ^ right associative.
            return BinaryOp(BinaryOperator.POW, base, self.unary())
        return base

    def primary(self):
        token = self.current
        if token.kind in type(self).LITERALS:
            self._advance()
            return NumberLiteral(token.value)
        elif token.kind is TokenType.VAR:
            self._advance()
            return VariableRef(token.lexeme)
        elif token.kind in type(self).FUNCTIONS:
            self._advance()
            self._expect(TokenType.L_PAREN,
                         'after function {!r}'.format(token.lexeme))
            argument = self.expression()
            self._expect(TokenType.R_PAREN,
                         'to close {}('.format(token.lexeme))
            return FunctionCall(type(self).FUNCTIONS[token.kind], argument)
        elif token.kind is TokenType.L_PAREN:
            self._advance()
            node = self.expression()
            self._expect(TokenType.R_PAREN,
                         'to close parenthesis at position {}'
                         .format(token.position))
            return node
        raise ParseError('Unexpected token {} at position {}'
                         .format(token.describe(), token.position),
                         position=token.position, token=token)


def parse(tokens):
    '''
    Return the AST root of tokens.
    '''
    return Parser(tokens).parse()
