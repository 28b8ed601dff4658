from functools import reduce
import operator
import math

import regex

from .util import LexError, CapacityError
from .tokens import (Number, BinaryOp, PostfixOp, Function, LParen, RParen,
                     FUNCTIONS, NEG)


class Lexer:
    '''
    Lexer for the infix calculator grammar.

    Holds no state between calls; the only setting is the token cap.
    '''
    DEFAULT_MAX_TOKENS = 128

    # Number, with an optional fraction and exponent.
    NUMBER = r'''
              (?:
                  # 1, 12, 1. (notice trailing dot), 1.3
                  [0-9]+
                  (?:
                      \.
                      [0-9]*
                  )?
              |
                  # .2
                  \.
                  [0-9]+
              )
              (?:
                  # 1e5, 2.5E-3
                  [eE]
                  [+-]?
                  [0-9]+
              )?
              '''
    # Looks like the start of a number, but isn't one (a lone dot).
    BADNUMBER = r'[0-9.]'
    # Function names and constants. Matched case-insensitively later.
    IDENTIFIER = r'[A-Za-z]+'
    # Context decides whether these are unary or binary.
    ADDITIVE = r'[-+]'
    # Always binary.
    MULTIPLICATIVE = r'[*/^]'
    POSTFIX = r'!'
    LPAREN = r'\('
    RPAREN = r'\)'
    # ASCII only, so every position before an error is also a byte offset.
    SPACE = r'[\x20\t\r\n\f\v]+'
    # Anything else is an error, but we still want to report it.
    INVALID = r'.'

    # Punctuation, as in immediately complete single character lexemes.
    PUNCTUATION = r'(?<lparen>' + LPAREN + r')|' \
                  r'(?<rparen>' + RPAREN + r')|' \
                  r'(?<postfix>' + POSTFIX + r')|' \
                  r'(?<additive>' + ADDITIVE + r')|' \
                  r'(?<multiplicative>' + MULTIPLICATIVE + r')'
    # All possible lexemes. Order matters: first alternative wins.
    LEXEME = r'(?<space>' + SPACE + r')|' \
             r'(?<number>' + NUMBER + r')|' \
             r'(?<badnumber>' + BADNUMBER + r')|' \
             r'(?<identifier>' + IDENTIFIER + r')|' \
             r'(?:' + PUNCTUATION + r')|' \
             r'(?<invalid>' + INVALID + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    # Previous tokens after which + and - act on what follows them.
    UNARY_CONTEXT = (type(None), BinaryOp, LParen, Function)

    def __init__(self, max_tokens=DEFAULT_MAX_TOKENS):
        '''
        :param max_tokens: Most tokens a single source may produce. None for
                           no limit.
        '''
        self.max_tokens = max_tokens

    def lex(self, source):
        '''
        Take a source line and yield its tokens, left to right.

        Raises on the first bad lexeme; nothing after it is yielded.
        '''
        previous = None
        count = 0
        for match in type(self).PATTERN.finditer(source):
            kind = match.lastgroup
            if kind == 'space':
                continue
            token = getattr(self, '_' + kind)(match, previous)
            if token is None:
                continue
            if self.max_tokens is not None and count >= self.max_tokens:
                raise CapacityError('Expression too long.',
                                    position=match.start())
            count += 1
            previous = token
            yield token

    def _number(self, match, previous):
        value = float(match.group())
        if not math.isfinite(value):
            return self._badnumber(match, previous)
        return Number(value, position=match.start())

    def _badnumber(self, match, previous):
        raise LexError('Invalid number near position {}.'
                       .format(match.start()),
                       position=match.start())

    def _identifier(self, match, previous):
        name = match.group().lower()
        if name == 'pi':
            return Number(math.pi, position=match.start())
        # neg is ours, not the user's.
        if name in FUNCTIONS and name != NEG:
            return Function(name, position=match.start())
        raise LexError("Unknown token '{}' near position {}."
                       .format(name, match.start()),
                       position=match.start())

    def _lparen(self, match, previous):
        return LParen(position=match.start())

    def _rparen(self, match, previous):
        return RParen(position=match.start())

    def _postfix(self, match, previous):
        return PostfixOp(match.group(), position=match.start())

    def _additive(self, match, previous):
        op = match.group()
        if isinstance(previous, type(self).UNARY_CONTEXT):
            if op == '-':
                return Function(NEG, position=match.start())
            # Unary plus is a no-op.
            return None
        return BinaryOp(op, position=match.start())

    def _multiplicative(self, match, previous):
        return BinaryOp(match.group(), position=match.start())

    def _invalid(self, match, previous):
        raise LexError("Invalid character '{}' at position {}."
                       .format(match.group(), match.start()),
                       position=match.start())
