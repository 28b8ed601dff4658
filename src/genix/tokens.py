'''
Tokens shared by the lexer, shunter and evaluator.

One class per kind of token, so a token only ever carries the payload that
makes sense for it. Tokens remember where they came from in the source, but
the position is not part of their identity.
'''


class Token:
    '''
    Immutable token. Subclasses name their payload in FIELDS.
    '''
    FIELDS = ()
    __slots__ = ('position',)

    def __init__(self, *payload, position=None):
        if len(payload) != len(self.FIELDS):
            raise TypeError('{} takes {} payload argument(s)'.format(
                type(self).__name__, len(self.FIELDS)))
        for name, value in zip(self.FIELDS, payload):
            object.__setattr__(self, name, value)
        object.__setattr__(self, 'position', position)

    def __setattr__(self, name, value):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    @property
    def payload(self):
        return tuple(getattr(self, name) for name in self.FIELDS)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.payload == other.payload

    def __hash__(self):
        return hash((type(self), self.payload))

    def __repr__(self):
        return '{}({})'.format(type(self).__name__,
                               ', '.join(map(repr, self.payload)))

    def __str__(self):
        return ' '.join(map(str, self.payload))


class Number(Token):
    FIELDS = ('value',)
    __slots__ = FIELDS


class BinaryOp(Token):
    FIELDS = ('op',)
    __slots__ = FIELDS


class PostfixOp(Token):
    FIELDS = ('op',)
    __slots__ = FIELDS


class Function(Token):
    FIELDS = ('name',)
    __slots__ = FIELDS


class LParen(Token):
    __slots__ = ()

    def __str__(self):
        return '('


class RParen(Token):
    __slots__ = ()

    def __str__(self):
        return ')'


BINARY_OPERATORS = frozenset('+-*/^')
POSTFIX_OPERATORS = frozenset('!')
# neg is never read from source, only synthesized for unary minus.
FUNCTIONS = frozenset({'sin', 'cos', 'tan', 'log', 'sqrt', 'neg'})
NEG = 'neg'
