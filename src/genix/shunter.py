from .util import ParseError, CapacityError
from .tokens import (Number, BinaryOp, PostfixOp, Function, LParen, RParen,
                     NEG)


LEFT = 'left'
RIGHT = 'right'

# Precedence and associativity, by operator code.
OPERATORS = {
    '+': (1, LEFT),
    '-': (1, LEFT),
    '*': (2, LEFT),
    '/': (2, LEFT),
    '^': (3, RIGHT),
    NEG: (3, RIGHT),
    '!': (4, RIGHT),
}

# Whether to pop on equal precedence is decided by the incoming operator
# alone, which is only sound if every precedence level agrees.
assert all(len({associativity
                for precedence_, associativity
                in OPERATORS.values()
                if precedence_ == precedence}) == 1
           for precedence, _ in OPERATORS.values())


class Shunter:
    '''
    Shunting yard: infix tokens in, postfix tokens out.

    Named functions bind tighter than any operator. Unary minus is a prefix
    operator ranked with ^, so -2^2 is -(2^2), -3! is -(3!), but -2*3 is
    (-2)*3.
    '''
    DEFAULT_MAX_OUTPUT = 128
    DEFAULT_MAX_STACK = 128

    OPERATORS = OPERATORS

    def __init__(self, max_output=DEFAULT_MAX_OUTPUT,
                 max_stack=DEFAULT_MAX_STACK):
        '''
        :param max_output: Most tokens the postfix output may hold.
        :param max_stack: Most tokens the operator stack may hold.

        None for either means no limit.
        '''
        self.max_output = max_output
        self.max_stack = max_stack

    def shunt(self, tokens):
        '''
        Convert infix tokens to a postfix list.
        '''
        output = []
        stack = []
        for token in tokens:
            if isinstance(token, Number):
                self._emit(output, token)
            elif isinstance(token, (Function, LParen)):
                self._push(stack, token)
            elif isinstance(token, (BinaryOp, PostfixOp)):
                while stack and self._pops(stack[-1], token):
                    self._emit(output, stack.pop())
                self._push(stack, token)
            elif isinstance(token, RParen):
                while stack and not isinstance(stack[-1], LParen):
                    self._emit(output, stack.pop())
                if not stack:
                    raise ParseError('Mismatched parentheses.',
                                     position=token.position)
                stack.pop()
                if stack and self._isnamed(stack[-1]):
                    self._emit(output, stack.pop())
            else:
                raise ParseError('Unexpected token {!r}.'.format(token),
                                 position=token.position)
        while stack:
            top = stack.pop()
            if isinstance(top, (LParen, RParen)):
                raise ParseError('Mismatched parentheses.',
                                 position=top.position)
            self._emit(output, top)
        return output

    def precedence(self, token):
        return type(self).OPERATORS[self._code(token)][0]

    def associativity(self, token):
        return type(self).OPERATORS[self._code(token)][1]

    def _code(self, token):
        if isinstance(token, Function):
            return token.name
        return token.op

    def _isnamed(self, token):
        '''
        Return True for sin, cos, etc., but not unary minus.
        '''
        return isinstance(token, Function) and token.name != NEG

    def _pops(self, top, incoming):
        '''
        Return True if top must be output before incoming is pushed.
        '''
        if isinstance(top, LParen):
            return False
        if self._isnamed(top):
            return True
        top_precedence = self.precedence(top)
        incoming_precedence = self.precedence(incoming)
        return (top_precedence > incoming_precedence or
                top_precedence == incoming_precedence and
                self.associativity(incoming) == LEFT)

    def _emit(self, output, token):
        if self.max_output is not None and len(output) >= self.max_output:
            raise CapacityError('Expression too complex.',
                                position=token.position)
        output.append(token)

    def _push(self, stack, token):
        if self.max_stack is not None and len(stack) >= self.max_stack:
            raise CapacityError('Expression too complex.',
                                position=token.position)
        stack.append(token)
