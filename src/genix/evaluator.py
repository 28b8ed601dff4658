import operator
import math

from .util import (ParseError, DomainError, ArityError, CapacityError,
                   wrap_user_errors)
from .tokens import Number, BinaryOp, PostfixOp, Function


# Anything closer to zero than this is zero, as far as dividing by it or
# taking the tangent where the cosine vanishes is concerned.
EPSILON = 1e-12
# How far a factorial operand may be from the integer it stands for.
INTEGRAL_TOLERANCE = 1e-6
# Last n for which n! is exact in a double.
MAX_FACTORIAL = 20


def _divide(lhs, rhs):
    if abs(rhs) < EPSILON:
        raise DomainError('Division by zero.')
    return lhs / rhs


def _power(lhs, rhs):
    try:
        return math.pow(lhs, rhs)
    except OverflowError as e:
        raise DomainError('Numeric overflow.') from e
    except ValueError as e:
        # Negative base with a fractional exponent, or 0 to a negative power.
        raise DomainError('Power domain error.') from e


def factorial(n):
    '''
    Factorial of a double standing for a small non-negative integer.
    '''
    if not math.isfinite(n) or n < 0:
        raise DomainError('Invalid input for factorial.')
    rounded = math.floor(n + 0.5)
    if abs(n - rounded) > INTEGRAL_TOLERANCE or rounded > MAX_FACTORIAL:
        raise DomainError('Invalid input for factorial.')
    return float(math.factorial(rounded))


def tangent(degrees):
    radians = math.radians(degrees)
    if abs(math.cos(radians)) < EPSILON:
        raise DomainError('Undefined tangent for {:.4f} degrees.'
                          .format(degrees))
    return math.tan(radians)


def logarithm(x):
    if x <= 0:
        raise DomainError('Logarithm domain error.')
    return math.log(x)


def square_root(x):
    if x < 0:
        raise DomainError('Square root of negative number.')
    return math.sqrt(x)


class Evaluator:
    '''
    Stack machine running postfix token lists.
    '''
    DEFAULT_MAX_STACK = 128

    BINARY = {
        '+': operator.__add__,
        '-': operator.__sub__,
        '*': operator.__mul__,
        '/': _divide,
        '^': _power,
    }

    POSTFIX = {
        '!': factorial,
    }

    # Trigonometry is in degrees.
    FUNCTIONS = {
        'sin': lambda x: math.sin(math.radians(x)),
        'cos': lambda x: math.cos(math.radians(x)),
        'tan': tangent,
        'log': logarithm,
        'sqrt': square_root,
        'neg': operator.__neg__,
    }

    def __init__(self, max_stack=DEFAULT_MAX_STACK):
        '''
        :param max_stack: Most values the stack may hold. None for no limit.
        '''
        self.max_stack = max_stack

    def evaluate(self, tokens):
        '''
        Run postfix tokens and return the single value they reduce to.
        '''
        stack = []
        for token in tokens:
            try:
                self._step(stack, token)
            except (DomainError, ArityError, CapacityError) as e:
                if e.position is None:
                    e.position = token.position
                raise
        if len(stack) != 1:
            raise ParseError('Invalid expression.')
        result = stack[0]
        if not math.isfinite(result):
            raise DomainError('Numeric overflow.')
        return result

    def _step(self, stack, token):
        if isinstance(token, Number):
            if self.max_stack is not None and len(stack) >= self.max_stack:
                raise CapacityError('Evaluation stack overflow.')
            stack.append(token.value)
        elif isinstance(token, BinaryOp):
            if len(stack) < 2:
                raise ArityError("Operator '{}' missing operands."
                                 .format(token.op))
            rhs = stack.pop()
            stack[-1] = self._apply(type(self).BINARY[token.op],
                                    stack[-1], rhs)
        elif isinstance(token, PostfixOp):
            if not stack:
                raise ArityError('Factorial requires an operand.')
            stack[-1] = self._apply(type(self).POSTFIX[token.op], stack[-1])
        elif isinstance(token, Function):
            if not stack:
                raise ArityError('Function requires an operand.')
            stack[-1] = self._apply(type(self).FUNCTIONS[token.name],
                                    stack[-1])
        else:
            raise ParseError('Invalid token during evaluation.',
                             position=token.position)

    @wrap_user_errors('Math domain error.', DomainError)
    def _apply(self, f, *operands):
        return f(*operands)
