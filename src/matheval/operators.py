'''
Operator registry.

Operators are single characters with a fixed arity, a precedence (higher
binds tighter) and an associativity. Their bodies take one ordered sequence
of numbers, leftmost operand first, and return a number.
'''

from enum import Enum
import math
import operator

from .tokens import STRUCTURAL
from .util import (OperatorRegistrationError, OperationArgumentError,
                   wrap_user_errors)


class Associativity(Enum):
    LEFT = 'Left'
    RIGHT = 'Right'


class Operator:
    '''
    Registered operator: symbol, body, arity, precedence, associativity.
    '''

    def __init__(self, symbol, function, arity=2, precedence=2,
                 associativity=Associativity.LEFT):
        self.symbol = symbol
        self.function = function
        self.arity = arity
        self.precedence = precedence
        self.associativity = associativity
        # Braces in the symbol would be read as format fields
        label = repr(symbol).replace('{', '{{').replace('}', '}}')
        self._invoke = wrap_user_errors('Operator ' + label + ' on {0}')(
            function)

    def __call__(self, values):
        '''
        Apply to operands, in their original left-to-right order.
        '''
        values = list(values)
        for value in values:
            if isinstance(value, str):
                raise OperationArgumentError(
                    'Operator {} expects numbers, got {!r}'.format(
                        repr(self.symbol), value))
        result = float(self._invoke(values))
        if not math.isfinite(result):
            raise OperationArgumentError(
                'Operator {} on {}: result out of range'.format(
                    repr(self.symbol), values))
        return result

    def __repr__(self):
        return 'Operator({!r}, arity={}, precedence={}, {})'.format(
            self.symbol, self.arity, self.precedence,
            self.associativity.value)


def _unary(f):
    def wrapped(values):
        return f(values[0])
    wrapped.__name__ = f.__name__
    wrapped.__doc__ = f.__doc__
    return wrapped


def _binary(f):
    def wrapped(values):
        return f(values[0], values[1])
    wrapped.__name__ = f.__name__
    wrapped.__doc__ = f.__doc__
    return wrapped


def _truth(f):
    '''
    Comparison result as 1.0/0.0.
    '''
    def wrapped(left, right):
        return 1.0 if f(left, right) else 0.0
    wrapped.__name__ = f.__name__
    return wrapped


def factorial(value):
    '''
    Product n * (n - 1) * ... * 1 of the floor of value.

    3.7! is 3!. Unlike the fact function, never goes through gamma.
    '''
    n = math.floor(value)
    if n < 0:
        raise ValueError('factorial of negative number {}'.format(value))
    result = 1.0
    while n > 1:
        result *= n
        n -= 1
    return result


def approximately_equal(epsilon):
    '''
    Return equality on floats within epsilon. Zero means exact.
    '''
    if not epsilon:
        return operator.__eq__

    def isclose(left, right):
        return math.isclose(left, right, rel_tol=epsilon, abs_tol=epsilon)
    return isclose


def _and(left, right):
    return left != 0 and right != 0


def _or(left, right):
    return left != 0 or right != 0


class OperatorLibrary:
    '''
    Mutable symbol -> Operator mapping, seeded with the standard operators.

    Lookups are exact; callers lower-case symbols on registration.
    '''

    DEFAULT_EPSILON = 1e-12

    def __init__(self, epsilon=None, standard=True):
        self.epsilon = (type(self).DEFAULT_EPSILON
                        if epsilon is None
                        else epsilon)
        self._operators = dict()
        if standard:
            self.load_standard()

    def load_standard(self):
        L = Associativity.LEFT
        for symbol, function, arity, precedence, associativity in [
                ('+', _binary(operator.__add__), 2, 2, L),
                ('-', _binary(operator.__sub__), 2, 2, L),
                ('*', _binary(operator.__mul__), 2, 3, L),
                ('/', _binary(operator.__truediv__), 2, 3, L),
                # Truncated remainder, sign follows the dividend
                ('%', _binary(math.fmod), 2, 3, L),
                # Left-associative: 2^3^4 is (2^3)^4
                ('^', _binary(math.pow), 2, 4, L),
                ('!', _unary(factorial), 1, 10, L),
                ('>', _binary(_truth(operator.__gt__)), 2, 1, L),
                ('<', _binary(_truth(operator.__lt__)), 2, 1, L),
                ('=', _binary(_truth(self._equal)), 2, 1, L),
                ('&', _binary(_truth(_and)), 2, 1, L),
                ('|', _binary(_truth(_or)), 2, 1, L)]:
            self.add(symbol, function, arity, precedence, associativity)

    def _equal(self, left, right):
        '''
        = under the current epsilon.
        '''
        return approximately_equal(self.epsilon)(left, right)

    def add(self, symbol, function, arity=2, precedence=2,
            associativity=Associativity.LEFT):
        '''
        Register (or replace) an operator.
        '''
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise OperatorRegistrationError(
                'Operators must be a single character, not {!r}'.format(
                    symbol))
        if symbol in STRUCTURAL or symbol.isspace():
            raise OperatorRegistrationError(
                "Unable to add operators named '(', ')', ',' or space")
        if arity < 1:
            raise OperatorRegistrationError(
                'Operator {!r} needs at least one operand'.format(symbol))
        if not isinstance(associativity, Associativity):
            associativity = Associativity(associativity)
        self._operators[symbol] = Operator(symbol, function, arity,
                                           precedence, associativity)

    def remove(self, symbol):
        self._operators.pop(symbol, None)

    def get(self, symbol):
        return self._operators.get(symbol)

    def __getitem__(self, symbol):
        return self._operators[symbol]

    def __contains__(self, symbol):
        return symbol in self._operators

    def __iter__(self):
        return iter(self._operators)

    def __len__(self):
        return len(self._operators)
