'''
Function registry.

Functions are looked up by case-insensitive name and take one ordered
sequence of arguments, however many the call site supplied. Numeric
functions only ever see numbers; text functions may also be handed strings.
'''

import math
import statistics

import regex

from .util import (OperatorRegistrationError, OperationArgumentError,
                   wrap_user_errors, format_number)


NAME = regex.compile(r'[a-zA-Z]+')

LANCZOS = (76.18009172947146, -86.50532032941677, 24.01409824083091,
           -1.231739572450155, 0.1208650973866179e-2, -0.5395239384953e-5)
LOG_SQRT_TWO_PI = 0.91893853320467274178


class Function:
    '''
    Registered function.

    :param arity: Number of arguments required, or None if variadic.
    :param text: Whether the body accepts strings as well as numbers.
    '''

    def __init__(self, name, function, arity=None, text=False):
        self.name = name
        self.function = function
        self.arity = arity
        self.text = text
        self._invoke = wrap_user_errors(
            'Function ' + name + ' on {0}')(function)

    def __call__(self, values):
        values = list(values)
        if self.arity is not None and len(values) != self.arity:
            raise OperationArgumentError(
                '{} takes {} argument(s), got {}'.format(
                    self.name, self.arity, len(values)))
        if not self.text:
            for value in values:
                if isinstance(value, str):
                    raise OperationArgumentError(
                        '{} expects numbers, got {!r}'.format(self.name,
                                                               value))
        result = float(self._invoke(values))
        if not math.isfinite(result):
            raise OperationArgumentError(
                'Function {} on {}: result out of range'.format(self.name,
                                                                values))
        return result

    def __repr__(self):
        return 'Function({!r}, arity={}, text={})'.format(
            self.name, self.arity, self.text)


def _unary(f):
    def wrapped(values):
        return f(values[0])
    wrapped.__name__ = f.__name__
    wrapped.__doc__ = f.__doc__
    return wrapped


def _constant(value):
    def wrapped(values):
        return value
    return wrapped


def gamma(v):
    '''
    Lanczos approximation of the gamma function.
    '''
    denom = v + 1
    y = v + 5.5
    series = 1.000000000190015
    for coefficient in LANCZOS:
        series += coefficient / denom
        denom += 1.0
    return math.exp(LOG_SQRT_TWO_PI + (v + 0.5) * math.log(y) - y +
                    math.log(series / v))


def fact(v):
    '''
    gamma(v + 1), to the nearest integer.
    '''
    return float(round(gamma(v + 1)))


def round_to(values):
    return round(values[0], int(values[1]))


def average(values):
    return math.fsum(values) / len(values)


def amax(values):
    '''
    Value with the largest magnitude; first one wins ties.
    '''
    return max(values, key=abs)


def amin(values):
    '''
    Value with the smallest magnitude; first one wins ties.
    '''
    return min(values, key=abs)


def stdev(values):
    '''
    Population standard deviation.
    '''
    return statistics.pstdev(values)


def skew(values):
    '''
    Bias-corrected sample skewness.
    '''
    n = len(values)
    mean = average(values)
    deviation = stdev(values)
    multiplier = n / ((n - 1) * (n - 2))
    return multiplier * math.fsum(((v - mean) / deviation) ** 3
                                  for v in values)


def kurt(values):
    '''
    Bias-corrected sample excess kurtosis.
    '''
    n = len(values)
    mean = average(values)
    deviation = stdev(values)
    multiplier = n * (n + 1) / ((n - 1) * (n - 2) * (n - 3))
    subtractor = 3 * (n - 1) ** 2 / ((n - 2) * (n - 3))
    return multiplier * math.fsum(((v - mean) / deviation) ** 4
                                  for v in values) - subtractor


def first_character(values):
    return ord(format_number(values[0])[0])


def length(values):
    return len(format_number(values[0]))


def equal(values):
    return 1 if format_number(values[0]) == format_number(values[1]) else 0


class FunctionLibrary:
    '''
    Mutable name -> Function mapping, seeded with the standard functions.
    '''

    def __init__(self, standard=True):
        self._functions = dict()
        if standard:
            self.load_standard()

    def load_standard(self):
        for name, function in [('cos', math.cos),
                               ('acos', math.acos),
                               ('cosh', math.cosh),
                               ('sin', math.sin),
                               ('asin', math.asin),
                               ('sinh', math.sinh),
                               ('tan', math.tan),
                               ('atan', math.atan),
                               ('tanh', math.tanh),
                               ('log', math.log10),
                               ('ln', math.log),
                               ('exp', math.exp),
                               ('gamma', gamma),
                               ('fact', fact),
                               ('abs', abs),
                               ('floor', math.floor),
                               ('ceil', math.ceil),
                               ('sqrt', math.sqrt)]:
            self.add(name, _unary(function), arity=1)

        # Constants ignore whatever they are called with
        self.add('pi', _constant(math.pi))
        self.add('e', _constant(math.e))

        self.add('round', round_to, arity=2)

        for name, function in [('max', max),
                               ('min', min),
                               ('avrg', average),
                               ('sum', math.fsum),
                               ('amax', amax),
                               ('amin', amin),
                               ('stdev', stdev),
                               ('skew', skew),
                               ('kurt', kurt)]:
            self.add(name, function)

        self.add('chr', first_character, arity=1, text=True)
        self.add('len', length, arity=1, text=True)
        self.add('equal', equal, arity=2, text=True)
        self.add('count', len, text=True)

    def add(self, name, function, arity=None, text=False):
        '''
        Register (or replace) a function under a case-insensitive name.
        '''
        if not isinstance(name, str) or not NAME.fullmatch(name):
            raise OperatorRegistrationError(
                'Function names must be letters only, not {!r}'.format(name))
        name = name.lower()
        self._functions[name] = Function(name, function, arity, text)

    def remove(self, name):
        self._functions.pop(name.lower(), None)

    def get(self, name):
        return self._functions.get(name.lower())

    def __getitem__(self, name):
        return self._functions[name.lower()]

    def __contains__(self, name):
        return name.lower() in self._functions

    def __iter__(self):
        return iter(self._functions)

    def __len__(self):
        return len(self._functions)
