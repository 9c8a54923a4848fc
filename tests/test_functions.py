'''
Function registry tests
'''

import math

from matheval.functions import FunctionLibrary, gamma, fact, skew, kurt
from matheval.util import OperatorRegistrationError, OperationArgumentError

from pytest import approx, mark, raises


@mark.parametrize('name,argument,expected', [
    ('cos', 0, 1.0),
    ('acos', 1, 0.0),
    ('cosh', 0, 1.0),
    ('sin', 0, 0.0),
    ('asin', 0, 0.0),
    ('sinh', 0, 0.0),
    ('tan', 0, 0.0),
    ('atan', 0, 0.0),
    ('tanh', 0, 0.0),
    ('log', 1000, 3.0),
    ('ln', math.e, 1.0),
    ('exp', 0, 1.0),
    ('abs', -2.5, 2.5),
    ('floor', -1.5, -2.0),
    ('ceil', 1.2, 2.0),
    ('sqrt', 16, 4.0),
])
def test_unary(functions, name, argument, expected):
    assert functions[name]([argument]) == approx(expected)


def test_constants_ignore_arguments(functions):
    assert functions['pi']([]) == math.pi
    assert functions['pi']([1, 2]) == math.pi
    assert functions['e']([]) == math.e


def test_round(functions):
    assert functions['round']([3.14159, 2]) == 3.14
    assert functions['round']([2.5, 0]) == 2.0


def test_variadic(functions):
    values = [3, -7, 1, 5]
    assert functions['max'](values) == 5
    assert functions['min'](values) == -7
    assert functions['sum'](values) == 2
    assert functions['avrg'](values) == 0.5
    assert functions['amax'](values) == -7
    assert functions['amin'](values) == 1
    assert functions['count'](values) == 4


def test_stdev(functions):
    assert functions['stdev']([2, 4, 4, 4, 5, 5, 7, 9]) == 2.0


def test_skew_kurt():
    values = [2, 4, 4, 4, 5, 5, 7, 9]
    # n=8, mean=5, population stdev=2
    # sum of cubed z-scores: (-27 - 1 - 1 - 1 + 0 + 0 + 8 + 64) / 8 = 5.25
    assert skew(values) == approx(8 / (7 * 6) * 5.25)
    # sum of z^4: (81 + 1 + 1 + 1 + 0 + 0 + 16 + 256) / 16 = 22.25
    assert kurt(values) == approx(8 * 9 / (7 * 6 * 5) * 22.25 -
                                  3 * 49 / (6 * 5))


def test_gamma():
    assert gamma(5) == approx(24)
    assert gamma(0.5) == approx(math.sqrt(math.pi))


def test_fact_rounds():
    assert fact(5) == 120
    assert fact(0) == 1
    # Differs from the truncating ! operator
    assert fact(3.7) == round(math.gamma(4.7))


def test_text_functions(functions):
    assert functions['len'](['hello']) == 5
    assert functions['chr'](['a']) == 97
    assert functions['chr']([5]) == ord('5')
    assert functions['equal'](['a', 'a']) == 1
    assert functions['equal'](['a', 'b']) == 0
    assert functions['equal']([2.0, '2']) == 1
    assert functions['count'](['a', 1]) == 2


def test_text_rejected_by_numeric(functions):
    with raises(OperationArgumentError, match='expects numbers'):
        functions['max']([1, 'a'])


def test_fixed_arity_checked(functions):
    with raises(OperationArgumentError, match='cos takes 1'):
        functions['cos']([1, 2])
    with raises(OperationArgumentError):
        functions['round']([1])


def test_errors_wrapped(functions):
    with raises(OperationArgumentError):
        functions['sqrt']([-1])
    with raises(OperationArgumentError):
        functions['max']([])
    with raises(OperationArgumentError):
        functions['skew']([1, 2])


def test_lookup_case_insensitive(functions):
    assert 'SQRT' in functions
    assert functions.get('Sqrt') is functions['sqrt']


def test_add_remove(functions):
    functions.add('Double', lambda values: values[0] * 2, arity=1)
    assert functions['double']([4]) == 8
    assert 'double' in list(functions)
    functions.remove('DOUBLE')
    assert 'double' not in functions


@mark.parametrize('name', ['', 'x1', 'a_b', '(', 3])
def test_invalid_names(functions, name):
    with raises(OperatorRegistrationError):
        functions.add(name, lambda values: 0)


def test_empty_library():
    assert len(FunctionLibrary(standard=False)) == 0


def test_infinite_result(functions):
    functions.add('inf', lambda x: math.inf)
    with raises(OperationArgumentError, match='out of range'):
        functions['inf']([])
