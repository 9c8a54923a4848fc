'''
Lexer tests
'''

import regex

from matheval.lexer import Lexer
from matheval.operators import OperatorLibrary
from matheval.tokens import Kind, Token
from matheval.util import LexicalError, ComplexityError

from pytest import raises


def values(tokens):
    return [token.value for token in tokens]


def kinds(tokens):
    return [token.kind for token in tokens]


def test_simple_sum(lexer):
    tokens = lexer.tokenize('1+2')
    assert values(tokens) == ['1', '+', '2']
    assert kinds(tokens) == [Kind.NUMBER, Kind.OPERATOR, Kind.NUMBER]


def test_spaces_skipped(lexer):
    assert values(lexer.tokenize(' 1 +  2 ')) == ['1', '+', '2']


def test_structural(lexer):
    tokens = lexer.tokenize('max(1,2)')
    assert kinds(tokens) == [Kind.FUNCTION, Kind.OPEN, Kind.NUMBER,
                             Kind.LISTSEP, Kind.NUMBER, Kind.CLOSE]


def test_signed_number_at_start(lexer):
    assert values(lexer.tokenize('-123.23')) == ['-123.23']
    assert values(lexer.tokenize('+5')) == ['+5']


def test_signed_number_after_binary_operator(lexer):
    assert values(lexer.tokenize('12/-3')) == ['12', '/', '-3']
    assert values(lexer.tokenize('3--2')) == ['3', '-', '-2']


def test_signed_number_after_open_and_separator(lexer):
    assert values(lexer.tokenize('(-3)')) == ['(', '-3', ')']
    assert values(lexer.tokenize('max(1,-3)')) == ['max', '(', '1', ',',
                                                   '-3', ')']


def test_minus_after_number_is_operator(lexer):
    assert values(lexer.tokenize('5-3')) == ['5', '-', '3']


def test_minus_after_postfix_operator_is_operator(lexer):
    tokens = lexer.tokenize('5!-3')
    assert values(tokens) == ['5', '!', '-', '3']
    assert tokens[2].kind is Kind.OPERATOR


def test_scientific(lexer):
    assert values(lexer.tokenize('123.23E+1')) == ['123.23E+1']
    assert values(lexer.tokenize('-123E02*2')) == ['-123E02', '*', '2']
    assert values(lexer.tokenize('1e-5')) == ['1e-5']


def test_malformed_number_lexed_whole(lexer):
    assert lexer.tokenize('1.2.3') == [Token('1.2.3', Kind.NUMBER)]


def test_identifier(lexer):
    tokens = lexer.tokenize('COS(0)')
    assert tokens[0] == Token('COS', Kind.FUNCTION)


def test_string(lexer):
    assert lexer.tokenize("len('abc')")[2] == Token('abc', Kind.STRING)


def test_escaped_quote(lexer):
    assert lexer.tokenize(r"'it\'s'") == [Token("it's", Kind.STRING)]


def test_leading_minus_call():
    l = Lexer(OperatorLibrary())
    assert l.normalize('-cos(0)') == '-1*cos(0)'
    assert l.normalize('-(1+2)') == '-1*(1+2)'


def test_minus_after_open_and_separator():
    l = Lexer(OperatorLibrary())
    assert l.normalize('(-cos(0))') == '(-1*cos(0))'
    assert l.normalize('max(1,-sin(0))') == 'max(1,-1*sin(0))'


def test_negated_call_after_operator():
    l = Lexer(OperatorLibrary())
    assert l.normalize('2*-cos(0)') == '2*(-1*cos(0))'
    assert l.normalize('2^-(1+1)') == '2^(-1*(1+1))'


def test_negated_call_nested():
    l = Lexer(OperatorLibrary())
    assert l.normalize('2*-max(1,(2))+1') == '2*(-1*max(1,(2)))+1'


def test_negated_call_repeated():
    l = Lexer(OperatorLibrary())
    assert l.normalize('2*-cos(3*-sin(0))') == \
        '2*(-1*cos(3*(-1*sin(0))))'


def test_binary_minus_left_alone():
    l = Lexer(OperatorLibrary())
    assert l.normalize('2-cos(0)') == '2-cos(0)'
    assert l.normalize('(1)-(2)') == '(1)-(2)'
    assert l.normalize('pi-cos(0)') == 'pi-cos(0)'


def test_unknown_character(lexer):
    with raises(LexicalError, match=regex.escape("Couldn't lex #2")):
        lexer.tokenize('1+#2')


def test_tab_rejected(lexer):
    with raises(LexicalError):
        lexer.tokenize('1\t+2')


def test_unterminated_string(lexer):
    with raises(LexicalError):
        lexer.tokenize("'abc")


def test_custom_operator_recognized(operators):
    operators.add('~', lambda x: -x[0], arity=1, precedence=10)
    l = Lexer(operators)
    tokens = l.tokenize('2~')
    assert tokens[1] == Token('~', Kind.OPERATOR)


def test_token_limit(operators):
    l = Lexer(operators, max_tokens=3)
    assert len(l.tokenize('1+2')) == 3
    with raises(ComplexityError):
        l.tokenize('1+2+3')


def test_empty(lexer):
    assert lexer.tokenize('') == []
    assert lexer.tokenize('   ') == []


def test_negated_bare_name():
    l = Lexer(OperatorLibrary())
    assert l.normalize('2*-pi') == '2*(-1*pi)'
    assert l.normalize('2*-pi+1') == '2*(-1*pi)+1'
    assert l.normalize('2*-e*3') == '2*(-1*e)*3'


def test_minus_after_postfix_operator_stays_binary():
    l = Lexer(OperatorLibrary())
    assert l.normalize('5!-cos(0)') == '5!-cos(0)'
    assert l.normalize('3! -(-2)') == '3! -(-2)'
    assert l.normalize('5!*-cos(0)') == '5!*(-1*cos(0))'


def test_strings_not_normalized():
    l = Lexer(OperatorLibrary())
    assert l.normalize("len('a*-b(')") == "len('a*-b(')"
    assert l.normalize("-len('-x(')") == "-1*len('-x(')"
    assert l.normalize("equal('0','1')*-pi") == "equal('0','1')*(-1*pi)"
