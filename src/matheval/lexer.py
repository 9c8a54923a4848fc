from functools import reduce
import logging
import operator

import regex

from .tokens import Kind, Token, STRUCTURAL
from .util import LexicalError, ComplexityError


log = logging.getLogger(__name__)


class Lexer:
    '''
    Lexer for infix expressions.

    Consults the operator registry for operator characters, and for the
    arity of the previous operator when deciding whether a sign belongs to a
    number.
    '''
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    # Number, optionally signed. Malformed digit runs like 1.2.3 are lexed
    # whole, and rejected when evaluated.
    SIGNED_NUMBER = regex.compile(r'''
                                  [-+]?
                                  [0-9.]+
                                  (?:
                                      # 1e5, 1E-5, 1e+5
                                      [eE][-+]?[0-9.]+
                                  )?
                                  ''', flags=FLAGS)
    NUMBER = regex.compile(r'''
                           [0-9.]+
                           (?:
                               [eE][-+]?[0-9.]+
                           )?
                           ''', flags=FLAGS)
    IDENTIFIER = regex.compile(r'[a-zA-Z]+', flags=FLAGS)
    # Single quoted, backslash escapes the next character
    STRING = regex.compile(r'''
                           '
                           (?<__str__>
                               (?:
                                   [^'\\]
                                   |
                                   \\.
                               )*
                           )
                           '
                           ''', flags=FLAGS | regex.DOTALL)
    ESCAPE = regex.compile(r'\\(.)', flags=regex.DOTALL)
    # Stand-in for a string literal while minus signs are rewritten
    HIDDEN = regex.compile(r"'([0-9]+)'")

    # Negated function call or parenthesis where a number could start:
    # -f(x) becomes -1*f(x).
    LEADING_MINUS = regex.compile(r'^(\s*)-(?=[a-zA-Z(])')
    OPEN_MINUS = regex.compile(r'\((\s*)-(?=[a-zA-Z(])')
    SEPARATOR_MINUS = regex.compile(r',(\s*)-(?=[a-zA-Z(])')
    # Negated call or parenthesis after anything else that is not an
    # operand: *-f(x) becomes *(-1*f(x)).
    NEGATED_CALL = regex.compile(r'''
                                 (?<prefix>
                                     [^0-9a-zA-Z).'\s]
                                     \s*
                                 )
                                 -
                                 (?<call>
                                     [a-zA-Z]+\(
                                     |
                                     \(
                                     |
                                     # Bare name, e.g. -pi
                                     [a-zA-Z]+(?![a-zA-Z]|\s*\()
                                 )
                                 ''', flags=FLAGS)

    def __init__(self, operators, max_tokens=None):
        self.operators = operators
        self.max_tokens = max_tokens

    def normalize(self, text):
        '''
        Rewrite every unary minus in front of a call or parenthesis into a
        multiplication by -1.

        String literals are left untouched.
        '''
        cls = type(self)
        literals = []

        def hide(match):
            literals.append(match.group(0))
            return "'{}'".format(len(literals) - 1)

        text = cls.STRING.sub(hide, text)
        text = cls.LEADING_MINUS.sub(r'\1-1*', text)
        text = cls.OPEN_MINUS.sub(r'(\1-1*', text)
        text = cls.SEPARATOR_MINUS.sub(r',\1-1*', text)
        # Each rewrite can expose another; text before position is final
        position = 0
        while True:
            match = cls.NEGATED_CALL.search(text, position)
            if match is None:
                break
            if self._postfix(match.group('prefix').strip()):
                # 5!-f(x): the minus is binary
                position = match.start() + 1
                continue
            position = match.start()
            text = self._bracket(text, match)
        return cls.HIDDEN.sub(lambda match: literals[int(match.group(1))],
                              text)

    def _bracket(self, text, match):
        '''
        Replace the match's "-" with "(-1*" and close the parenthesis after
        the call's matching ")", or straight after a bare name.
        '''
        head = text[:match.start()] + match.group('prefix') + '(-1*'
        if not match.group('call').endswith('('):
            return head + match.group('call') + ')' + text[match.end():]
        text = head + match.group('call') + text[match.end():]
        depth = 0
        for i in range(len(head) + len(match.group('call')) - 1, len(text)):
            if text[i] == '(':
                depth += 1
            elif text[i] == ')':
                depth -= 1
                if depth == 0:
                    return text[:i + 1] + ')' + text[i + 1:]
        # Unbalanced; left for the parser to report
        return text

    def _postfix(self, symbol):
        entry = self.operators.get(symbol)
        return entry is not None and entry.arity == 1

    def _signed_context(self, previous):
        '''
        Return True if a sign here starts a number rather than an operator.
        '''
        if previous is None:
            return True
        if previous.kind in (Kind.LISTSEP, Kind.OPEN):
            return True
        if previous.kind is Kind.OPERATOR:
            entry = self.operators.get(previous.value)
            # A postfix operator such as ! is followed by a binary operator
            return entry is None or entry.arity != 1
        return False

    def lex(self, text):
        '''
        Take an expression and yield its tokens.

        Raises LexicalError on the first character that starts no token.
        '''
        text = self.normalize(text)
        log.debug('Fixed:   %s', text)
        previous = None
        count = 0
        position = 0
        while position < len(text):
            token, end = self._next(text, position, previous)
            position = end
            if token is None:
                continue
            count += 1
            if self.max_tokens is not None and count > self.max_tokens:
                raise ComplexityError(
                    'More than {} tokens'.format(self.max_tokens))
            yield token
            previous = token

    def _next(self, text, position, previous):
        '''
        Return the token at position, or None for skipped input, and the
        position after it.
        '''
        cls = type(self)
        if self._signed_context(previous):
            match = cls.SIGNED_NUMBER.match(text, position)
            if match:
                return Token(match.group(0), Kind.NUMBER), match.end()

        c = text[position]
        if c in STRUCTURAL:
            return Token(c, STRUCTURAL[c]), position + 1

        match = cls.STRING.match(text, position)
        if match:
            value = cls.ESCAPE.sub(r'\1', match.group('__str__'))
            return Token(value, Kind.STRING), match.end()

        if c in self.operators:
            return Token(c, Kind.OPERATOR), position + 1

        match = cls.IDENTIFIER.match(text, position)
        if match:
            return Token(match.group(0), Kind.FUNCTION), match.end()

        match = cls.NUMBER.match(text, position)
        if match:
            return Token(match.group(0), Kind.NUMBER), match.end()

        if c == ' ':
            return None, position + 1

        raise LexicalError("Couldn't lex {}".format(text[position:]))

    def tokenize(self, text):
        return list(self.lex(text))
