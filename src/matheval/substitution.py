'''
Placeholder substitution, applied to the raw text before lexing.

Named replacements are written $key, positional arguments $1..$k counting
from the front of the argument list and $-1..$-k counting from its back.
The text is scanned once; substituted values are never rescanned.
'''

import regex

from .util import BindingError, format_number


class Substitution:
    '''
    Holds replacement and argument bindings until explicitly changed.
    '''

    SIGIL = '$'

    def __init__(self):
        self.replacements = dict()
        self.arguments = []

    def add_replacement(self, key, value=None):
        '''
        Bind $key to value. Also accepts a mapping of keys to values.

        Numbers are stored in their textual form.
        '''
        if value is None and hasattr(key, 'items'):
            for k, v in key.items():
                self.add_replacement(k, v)
            return
        if not isinstance(key, str) or not key:
            raise BindingError('Invalid replacement key {!r}'.format(key))
        if value is None:
            raise BindingError('No value bound to {!r}'.format(key))
        self.replacements[key] = format_number(value)

    def clear_replacements(self):
        self.replacements.clear()

    def set_arguments(self, arguments):
        self.arguments = [format_number(argument) for argument in arguments]

    def add_argument(self, argument):
        self.arguments.append(format_number(argument))

    def clear_arguments(self):
        self.arguments = []

    def placeholders(self):
        '''
        Return (placeholder, value) pairs in matching priority order.

        Longer keys come first so that $12 is never read as $1 followed by a
        literal 2. Named keys take priority over positional arguments.
        '''
        pairs = [(self.SIGIL + key, self.replacements[key])
                 for key
                 in sorted(self.replacements,
                           key=lambda key: (-len(key), key))]
        k = len(self.arguments)
        pairs.extend((self.SIGIL + str(i), self.arguments[i - 1])
                     for i in range(k, 0, -1))
        pairs.extend((self.SIGIL + '-' + str(i), self.arguments[k - i])
                     for i in range(k, 0, -1))
        return pairs

    def apply(self, text):
        '''
        Return text with every bound placeholder replaced by its value.
        '''
        pairs = self.placeholders()
        if not pairs:
            return text
        values = dict()
        for placeholder, value in pairs:
            values.setdefault(placeholder, value)
        pattern = regex.compile(
            '|'.join(regex.escape(placeholder)
                     for placeholder, _ in pairs))
        return pattern.sub(lambda match: values[match.group(0)], text)
