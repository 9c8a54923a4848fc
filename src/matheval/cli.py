import logging
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL

from prompt_toolkit import PromptSession
import regex

from .engine import Engine
from .util import ExpressionError, format_number


log = logging.getLogger(__name__)

EPILOG = '''
If FILE or a pipe is given, EXPRESSION is evaluated for each line.
$1, $2,.. are the space or comma delimited words of the line.
$-1, $-2,.. are the same words counted from the end.
$0 is the previous result, $N the line number, $A all previous results
and $L the line itself.
'''


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Debatable. Interferes with X11 selection.
                                    mouse_support=False,
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class Session:
    '''
    Evaluates expressions one after another, carrying results forward through
    the $0, $N and $A placeholders.
    '''

    WHITESPACE = regex.compile(r'\s+')

    def __init__(self, engine):
        self.engine = engine
        self.value = 0.0
        self.line = 0
        self.results = []
        self.count_lines = True

    @classmethod
    def clean(cls, line):
        '''
        Normalize a data line: lower case, words separated by single spaces.
        '''
        line = line.replace('\r', '').replace(',', ' ').replace('\t', ' ')
        return cls.WHITESPACE.sub(' ', line.lower().strip())

    def bind(self, data=None):
        if data is not None:
            self.engine.add_replacement('L', data)
            self.engine.set_arguments(data.split(' '))
        if self.count_lines:
            self.line += 1
        self.engine.add_replacement({
            '0': self.value,
            'N': self.line,
            'A': ','.join(map(format_number, self.results)) or '0',
        })

    def evaluate(self, expression, data=None):
        '''
        Bind placeholders for the next line, and evaluate expression.
        '''
        self.bind(data)
        self.value = self.engine.evaluate(expression)
        self.results.append(self.value)
        return self.value


class CLI:
    '''
    Command line interface to the expression engine.
    '''

    DEFAULT_PROMPT = '> '
    DEFAULT_FORMAT = '{0}'

    def __init__(self, stdin=None, stdout=None, stderr=None):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments. Streams default to the
        process' own at run time.
        '''
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.argument_parser = ArgumentParser(prog='matheval',
                                              description='Calculate the '
                                              'math expression given in '
                                              'EXPRESSION.',
                                              epilog=EPILOG)
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log every evaluation stage')
        self.argument_parser.add_argument('-f', '--format',
                                          default=self.DEFAULT_FORMAT,
                                          help='Python format string for '
                                          'results, e.g. {0:.4e}')
        self.argument_parser.add_argument('-o', '--file', dest='file',
                                          help='use FILE as input to '
                                          'EXPRESSION')
        self.argument_parser.add_argument('-x', '--last', action='store_true',
                                          help='only write the last result')
        self.argument_parser.add_argument('-d', '--steps',
                                          action='store_true',
                                          help='show evaluation steps')
        self.argument_parser.add_argument('-e', '--end', dest='final',
                                          metavar='EXPRESSION',
                                          help='evaluate this after all '
                                          'lines, and only write its result')
        self.argument_parser.add_argument('-p', '--prompt',
                                          nargs=OPTIONAL,
                                          const=self.DEFAULT_PROMPT,
                                          help='read expressions '
                                          'interactively')
        self.argument_parser.add_argument('expression', nargs=REMAINDER)

    def _print(self, *args, error=False):
        stream = (self.stderr or sys.stderr) if error \
            else (self.stdout or sys.stdout)
        print(*args, file=stream)

    def _write(self, value):
        '''
        Write a result in the requested format.
        '''
        try:
            self._print(self.args.format.format(value))
        except (ValueError, IndexError, KeyError) as e:
            raise ExpressionError('Invalid format specified with -f: ' +
                                  self.args.format) from e

    def _steps(self, engine):
        if self.args.steps:
            for line in engine.history:
                self._print(line, error=True)

    def _data_lines(self):
        '''
        Return the data lines the expression runs over: a file, a pipe, or a
        single line "0".
        '''
        stdin = self.stdin or sys.stdin
        if self.args.file:
            try:
                with open(self.args.file) as fp:
                    return fp.read().split('\n')
            except OSError as e:
                raise ExpressionError('Unable to open file: ' +
                                      self.args.file) from e
        if not stdin.isatty():
            return stdin.read().split('\n')
        return ['0']

    def executor(self, engine, expression):
        '''
        Evaluate the expression for each data line.
        '''
        session = Session(engine)
        show_all = not (self.args.last or self.args.final)
        for raw in self._data_lines():
            line = Session.clean(raw)
            if not line or line.startswith('#'):
                continue
            try:
                value = session.evaluate(expression, line)
            except ExpressionError:
                self._print('Unable to evaluate expression:\n' +
                            expression.strip() + '\n', error=True)
                self._steps(engine)
                raise
            self._steps(engine)
            if show_all:
                self._write(value)

        if not show_all:
            if self.args.final:
                session.count_lines = False
                session.evaluate(self.args.final)
                self._steps(engine)
            self._write(session.value)

    def interactive(self, engine):
        '''
        Evaluate each line typed at the prompt. Errors do not end the session.
        '''
        session = Session(engine)
        for expression in InteractiveInput(self.args.prompt or
                                           self.DEFAULT_PROMPT):
            if not expression.strip():
                continue
            try:
                self._write(session.evaluate(expression))
            except ExpressionError as e:
                self._print(e.args[0], error=True)
            self._steps(engine)

    def _prompting(self):
        '''
        Return True if expressions should be read from a prompt.

        If either:
        - prompt explicitly specified.
        - no expression given, and both stdin/out are a tty
        '''
        if self.args.prompt:
            return True
        return (not self.args.expression and not self.args.file and
                (self.stdin or sys.stdin).isatty() and
                (self.stdout or sys.stdout).isatty())

    def run(self, args=None):
        '''
        Run CLI with these args, or the process' own. Returns exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG
                            if self.args.verbose
                            else logging.WARNING,
                            stream=self.stderr or sys.stderr)
        engine = Engine(verbose=self.args.steps)
        expression = ' '.join(self.args.expression)
        try:
            if self._prompting():
                self.interactive(engine)
            elif expression:
                self.executor(engine, expression)
            else:
                self.argument_parser.print_help(self.stdout or sys.stdout)
        except ExpressionError as e:
            log.debug('Failed', exc_info=True)
            self._print(e.args[0], error=True)
            return 1
        except KeyboardInterrupt:
            return 1
        return 0


def main():
    sys.exit(CLI().run())
