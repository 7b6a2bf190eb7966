from os import isatty, path
from argparse import ArgumentParser, ArgumentTypeError, REMAINDER, OPTIONAL
import math
import sys
import traceback

from prompt_toolkit import PromptSession
from prompt_toolkit.history import DummyHistory, FileHistory
import regex

from . import selftest
from .evaluator import Evaluator
from .lexer import Lexer
from .parser import Parser
from .printer import draw
from .util import CalcError, wrap_user_errors


class InteractiveInput:
    '''
    Prompting line source. Expressions and variable values get separate
    sessions, so values neither change the prompt nor land in the history.
    '''
    def __init__(self, prompt, history=None, input=None, output=None):
        self.prompt = prompt
        self.history = history
        self.input = input
        self.output = output
        self.session = None
        self.values = None

    def __iter__(self):
        try:
            self.session = PromptSession(message=self.prompt,
                                         enable_suspend=True,
                                         enable_open_in_editor=True,
                                         history=self.history,
                                         prompt_continuation=' ' * len(
                                             self.prompt),
                                         erase_when_done=False,
                                         input=self.input,
                                         output=self.output)
            self.values = PromptSession(history=DummyHistory(),
                                        input=self.input,
                                        output=self.output)
            while True:
                yield self.session.prompt()
        except EOFError:
            return

    def ask(self, name):
        '''
        Prompt for the value of variable name.

        Ctrl-D abandons the current line, not the whole session.
        '''
        try:
            return self.values.prompt('{} = '.format(name))
        except EOFError:
            raise CalcError('No value given for {}'.format(name)) from None


def _finite(text):
    value = float(text)
    if not math.isfinite(value):
        raise ValueError('{!r} is not finite'.format(text))
    return value


def definition(text):
    '''
    argparse type for NAME=VALUE variable bindings.
    '''
    name, sep, value = text.partition('=')
    name = name.strip()
    if (not sep or
            not regex.fullmatch(Lexer.NAME, name) or
            name in Lexer.KEYWORDS):
        raise ArgumentTypeError('expected NAME=VALUE, got {!r}'.format(text))
    try:
        return name, _finite(value)
    except ValueError:
        raise ArgumentTypeError('{!r} is not a finite number'.format(value))


class CLI:
    '''
    Command line interface to the expression calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.trigcalc_history'
    # salir and pruebas are the Spanish spellings, kept as aliases.
    QUIT = {'exit', 'quit', 'salir'}
    TEST = {'test', 'pruebas'}

    def report(self, error):
        '''
        Print error for the user, with its traceback if verbose.
        '''
        print('{} error: {}'.format(error.kind, error), file=sys.stderr)
        if self.args.verbose:
            traceback.print_exception(type(error), error,
                                      error.__traceback__, file=sys.stderr)

    def dumper(self):
        '''
        Dump all tokens of each line.
        '''
        lexer = Lexer()
        print('<kind>\t<lexeme>\t<value>\t<position>')
        for line in self._lines():
            try:
                for token in lexer.lex(line.rstrip('\n')):
                    print(token)
            except CalcError as e:
                self.report(e)

    def executor(self):
        '''
        Run calculator on every line.
        '''
        for line in self._lines():
            line = line.strip()
            if not line:
                continue
            if line.lower() in self.QUIT:
                break
            if line.lower() in self.TEST:
                selftest.run()
                continue
            # Abort the rest of the line on the first error
            try:
                print(self.calculate(line))
            except CalcError as e:
                self.report(e)

    def calculate(self, line):
        '''
        Lex, parse and evaluate line, asking for unbound variables.
        '''
        tokens = self.lexer.tokenize(line)
        root = Parser(tokens).parse()
        if self.args.tree:
            draw(root)
        env = dict(self.args.define or ())
        if self._interactive():
            for name in self.evaluator.free_variables(root):
                if name not in env:
                    env[name] = self._convert(
                        name, self.args.expressions.ask(name))
        return self.evaluator.evaluate(root, env)

    @wrap_user_errors('Cannot convert {2!r} to a value for {1}')
    def _convert(self, name, text):
        return _finite(text)

    def raw_grammar(self):
        '''
        Print current internally defined lexeme grammar.
        '''
        print(Lexer.LEXEME)

    def selftester(self):
        '''
        Run built-in scenarios, fail if any fails.
        '''
        report = selftest.run()
        if report.failed:
            sys.exit(1)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=FileHistory(
                                        path.expanduser(self.HISTORY_FILE)),
                                    input=self.input, output=self.output)
        else:
            return sys.stdin

    def _lines(self):
        if self.args.expressions is None:
            self.args.expressions = self._prompting_input()
        return self.args.expressions

    def __init__(self, input=None, output=None):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.

        :param input: prompt_toolkit Input for interactive mode.
        :param output: prompt_toolkit Output for interactive mode.
        '''
        self.input = input
        self.output = output
        self.lexer = Lexer()
        self.evaluator = Evaluator()
        self.argument_parser = ArgumentParser(
            description='Expression calculator with trigonometric functions')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='show tracebacks of errors')
        self.argument_parser.add_argument('-T', '--tree',
                                          action='store_true',
                                          help='draw the AST of each line')
        self.argument_parser.add_argument('-d', '--define',
                                          action='append',
                                          type=definition,
                                          metavar='NAME=VALUE',
                                          help='bind a variable')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper),
                                      ('-t', '--test', self.selftester)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
