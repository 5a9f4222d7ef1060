"""
Less Template Companion

Usage:
  lesscompanion [--app=PATH] <command> [<args>...]
  lesscompanion (-h | --help)
  lesscompanion --version

Options:
  -a PATH --app=PATH    App directory, defaults to the current directory.
  -h --help             Show this message.
  --version             Show the version.

Run 'lesscompanion commands' to list available commands.
"""
import sys
from docopt import docopt
from lesscompanion import __version__
from lesscompanion.app import App, AppError, InvalidAppRoot
from lesscompanion.commands import CommandError


def main(argv=None):
    args = docopt(__doc__, argv=argv, version='lesscompanion {0}'.format(__version__), options_first=True)

    try:
        app = App(args['--app'])
        app.run_command(args['<command>'], *args['<args>'])
    except (InvalidAppRoot, AppError, CommandError) as e:
        print(str(e), file=sys.stderr)
        return 1
    return 0
