from collections import namedtuple

available = {}
""":type: dict[str, Command]"""


class Command(namedtuple('Command', ['func', 'name', 'help_args', 'help_msg'])):
    """
    Named Tuple containing a command function, the name it is run by, and its usage texts.
    """
    @property
    def usage(self):
        return '{} {}'.format(self.name, self.help_args).rstrip()


class CommandError(Exception):
    pass


# noinspection PyPep8Naming
class register:
    """
    Decorator adding a function to the available commands. The function is called with an App instance, followed by
    any command line arguments.
    """
    def __init__(self, name=None, help_args='', help_msg=''):
        """
        :param name: Name of the command, if None, the name of the function is used.
        :type name: str | None
        :param help_args: Usage text describing arguments.
        :type help_args: str
        :param help_msg: Usage text describing the commands purpose.
        :type help_msg: str
        """
        self.name = name
        self.help_args = help_args
        self.help_msg = help_msg

    def __call__(self, func):
        command = Command(func, self.name or func.__name__, self.help_args, self.help_msg)
        available[command.name] = command
        return func
