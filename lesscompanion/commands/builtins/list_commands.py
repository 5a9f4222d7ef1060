from lesscompanion.commands import register


@register(name='commands', help_msg='List available commands')
def list_commands(app):
    """
    Print available commands information.

    :param app: App instance to get commands for.
    :type app: lesscompanion.app.App
    """
    commands = sorted(app.commands.values(), key=lambda x: x.name)
    left_align = max(14, max([len(c.usage) for c in commands])) + 4

    for command in commands:
        print('{0}\t{1}'.format(command.usage.rjust(left_align), command.help_msg))
