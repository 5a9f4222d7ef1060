from lesscompanion.commands import register


@register(help_args='TEMPLATE PARAMS_FILE [ID] [admin]', help_msg='Save a template style, compiling its Less file')
def save(app, template, params_path, *args):
    import os
    from lesscompanion.commands import CommandError
    from lesscompanion.context import TemplateStyle

    if not app.is_valid:
        raise CommandError('Need a valid app directory.')
    if not os.path.isfile(params_path):
        raise CommandError('Params file \'{0}\' does not exist'.format(params_path))

    style_id = next((int(arg) for arg in args if arg.isdigit()), 0)
    with open(params_path, encoding='utf-8') as fh:
        style = TemplateStyle(style_id, template, 1 if 'admin' in args else 0, fh.read())
    app.save_style(style)

    for message in app.messages.clear():
        print('[{0}] {1}'.format(message.level, message.text))
