from lesscompanion.commands import register


@register(help_args='TEMPLATE [admin]', help_msg='Render a templates page, compiling its Less file if needed')
def render(app, template, *args):
    from lesscompanion.commands import CommandError
    from lesscompanion.context import ClientKind, TemplateContext
    from lesscompanion.document import Document

    if not app.is_valid:
        raise CommandError('Need a valid app directory.')

    client = ClientKind.ADMINISTRATOR if 'admin' in args else ClientKind.SITE
    context = TemplateContext(client, template, {})
    print(app.render(context, Document(template)))

    for message in app.messages.clear():
        print('[{0}] {1}'.format(message.level, message.text))
