from lesscompanion.commands import register


@register(help_args='[TEMPLATE]...', help_msg='Delete cached compile data, forcing the next render to recompile')
def clean(app, *templates):
    from lesscompanion.commands import CommandError
    from lesscompanion.cache import CompileCache

    if not app.is_valid:
        raise CommandError('Need a valid app directory.')

    if len(templates) == 0:
        app.reset()
        return

    cache = CompileCache(app)
    for template in templates:
        for path in cache.clear(template):
            app.log.info('Removed \'%s\'', path)
