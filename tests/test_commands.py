import os
import pytest


@pytest.fixture
def context():
    from lesscompanion.context import ClientKind, TemplateContext
    return TemplateContext(ClientKind.SITE, 'protostar', {})


def _cache_files(app):
    return sorted(name for name in os.listdir(app.tmp_root) if name.endswith('.cache'))


def test_create(make_app, temp_dir):
    from lesscompanion.commands import CommandError

    app = make_app()
    path = os.path.join(temp_dir, 'created')
    app.run_command('create', path)

    assert os.path.isfile(os.path.join(path, 'lesscompanion.json'))
    with pytest.raises(CommandError):
        app.run_command('create', path)
    with pytest.raises(CommandError):
        app.run_command('create', os.path.join(temp_dir, 'missing', 'created'))


def test_list_commands(make_app, capsys):
    app = make_app()
    app.run_command('commands')

    out = capsys.readouterr().out
    for usage in ['clean [TEMPLATE]...', 'commands', 'create PATH', 'render TEMPLATE [admin]',
                  'save TEMPLATE PARAMS_FILE [ID] [admin]']:
        assert usage in out


def test_render(make_app, stub_compiler, capsys):
    app = make_app(None, 'template_basic')
    app.compiler = stub_compiler()
    app.run_command('render', 'protostar')

    out = capsys.readouterr().out
    assert '<h1>protostar</h1>' in out
    assert len(app.compiler.calls) == 1
    assert _cache_files(app) == ['site_protostar_template.less.cache']


def test_render_messages(make_app, stub_compiler, capsys):
    from lesscompanion.errors import CompilationError

    app = make_app(None, 'template_basic')
    app.compiler = stub_compiler(error=CompilationError('lesscpy error: boom'))
    app.run_command('render', 'protostar')

    assert '[warning] lesscpy error: boom' in capsys.readouterr().out
    assert app.messages.get() == []


def test_save(make_app, stub_compiler, resources, capsys):
    app = make_app(None, 'template_style')
    app.compiler = stub_compiler()
    app.run_command('save', 'allrounder', resources.path(os.path.join('template_style', 'style_params.json')), '3')

    assert os.path.isfile(os.path.join(app.site_root, 'templates', 'allrounder', 'css', 'template3.css'))
    assert '[message] Compiled Less for style 3' in capsys.readouterr().out


def test_save_missing_params_file(make_app, temp_dir):
    from lesscompanion.commands import CommandError

    app = make_app(None, 'template_style')
    with pytest.raises(CommandError):
        app.run_command('save', 'allrounder', os.path.join(temp_dir, 'missing.json'))


def test_clean(make_app, stub_compiler, context):
    from lesscompanion.context import ClientKind, TemplateContext
    from lesscompanion.document import Document

    app = make_app({'mode': 2}, 'template_basic')
    app.compiler = stub_compiler()
    app.render(context, Document('protostar'))
    app.render(TemplateContext(ClientKind.ADMINISTRATOR, 'isis', {}), Document('isis'))
    assert _cache_files(app) == ['administrator_isis_template.less.cache', 'site_protostar_template.less.cache']

    app.run_command('clean', 'protostar')
    assert _cache_files(app) == ['administrator_isis_template.less.cache']

    app.run_command('clean')
    assert _cache_files(app) == []

    app.render(context, Document('protostar'))
    assert len(app.compiler.calls) == 3


def test_cli(make_app, temp_dir, capsys):
    from lesscompanion.cli import main

    app = make_app()

    assert main(['--app', app.root, 'commands']) == 0
    assert 'render TEMPLATE [admin]' in capsys.readouterr().out
    assert main(['--app', os.path.join(temp_dir, 'missing'), 'commands']) == 1
    assert main(['--app', app.root, 'missing']) == 1
    assert 'does not exist' in capsys.readouterr().err
