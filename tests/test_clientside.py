import os
import pytest


@pytest.fixture
def context():
    from lesscompanion.context import ClientKind, TemplateContext
    return TemplateContext(ClientKind.SITE, 'protostar', {})


def _delivery(app):
    plugin = app.plugins[0]
    return plugin.clientside


def test_select_asset(resources):
    from lesscompanion.clientside import select_asset

    directory = resources.path(os.path.join('media_less', 'media', 'lesscompanion', 'js'))

    assert select_asset(directory) == 'less-1.7.5.js'


def test_select_asset_is_lexical(temp_dir):
    from lesscompanion.clientside import select_asset

    for name in ('less-1.9.0.js', 'less-1.10.0.js'):
        open(os.path.join(temp_dir, name), 'w').close()

    assert select_asset(temp_dir) == 'less-1.9.0.js'
    assert select_asset(os.path.join(temp_dir, 'missing')) is None


def test_apply_without_asset(make_app, context):
    from lesscompanion.document import Document

    app = make_app({'clientside_enable': 1}, 'template_basic')
    document = Document('protostar')
    document.add_stylesheet('/cms/templates/protostar/css/template.css')

    assert not _delivery(app).apply(context, document)
    assert document.head_links == []
    assert document.script_declarations == []
    assert document.list_style_references() == ['/cms/templates/protostar/css/template.css']


def test_apply_ignores_other_documents(make_app, context):
    from lesscompanion.document import Document

    app = make_app({'clientside_enable': 1}, 'template_basic', 'media_less')

    assert not _delivery(app).apply(context, Document('protostar', type='json'))


def test_apply_removes_registered_stylesheet(make_app, context):
    from lesscompanion.document import Document

    app = make_app({'clientside_enable': 1, 'clientside_options': {'env': 'production'}},
                   'template_basic', 'media_less')
    document = Document('protostar')
    document.add_stylesheet('http://example.com/cms/templates/protostar/css/template.css?1234567890')
    document.add_stylesheet('/cms/media/system/css/system.css')

    assert _delivery(app).apply(context, document)
    assert document.list_style_references() == ['/cms/media/system/css/system.css']

    head = document.render_head()
    assert 'href="templates/protostar/less/template.less" rel="stylesheet/less" type="text/css"' in head
    assert '"env": "production"' in head
    assert '"dumpLineNumbers": "mediaquery"' in head
    assert '<script src="/cms/media/lesscompanion/js/less-1.7.5.js" type="text/javascript"></script>' in head
    assert head.index('var less') < head.index('less-1.7.5.js')


def test_apply_falls_back_to_rendered_body(make_app, context):
    from lesscompanion.document import Document

    app = make_app({'clientside_enable': 1}, 'template_basic', 'media_less')
    document = Document('protostar')

    body = app.render(context, document)

    assert 'template.css' not in body
    assert 'system.css' in body
    assert 'template.less' in body
    assert not os.path.exists(os.path.join(app.site_root, 'templates', 'protostar', 'css', 'template.css'))


def test_fallback_is_per_render(make_app, context):
    from lesscompanion.document import Document

    app = make_app({'clientside_enable': 1}, 'template_basic', 'media_less')
    removed = []
    _delivery(app).remove_rendered_stylesheet = lambda *args: removed.append(args)

    app.render(context, Document('protostar'))
    app.render(context, Document('protostar'))

    assert len(removed) == 2


def test_apply_escapes_script_end(make_app, context):
    from lesscompanion.document import Document

    app = make_app({'clientside_enable': 1, 'clientside_options': {'env': '</script><script>alert(1)</script>'}},
                   'template_basic', 'media_less')
    document = Document('protostar')

    assert _delivery(app).apply(context, document)

    declaration = document.script_declarations[0]
    assert '</' not in declaration
    assert '"env": "<\\/script><script>alert(1)<\\/script>"' in declaration
    assert document.render_head().count('</script>') == 2
