import os
import glob
import json
from lesscompanion.writer import strip_stylesheet_link

ASSET_PATTERN = 'less-*.js'
MEDIA_JS_PATH = 'media/lesscompanion/js'
DEFAULT_OPTIONS = {
    'env': 'development',
    'dumpLineNumbers': 'mediaquery'
}


def select_asset(directory, pattern=ASSET_PATTERN):
    """
    Pick the client-side compiler script to load. With several versions available, the lexically greatest filename
    is used, so 'less-1.10.0.js' loses to 'less-1.9.0.js'.

    :param directory: Directory holding the compiler scripts.
    :type directory: str
    :type pattern: str
    :return: Filename of the script, or None if there is none.
    :rtype: str | None
    """
    candidates = sorted(glob.glob(os.path.join(directory, pattern)), reverse=True)
    return os.path.basename(candidates[0]) if candidates else None


class ClientSideDelivery:
    """
    Ships the raw Less source to the browser along with less.js, and removes the compiled stylesheet from the page.
    """
    def __init__(self, app, config, locator):
        """
        :type app: lesscompanion.app.App
        :type config: lesscompanion.app.config.PluginConfig
        :type locator: lesscompanion.locator.SourceLocator
        """
        self.app = app
        self.config = config
        self.locator = locator

    def options(self):
        options = dict(DEFAULT_OPTIONS)
        options.update(self.config.get('clientside_options', {}))
        return options

    def apply(self, context, document):
        """
        Configure a document for client-side compiling.

        :type context: lesscompanion.context.TemplateContext
        :type document: lesscompanion.document.Document
        :return: If the document was configured.
        :rtype: bool
        """
        if document.type != 'html':
            return False

        asset = select_asset(os.path.join(self.app.root, MEDIA_JS_PATH))
        if asset is None:
            self.app.log.warning('Client-side Less enabled, but no \'%s\' script found in \'%s\'',
                                 ASSET_PATTERN, os.path.join(self.app.root, MEDIA_JS_PATH))
            return False

        less_uri, _ = self.locator.uris(context)
        document.add_head_link(less_uri, 'stylesheet/less', 'rel', {'type': 'text/css'})
        # A literal '</' in the options would end the script element.
        options = json.dumps(self.options(), indent=4, sort_keys=True).replace('</', '<\\/')
        document.add_script_declaration('\n\t\t\t\t// Less options\n\t\t\t\tvar less = {};\n\t\t'.format(options))
        # Must load after the options declaration.
        document.add_custom_tag('<script src="{}/{}/{}" type="text/javascript"></script>'.format(
            self.app.root_uri(path_only=True), MEDIA_JS_PATH, asset))

        if not self.remove_registered_stylesheet(context, document):
            self.app.register_event('after_render', self.remove_rendered_stylesheet)
        return True

    def remove_registered_stylesheet(self, context, document):
        """
        Remove the compiled stylesheet from the documents registered stylesheets. Matches any registered URI starting
        with one of the stylesheets lookup forms, so cache busting query strings are ignored.

        :type context: lesscompanion.context.TemplateContext
        :type document: lesscompanion.document.Document
        :return: If a stylesheet was removed.
        :rtype: bool
        """
        lookups = self.locator.css_lookups(context)
        for uri in document.list_style_references():
            if any(uri.startswith(lookup) for lookup in lookups):
                document.remove_style_reference(uri)
                self.app.log.debug('Removed stylesheet \'%s\' from document', uri)
                return True
        return False

    def remove_rendered_stylesheet(self, context, document):
        """
        After render hook, removing the compiled stylesheet <link> from the rendered body.

        :type context: lesscompanion.context.TemplateContext
        :type document: lesscompanion.document.Document
        """
        _, css_uri = self.locator.uris(context)
        count = document.rewrite_body(lambda body: strip_stylesheet_link(body, css_uri))
        if count:
            self.app.log.debug('Removed %d stylesheet link(s) to \'%s\' from rendered body', count, css_uri)
