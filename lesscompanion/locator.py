import os
from collections import namedtuple
from lesscompanion.context import ClientKind, Mode

DEFAULT_LESS_FILE = 'less/template.less'
DEFAULT_CSS_FILE = 'css/template.css'


class TemplatePaths(namedtuple('TemplatePaths', ['template_root', 'input_path', 'output_path'])):
    """
    Named Tuple containing a templates directory, its Less input file, and its CSS output file.
    """
    @property
    def import_paths(self):
        return [os.path.dirname(self.input_path)]


class SourceLocator:
    """
    Resolves Less input and CSS output paths for the template being rendered, or a template style being saved.
    """
    def __init__(self, app, config):
        """
        :type app: lesscompanion.app.App
        :type config: lesscompanion.app.config.PluginConfig
        """
        self.app = app
        self.config = config

    @property
    def mode(self):
        try:
            return Mode(self.config.get_int('mode', Mode.FRONTEND))
        except ValueError:
            return Mode.FRONTEND

    def template_root(self, client, template):
        """
        :type client: lesscompanion.context.ClientKind
        :type template: str
        :rtype: str
        """
        return os.path.join(self.app.client_root(client), 'templates', template)

    @staticmethod
    def param_keys(client):
        """
        Get the param names holding the Less and CSS file paths for a client.

        :type client: lesscompanion.context.ClientKind
        :rtype: tuple[str, str]
        """
        if client is ClientKind.ADMINISTRATOR:
            return 'admin_lessfile', 'admin_cssfile'
        return 'lessfile', 'cssfile'

    def relative_files(self, client):
        """
        Get the configured Less and CSS paths, relative to the template directory.

        :type client: lesscompanion.context.ClientKind
        :rtype: tuple[str, str]
        """
        less_key, css_key = self.param_keys(client)
        return self.config.get(less_key, DEFAULT_LESS_FILE), self.config.get(css_key, DEFAULT_CSS_FILE)

    def locate(self, context):
        """
        Get the paths to compile for the template being rendered.

        :type context: lesscompanion.context.TemplateContext
        :return: Template paths, or None if the configured mode excludes the contexts client.
        :rtype: TemplatePaths | None
        """
        if not self.mode.includes(context.client):
            return None
        root = self.template_root(context.client, context.template)
        less_file, css_file = self.relative_files(context.client)
        return TemplatePaths(root,
                             os.path.realpath(os.path.join(root, less_file)),
                             os.path.realpath(os.path.join(root, css_file)))

    def locate_style(self, style):
        """
        Get the paths to compile for a saved template style. Styles always compile 'less/template.less', writing a
        stylesheet named after the style id.

        :type style: lesscompanion.context.TemplateStyle
        :rtype: TemplatePaths
        """
        root = self.template_root(style.client, style.template)
        return TemplatePaths(root,
                             os.path.join(root, 'less', 'template.less'),
                             os.path.join(root, 'css', 'template{}.css'.format(style.id)))

    def uris(self, context):
        """
        Get the template relative URIs of the Less and CSS files.

        :type context: lesscompanion.context.TemplateContext
        :rtype: tuple[str, str]
        """
        template_rel = 'templates/{}/'.format(context.template)
        less_file, css_file = self.relative_files(context.client)
        return template_rel + less_file, template_rel + css_file

    def css_lookups(self, context):
        """
        Get every form the compiled stylesheet may be registered under: relative, absolute to the base path, and
        fully qualified.

        :type context: lesscompanion.context.TemplateContext
        :rtype: list[str]
        """
        _, css_uri = self.uris(context)
        return [css_uri,
                self.app.base_uri(context.client, path_only=True) + '/' + css_uri,
                self.app.base_uri(context.client) + css_uri]
