"""
Less Template Companion

Checks and compiles updated Less files when a page renders, and when a template style is saved. Template style params
are passed to the compiler as Less variables, so users can theme a template without compiling anything by hand.
"""
import os
from lesscompanion.app.config import PluginConfig
from lesscompanion.cache import CompileCache, find_imports
from lesscompanion.clientside import ClientSideDelivery
from lesscompanion.compiler import LessCompiler, is_readable, read_source, read_fragments
from lesscompanion.context import CompilationRequest, FormatMode, RenderMode
from lesscompanion.errors import CompilationError, UnreadableInput, WriteFailure
from lesscompanion.locator import SourceLocator
from lesscompanion.plugins import register, Plugin
from lesscompanion.sanitizer import sanitize, DEFAULT_EXCLUDED
from lesscompanion.writer import OutputWriter, write_file

SAVE_CONTEXTS = ('com_templates.style', 'com_advancedtemplates.style')


@register()
class LessTemplateCompanion(Plugin):
    name = 'lesstemplatecompanion'
    default_params = {
        # 0 = frontend only, 1 = backend only, 2 = front + backend
        'mode': 0,
        'lessfile': 'less/template.less',
        'cssfile': 'css/template.css',
        'admin_lessfile': 'less/template.less',
        'admin_cssfile': 'css/template.css',
        'less_force': False,
        'less_comments': False,
        'less_compress': False,
        'clientside_enable': False,
        'clientside_options': {},
        'excluded_params': list(DEFAULT_EXCLUDED)
    }

    def __init__(self, app):
        super().__init__(app)

        # The compiler is shared by every plugin instance the app loads.
        if app.compiler is None:
            app.compiler = LessCompiler()
            self.app.log.debug('Loaded lesscpy %s', app.compiler.version)
        else:
            self.app.log.debug('Less compiler already loaded, using lesscpy %s', app.compiler.version)

        self.locator = SourceLocator(app, self.params)
        self.cache = CompileCache(app)
        self.writer = OutputWriter(app, self.cache)
        self.clientside = ClientSideDelivery(app, self.params, self.locator)

    @property
    def render_mode(self):
        if self.params.get_bool('clientside_enable'):
            return RenderMode.CLIENT_SIDE
        return RenderMode.SERVER_COMPILED

    def on_before_render(self, context, document):
        """
        Compile the rendered templates Less file if it changed, or set the document up for client-side compiling.

        :type context: lesscompanion.context.TemplateContext
        :type document: lesscompanion.document.Document
        """
        paths = self.locator.locate(context)
        if paths is None:
            return

        if not is_readable(paths.input_path):
            self.app.log.debug('Less file \'%s\' is not readable, skipping', paths.input_path)
            return

        if self.render_mode is RenderMode.CLIENT_SIDE:
            self.clientside.apply(context, document)
            return

        try:
            self.auto_compile(context, paths)
        except UnreadableInput as e:
            self.app.log.debug('%s', e)
        except (CompilationError, WriteFailure) as e:
            self.app.messages.enqueue(str(e), 'warning')

    def auto_compile(self, context, paths):
        """
        Compile a Less file if it, or anything it imports, was modified since the last compile.

        :type context: lesscompanion.context.TemplateContext
        :type paths: lesscompanion.locator.TemplatePaths
        :return: If the CSS file was written.
        :rtype: bool
        :raises CompilationError: If the Less source could not be compiled.
        :raises WriteFailure: If the CSS or cache file could not be written.
        """
        force = self.params.get_bool('less_force')
        recompile, prior = self.cache.should_recompile(context, paths.input_path, force)
        if not recompile:
            return False

        request = CompilationRequest(
            paths.input_path,
            paths.output_path,
            import_paths=paths.import_paths,
            format_mode=FormatMode.COMPRESSED if self.params.get_bool('less_compress') else FormatMode.PRETTY,
            force=force,
            preserve_comments=self.params.get_bool('less_comments'))

        css = self.app.compiler.compile(request, read_source(paths.input_path))
        record = self.cache.build_record(paths.input_path, css, find_imports(paths.input_path, request.import_paths))
        return self.writer.commit(context, paths.output_path, record, prior, force=force)

    def on_extension_after_save(self, event_context, style, is_new):
        """
        Compile a template styles Less file, using the styles params as Less variables.

        :param event_context: What was saved, only template styles are handled.
        :type event_context: str
        :type style: lesscompanion.context.TemplateStyle
        :param is_new: If the style was just created.
        :type is_new: bool
        """
        if event_context not in SAVE_CONTEXTS:
            return

        try:
            params = PluginConfig(values=style.params)
        except ValueError as e:
            self.app.messages.enqueue('Unable to read params for style {}: {}'.format(style.id, e), 'warning')
            return

        if not params.get_bool('useLESS'):
            return

        paths = self.locator.locate_style(style)
        if not is_readable(paths.input_path):
            return

        try:
            self.compile_style(style, params, paths)
        except UnreadableInput as e:
            self.app.log.debug('%s', e)
        except (CompilationError, WriteFailure) as e:
            self.app.messages.enqueue(str(e), 'warning')

    def compile_style(self, style, params, paths):
        """
        Compile the Less file for a template style, appending the templates custom Less and CSS files.

        :type style: lesscompanion.context.TemplateStyle
        :type params: lesscompanion.app.config.PluginConfig
        :type paths: lesscompanion.locator.TemplatePaths
        :raises CompilationError: If the Less source could not be compiled.
        :raises WriteFailure: If the CSS file could not be written.
        """
        variables = sanitize(params.to_dict(), self.params.get('excluded_params', DEFAULT_EXCLUDED))
        variables['basePath'] = '"{}/"'.format(self.app.base_uri(style.client, path_only=True))

        request = CompilationRequest(
            paths.input_path,
            paths.output_path,
            import_paths=paths.import_paths,
            variables=variables,
            format_mode=FormatMode.COMPRESSED if params.get_bool('cssCompress') else FormatMode.PRETTY,
            force=True)

        fragments = read_fragments([os.path.join(paths.template_root, 'less', 'custom.less'),
                                    os.path.join(paths.template_root, 'css', 'custom.css')])
        css = self.app.compiler.compile(request, read_source(paths.input_path),
                                        [content for _, content in fragments])

        write_file(paths.output_path, css)
        self.app.messages.enqueue('Compiled Less for style {} to \'{}\''.format(style.id, paths.output_path))

    def reset(self):
        for path in self.cache.clear():
            self.app.log.debug('Removed cache \'%s\'', path)
