import os
import logging
import logging.handlers
import json
import importlib
import jinja2
from lesscompanion import abspath, plugins, commands
from lesscompanion.app.config import PluginConfig
from lesscompanion.app.messages import MessageQueue
from lesscompanion.context import ClientKind

CONFIG_FILE = 'lesscompanion.json'
DEFAULT_SETTINGS = {
    'plugins': ['builtins.lesstemplate'],
    'uri': {
        'host': 'http://localhost',
        'path': ''
    },
    'plugin_params': {}
}
DEFAULT_PAGE = '''<!DOCTYPE html>
<html>
<head>{{ head }}
</head>
<body>
</body>
</html>
'''


class InvalidAppRoot(Exception):
    pass


class AppError(Exception):
    pass


class App:
    def __init__(self, root=None):
        """
        Initialize a new App instance for the given app directory.

        :param root: App directory path root to initialize at. If None the current working directory will be used.
        :type root: str | None
        """
        # If root is None, then try to use the current directory. If it doesn't work then just set is_valid to false.
        # If it is set, and the directory is invalid, then raise InvalidAppRoot
        raise_invalid = root is not None
        root = root if root is not None else './'

        # Set app path directories
        self.root = abspath(root)
        self.site_root = os.path.realpath(os.path.join(self.root, 'site'))
        self.admin_root = os.path.realpath(os.path.join(self.root, 'administrator'))
        self.store_root = os.path.realpath(os.path.join(self.root, 'store'))
        self.tmp_root = os.path.realpath(os.path.join(self.store_root, 'tmp'))
        self.log_root = os.path.realpath(os.path.join(self.store_root, 'log'))
        self.config_path = os.path.realpath(os.path.join(self.root, CONFIG_FILE))
        self.is_valid = os.path.isdir(self.root) and os.path.isfile(self.config_path)

        if not self.is_valid and raise_invalid:
            raise InvalidAppRoot('App root \'{0}\' does not exist or is not a valid app directory.'.format(self.root))

        self.commands = {}
        self.plugins = []
        self.settings = PluginConfig.merge_dict(DEFAULT_SETTINGS, {})
        self.compiler = None
        """:type: lesscompanion.compiler.LessCompiler | None"""
        self._events = {}
        self._request_events = {}

        # Import builtin commands
        importlib.import_module('lesscompanion.commands.builtins')
        self.commands.update(commands.available)

        # Configure logging, replacing handlers a previous App instance may have added.
        self.log = logging.getLogger('app')
        self.log.setLevel(logging.DEBUG)
        for handler in list(self.log.handlers):
            self.log.removeHandler(handler)
            handler.close()
        formatter = logging.Formatter('%(asctime)s %(levelname)s: %(message)s')
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.INFO)
        self.log.addHandler(console_handler)

        self.messages = MessageQueue(self.log)

        if self.is_valid:
            os.makedirs(self.tmp_root, exist_ok=True)

            # Config logging
            os.makedirs(self.log_root, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(os.path.join(self.log_root, 'app.log'),
                                                                encoding='utf-8',
                                                                maxBytes=2 * 1024 * 1024,
                                                                backupCount=2)
            file_handler.setFormatter(formatter)
            self.log.addHandler(file_handler)

            # Get settings
            try:
                with open(self.config_path) as fh:
                    self.settings = PluginConfig.merge_dict(DEFAULT_SETTINGS, json.load(fh))
            except ValueError as e:
                raise AppError('Could not load config: \'{0}\''.format(e))

            # Load plugins
            for plugin in self.settings['plugins']:
                if plugin.startswith('builtins.'):
                    plugin = 'lesscompanion.plugins.' + plugin
                try:
                    importlib.import_module(plugin)
                except Exception as e:
                    raise AppError('Unable to load plugin \'{0}\': {1}'.format(plugin, e))
                for plugin_cls in plugins.available.get(plugin, []):
                    self.plugins.append(plugin_cls(self))

            # Sort plugins by priority, and register their event handlers
            self.plugins = sorted(self.plugins, key=lambda p: p.priority, reverse=True)
            for plugin in self.plugins:
                for event, handler in plugin.handlers():
                    self.register_event(event, handler, persistent=True)

    @classmethod
    def create(cls, path):
        """
        Create a new app directory.

        :param path: Directory path to create as a new app directory.
        :type path: str
        :return: App instance for the new app directory.
        :rtype: lesscompanion.app.App
        """
        root = abspath(path)
        os.makedirs(os.path.join(root, 'site', 'templates'))
        os.makedirs(os.path.join(root, 'administrator', 'templates'))
        os.makedirs(os.path.join(root, 'media', 'lesscompanion', 'js'))
        os.makedirs(os.path.join(root, 'store', 'tmp'))
        os.makedirs(os.path.join(root, 'store', 'log'))
        with open(os.path.join(root, CONFIG_FILE), 'w') as fh:
            json.dump({'plugins': DEFAULT_SETTINGS['plugins']}, fh, indent=4)
        return App(root)

    def plugin_config(self, plugin):
        """
        Get the params for a plugin, as set in the apps config file.

        :type plugin: lesscompanion.plugins.Plugin
        :rtype: lesscompanion.app.config.PluginConfig
        """
        values = self.settings.get('plugin_params', {}).get(plugin.plugin_name(), None)
        try:
            return PluginConfig(plugin.default_params, values)
        except ValueError as e:
            raise AppError('Could not load params for plugin \'{0}\': {1}'.format(plugin.plugin_name(), e))

    def client_root(self, client):
        """
        :type client: lesscompanion.context.ClientKind
        :rtype: str
        """
        return self.admin_root if client is ClientKind.ADMINISTRATOR else self.site_root

    def root_uri(self, path_only=False):
        """
        Get the sites root URI.

        :param path_only: Return only the path, without a trailing slash.
        :type path_only: bool
        :rtype: str
        """
        path = self.settings['uri'].get('path', '').rstrip('/')
        if path_only:
            return path
        return self.settings['uri'].get('host', '').rstrip('/') + path + '/'

    def base_uri(self, client, path_only=False):
        """
        Get the base URI for a client. Administrator pages are served from the 'administrator' path under the root.

        :type client: lesscompanion.context.ClientKind
        :param path_only: Return only the path, without a trailing slash.
        :type path_only: bool
        :rtype: str
        """
        path = self.root_uri(path_only=True)
        if client is ClientKind.ADMINISTRATOR:
            path += '/administrator'
        if path_only:
            return path
        return self.settings['uri'].get('host', '').rstrip('/') + path + '/'

    def register_event(self, name, handler, persistent=False):
        """
        Register an event handler. Non persistent handlers are dropped when the current render or save finishes.

        :param name: Event name.
        :type name: str
        :param handler: Function to call when the event is triggered.
        :type handler: callable
        :param persistent: Keep the handler for all future events.
        :type persistent: bool
        """
        events = self._events if persistent else self._request_events
        events.setdefault(name, []).append(handler)

    def trigger(self, name, *args):
        """
        Call all handlers registered for an event. Exceptions raised by handlers are logged, and never stop other
        handlers or the caller.

        :param name: Event name.
        :type name: str
        :param args: Arguments to pass to each handler.
        """
        handlers = self._events.get(name, []) + self._request_events.get(name, [])
        for handler in handlers:
            try:
                handler(*args)
            except Exception as e:
                self.log.exception('Exception occurred handling \'%s\' with %s: %s',
                                   name, getattr(handler, '__qualname__', handler), str(e))

    def render(self, context, document, template_name='index.html'):
        """
        Render a page with a template, triggering the before and after render events.

        :type context: lesscompanion.context.TemplateContext
        :type document: lesscompanion.document.Document
        :param template_name: Page template to render, relative to the template directory.
        :type template_name: str
        :return: Rendered page.
        :rtype: str
        """
        try:
            self.trigger('before_render', context, document)

            template_root = os.path.join(self.client_root(context.client), 'templates', context.template)
            env = jinja2.Environment(loader=jinja2.ChoiceLoader([
                jinja2.FileSystemLoader(template_root),
                jinja2.DictLoader({'index.html': DEFAULT_PAGE})]))
            template = env.get_template(template_name)
            document.body = template.render(head=document.render_head(),
                                            document=document,
                                            params=context.params,
                                            base=self.base_uri(context.client, path_only=True),
                                            messages=self.messages.get())

            self.trigger('after_render', context, document)
            return document.body
        finally:
            self._request_events.clear()

    def save_style(self, style, event_context='com_templates.style', is_new=False):
        """
        Trigger the save event for a template style.

        :type style: lesscompanion.context.TemplateStyle
        :type event_context: str
        :type is_new: bool
        """
        try:
            self.trigger('extension_after_save', event_context, style, is_new)
        finally:
            self._request_events.clear()

    def reset(self):
        """
        Delete all cached compile data.
        """
        for plugin in self.plugins:
            plugin.reset()

    def run_command(self, name, *args):
        """
        Run a command.

        :param name: Name of the command to run.
        :type name: str
        :param args: Arguments to pass to the command.
        :type args: list(object)
        :return: Return value of the command being run.
        :rtype: object
        :raises lesscompanion.commands.CommandError: If a command with the given name does not exist.
        :raises lesscompanion.commands.CommandError: If the number of arguments passed to the command is not correct.
        """
        if name in self.commands:
            command = self.commands[name]
            args_len = len(args) + 1
            arg_count = command.func.__code__.co_argcount
            has_varg = command.func.__code__.co_flags & 0x04 > 0

            if (has_varg and args_len >= arg_count) or (not has_varg and args_len == arg_count):
                self.log.debug('Running command \'%s\'', ' '.join([name] + list(args)))
                return command.func(self, *args)
            else:
                raise commands.CommandError('Incorrect number of arguments passed to command \'{0}\''.format(name))
        raise commands.CommandError('Command \'{0}\' does not exist'.format(name))
