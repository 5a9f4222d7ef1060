import inspect

available = {}
""":type: dict[str, list[type]]"""

# Event names plugins may handle, by defining an 'on_<event>' method.
EVENTS = ('before_render', 'after_render', 'extension_after_save')


class Plugin:
    """
    Base class for plugins. When an App loads a plugin, each 'on_<event>' method the plugin defines is registered for
    that event. The App calls them in sequential order, sorted by the plugins priority. Plugin params are read from the
    apps config under the plugins name, merged over default_params.
    """
    # Name used for config and logging, None will use __class__.__name__
    name = None
    """:type: str | None"""

    # Plugins with higher priority values handle events earlier.
    priority = 50
    """:type: int"""

    # Param values used when the apps config does not set them.
    default_params = {}
    """:type: dict[str, object]"""

    def __init__(self, app):
        """
        :param app: Parent App instance.
        :type app: lesscompanion.app.App
        """
        self.app = app
        self.params = app.plugin_config(self)
        """:type: lesscompanion.app.config.PluginConfig"""

    @classmethod
    def plugin_name(cls):
        return cls.name or cls.__name__

    def handlers(self):
        """
        Get the event handlers this plugin defines.

        :return: List of tuples containing an event name and the bound method handling it.
        :rtype: list[tuple[str, callable]]
        """
        return [(event, getattr(self, 'on_' + event)) for event in EVENTS if hasattr(self, 'on_' + event)]

    # noinspection PyMethodMayBeStatic
    def reset(self):
        """
        Called when an App instance clears its built content.
        """
        pass


# noinspection PyPep8Naming
class register:
    """
    Decorator to add Plugin class definitions to the list of available plugins.
    """

    def __init__(self):
        self.module_name = inspect.getmodule(inspect.stack()[1][0]).__name__

    def __call__(self, cls):
        global available
        if self.module_name not in available:
            available[self.module_name] = []
        if cls not in available[self.module_name]:
            available[self.module_name].append(cls)
        return cls
