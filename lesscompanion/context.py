import enum
from collections import namedtuple


class ClientKind(enum.Enum):
    SITE = 'site'
    ADMINISTRATOR = 'administrator'


class Mode(enum.IntEnum):
    """
    Which clients the render hook compiles for. Values match the stored 'mode' plugin param.
    """
    FRONTEND = 0
    BACKEND = 1
    BOTH = 2

    def includes(self, client):
        """
        :type client: ClientKind
        :rtype: bool
        """
        if client is ClientKind.SITE:
            return self in (Mode.FRONTEND, Mode.BOTH)
        return self in (Mode.BACKEND, Mode.BOTH)


class RenderMode(enum.Enum):
    SERVER_COMPILED = 'server'
    CLIENT_SIDE = 'client'


class FormatMode(enum.Enum):
    PRETTY = 'pretty'
    COMPRESSED = 'compressed'


class TemplateContext(namedtuple('TemplateContext', ['client', 'template', 'params'])):
    """
    Named Tuple describing the template being rendered: its client kind, template name, and configured params.
    """
    @property
    def is_admin(self):
        return self.client is ClientKind.ADMINISTRATOR


class CompilationRequest(namedtuple('CompilationRequest', ['input_path', 'output_path', 'import_paths',
                                                           'variables', 'format_mode', 'force',
                                                           'preserve_comments'])):
    """
    Named Tuple holding everything needed for one compilation attempt.
    """
    def __new__(cls, input_path, output_path, import_paths=(), variables=None, format_mode=FormatMode.PRETTY,
                force=False, preserve_comments=False):
        return super().__new__(cls, input_path, output_path, tuple(import_paths), dict(variables or {}),
                               format_mode, force, preserve_comments)


class TemplateStyle:
    """
    A saved template style, as handed to the save hook.
    """
    def __init__(self, id, template, client_id=0, params=None):
        """
        :param id: Style id, used to name the compiled stylesheet.
        :type id: int
        :param template: Template name.
        :type template: str
        :param client_id: 0 for site templates, 1 for administrator templates.
        :type client_id: int
        :param params: Style params, as a JSON string or a dict.
        :type params: str | dict | None
        """
        self.id = id
        self.template = template
        self.client_id = client_id
        self.params = params if params is not None else {}

    @property
    def client(self):
        return ClientKind.ADMINISTRATOR if self.client_id else ClientKind.SITE
