import io
import os
import re
import logging
import lesscpy
from lesscpy.lessc import parser, formatter
from lesscompanion.context import FormatMode
from lesscompanion.errors import CompilationError, UnreadableInput

VARIABLE_NAME_REGEX = re.compile(r'^[A-Za-z_-][\w-]*$')
COMMENT_REGEX = re.compile(r'/\*.*?\*/', re.DOTALL)

log = logging.getLogger('app')


def is_readable(path):
    return os.path.isfile(path) and os.access(path, os.R_OK)


def read_source(path):
    """
    :type path: str
    :rtype: str
    :raises UnreadableInput: If the file could not be read.
    """
    try:
        with open(path, encoding='utf-8') as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableInput('Unable to read \'{}\': {}'.format(path, e))


def read_fragments(paths):
    """
    Read override source fragments, in order. Paths that cannot be read are skipped.

    :param paths: Fragment file paths.
    :type paths: collections.Iterable[str]
    :return: List of tuples containing each read fragments path and content.
    :rtype: list[tuple[str, str]]
    """
    fragments = []
    for path in paths:
        if not is_readable(path):
            continue
        try:
            fragments.append((path, read_source(path)))
        except UnreadableInput as e:
            log.warning('%s', e)
    return fragments


class LessCompiler:
    """
    Thin wrapper around lesscpy. Combines the input source with override fragments and variable declarations,
    compiles it, and returns the CSS. Never writes anything.
    """
    def __init__(self):
        self.version = getattr(lesscpy, '__version__', 'unknown')

    def compile(self, request, source, fragments=()):
        """
        Compile Less source to CSS.

        :param request: Compilation options.
        :type request: lesscompanion.context.CompilationRequest
        :param source: Primary Less source.
        :type source: str
        :param fragments: Additional sources appended after the primary source, in order. Later fragments may
                          redefine earlier variables and rules.
        :type fragments: collections.Iterable[str]
        :return: Compiled CSS.
        :rtype: str
        :raises CompilationError: If lesscpy rejects the source.
        """
        combined = self.variable_declarations(request.variables) + source
        for fragment in fragments:
            combined += '\n' + fragment

        # lesscpy resolves imports relative to the name of the stream it parses.
        if request.import_paths:
            filename = os.path.join(request.import_paths[0], os.path.basename(request.input_path))
        else:
            filename = request.input_path

        less_parser = parser.LessParser(fail_with_exc=True)
        try:
            stream = io.StringIO(combined)
            stream.name = filename
            less_parser.parse(file=stream)
            css = formatter.Formatter(self._LessOpts(request)).format(less_parser)
        except Exception as e:
            raise CompilationError('lesscpy error in \'{}\': {}'.format(request.input_path, e),
                                   request.input_path) from e
        if request.preserve_comments:
            comments = self.block_comments(combined)
            if comments:
                css = '\n'.join(comments) + '\n' + css
        return css

    @staticmethod
    def block_comments(source):
        """
        Get the block comments in Less source, in order. lesscpy drops every comment, so preserved comments are
        emitted ahead of the compiled rules.

        :type source: str
        :rtype: list[str]
        """
        return COMMENT_REGEX.findall(source)

    @staticmethod
    def variable_declarations(variables):
        """
        Render variables as Less declarations, to be placed ahead of the source so the source may still redefine them.

        :type variables: dict[str, str]
        :rtype: str
        """
        lines = []
        for name, value in variables.items():
            if not VARIABLE_NAME_REGEX.match(name):
                log.debug('Skipping invalid Less variable name \'%s\'', name)
                continue
            lines.append('@{}: {};\n'.format(name, value))
        return ''.join(lines)

    class _LessOpts:
        def __init__(self, request):
            compressed = request.format_mode is FormatMode.COMPRESSED
            self.minify = compressed
            self.xminify = compressed
            self.tabs = False
            self.spaces = True
