import os
import re
from lesscompanion.errors import WriteFailure


def write_file(path, content):
    """
    Overwrite a file with the given text, creating its directory if necessary.

    :type path: str
    :type content: str
    :raises WriteFailure: If the file could not be written.
    """
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as fh:
            fh.write(content)
    except OSError as e:
        raise WriteFailure('Unable to write \'{}\': {}'.format(path, e.strerror or e), path)


def link_regex(uri):
    """
    Get a regex matching a <link> element (and its leading whitespace) referencing the given stylesheet URI. The href
    may carry a query string, e.g. 'template.css?1234567890'.

    :type uri: str
    :rtype: typing.Pattern[str]
    """
    return re.compile(r'\s*<link\b[^>]*?\shref=(["\'])(?:[^"\']*/)?{0}(?:\?[^"\']*)?\1[^>]*>'.format(re.escape(uri)),
                      re.IGNORECASE)


def strip_stylesheet_link(body, uri):
    """
    Remove <link> elements referencing the given stylesheet URI from a rendered page.

    :param body: Rendered page.
    :type body: str
    :param uri: Stylesheet URI, or its trailing part.
    :type uri: str
    :return: Tuple of the new page, and the number of elements removed.
    :rtype: tuple[str, int]
    """
    return link_regex(uri).subn('', body)


class OutputWriter:
    """
    Persists compiled CSS along with the cache record describing it.
    """
    def __init__(self, app, cache):
        """
        :type app: lesscompanion.app.App
        :type cache: lesscompanion.cache.CompileCache
        """
        self.app = app
        self.cache = cache

    def commit(self, context, output_path, record, prior, force=False):
        """
        Write compiled CSS and its cache record, if the record is newer than what is stored.

        :type context: lesscompanion.context.TemplateContext
        :param output_path: CSS file to write.
        :type output_path: str
        :type record: lesscompanion.cache.CacheRecord
        :type prior: lesscompanion.cache.CacheRecord | None
        :type force: bool
        :return: If anything was written.
        :rtype: bool
        :raises WriteFailure: If the CSS or cache file could not be written.
        """
        if not self.cache.should_store(context, record, prior, force=force):
            self.app.log.debug('Skipped writing \'%s\', cache is current', output_path)
            return False

        # CSS first, so a failed write never leaves a cache claiming it is current.
        write_file(output_path, record.compiled)
        self.cache.store(context, record)
        self.app.log.info('Wrote \'%s\'', output_path)
        return True
