import os
import re
import json
from collections import namedtuple
from lesscompanion.errors import CacheCorrupt
from lesscompanion.writer import write_file

IMPORT_REGEX = re.compile(r'@import\s*(?:\([^)]*\)\s*)?(?:url\(\s*)?["\']([^"\']+)["\']')


class CacheRecord(namedtuple('CacheRecord', ['root', 'updated', 'compiled', 'files', 'template'])):
    """
    Named Tuple containing the compiled input path, modification marker, compiled CSS, the modification times
    of every file the compile depended on, and the template the record was stored for.
    """
    def __new__(cls, root, updated, compiled, files, template=None):
        return super().__new__(cls, root, updated, compiled, files, template)

    def to_dict(self):
        return {'root': self.root, 'updated': self.updated, 'compiled': self.compiled, 'files': self.files,
                'template': self.template}

    @classmethod
    def from_dict(cls, data):
        """
        :type data: dict
        :rtype: CacheRecord
        :raises CacheCorrupt: If data is missing fields, or has fields of the wrong type.
        """
        try:
            files = dict((str(path), float(mtime)) for path, mtime in dict(data.get('files', {})).items())
            record = cls(data['root'], float(data['updated']), data['compiled'], files, data.get('template'))
        except (KeyError, TypeError, ValueError) as e:
            raise CacheCorrupt('Malformed cache record: {}'.format(e))
        if not isinstance(record.root, str) or not isinstance(record.compiled, str):
            raise CacheCorrupt('Malformed cache record: root and compiled must be strings')
        if record.template is not None and not isinstance(record.template, str):
            raise CacheCorrupt('Malformed cache record: template must be a string')
        return record


def find_imports(path, search_paths, _found=None):
    """
    Recursively find the files imported by a Less file. Imports are resolved against the importing file's directory
    first, then against each search path. Imports that cannot be found are ignored, the compiler will report them.

    :param path: Less file to scan.
    :type path: str
    :param search_paths: Directories to resolve imports in.
    :type search_paths: list[str]
    :return: Imported file paths, in the order they were found.
    :rtype: list[str]
    """
    if _found is None:
        _found = []
    try:
        with open(path, encoding='utf-8') as fh:
            content = fh.read()
    except (OSError, UnicodeDecodeError):
        return _found

    for name in IMPORT_REGEX.findall(content):
        if '://' in name:
            continue
        if not os.path.splitext(name)[1]:
            name += '.less'
        for directory in [os.path.dirname(path)] + list(search_paths):
            candidate = os.path.realpath(os.path.join(directory, name))
            if os.path.isfile(candidate):
                if candidate not in _found:
                    _found.append(candidate)
                    if candidate.endswith('.less'):
                        find_imports(candidate, search_paths, _found)
                break
    return _found


class CompileCache:
    """
    Change detection for compiled Less files. Stores a JSON CacheRecord per client, template, and input file in the
    apps temp directory, and compares the modification times it recorded against the files on disk.
    """
    def __init__(self, app, root=None):
        """
        :param app: Parent App instance.
        :type app: lesscompanion.app.App
        :param root: Directory to store cache files in. Defaults to the apps temp directory.
        :type root: str | None
        """
        self.app = app
        self.root = root if root is not None else app.tmp_root

    def cache_path(self, context, input_path):
        """
        :type context: lesscompanion.context.TemplateContext
        :type input_path: str
        :rtype: str
        """
        name = '{}_{}_{}.cache'.format(context.client.value, context.template, os.path.basename(input_path))
        return os.path.join(self.root, name)

    def load(self, path, input_path):
        """
        Load a cache record. Records that cannot be parsed, or that were stored for a different input file, are
        deleted.

        :param path: Cache file path.
        :type path: str
        :param input_path: Input file the record should belong to.
        :type input_path: str
        :return: The stored record, or None if there is no valid record.
        :rtype: CacheRecord | None
        """
        if not os.path.isfile(path):
            return None

        try:
            record = self._read(path)
        except CacheCorrupt as e:
            self.app.log.warning('Discarding cache \'%s\': %s', path, e)
            self._discard(path)
            return None

        if record.root != input_path:
            self.app.log.debug('Discarding cache \'%s\', stored for \'%s\'', path, record.root)
            self._discard(path)
            return None
        return record

    def should_recompile(self, context, input_path, force=False):
        """
        Decide if an input file needs to be compiled.

        :type context: lesscompanion.context.TemplateContext
        :type input_path: str
        :param force: Always recompile.
        :type force: bool
        :return: Tuple of whether to recompile, and the prior valid record (if any.)
        :rtype: tuple[bool, CacheRecord | None]
        """
        prior = self.load(self.cache_path(context, input_path), input_path)
        if prior is None or force:
            return True, prior
        return self.is_stale(prior), prior

    @staticmethod
    def is_stale(record):
        """
        Check if any file a record depends on was modified or removed since it was stored.

        :type record: CacheRecord
        :rtype: bool
        """
        files = dict(record.files)
        files.setdefault(record.root, record.updated)
        for path, mtime in files.items():
            if not os.path.isfile(path) or os.path.getmtime(path) > mtime:
                return True
        return False

    @staticmethod
    def build_record(input_path, compiled, dependencies=()):
        """
        Create a record for a fresh compile. The records marker is the newest modification time of the input and its
        dependencies.

        :type input_path: str
        :type compiled: str
        :param dependencies: Other files the compile read.
        :type dependencies: collections.Iterable[str]
        :rtype: CacheRecord
        """
        files = {}
        for path in [input_path] + list(dependencies):
            if os.path.isfile(path):
                files[path] = os.path.getmtime(path)
        updated = max(files.values()) if files else 0.0
        return CacheRecord(input_path, updated, compiled, files)

    def should_store(self, context, record, prior, force=False):
        """
        Check if a freshly compiled record should replace what is stored. The currently persisted record is re-read,
        so a concurrent request that already stored the same marker prevents a redundant write.

        :type context: lesscompanion.context.TemplateContext
        :type record: CacheRecord
        :param prior: Record loaded before compiling.
        :type prior: CacheRecord | None
        :param force: The compile was forced; a forced compile producing different CSS is always stored.
        :type force: bool
        :rtype: bool
        """
        current = self.load(self.cache_path(context, record.root), record.root)
        baseline = current if current is not None else prior
        if baseline is None or record.updated > baseline.updated:
            return True
        # A dependency changed, or was added or removed, without moving the marker.
        if record.files != baseline.files:
            return True
        return force and record.compiled != baseline.compiled

    def store(self, context, record):
        """
        :type context: lesscompanion.context.TemplateContext
        :type record: CacheRecord
        :raises lesscompanion.errors.WriteFailure: If the cache file could not be written.
        """
        record = record._replace(template=context.template)
        write_file(self.cache_path(context, record.root), json.dumps(record.to_dict()))

    def clear(self, template=None):
        """
        Delete cache files, for all templates or a single one. Template names may contain underscores, so a single
        templates cache files are picked by the template stored in each record, not by file name alone.

        :param template: Template name to delete cache files for.
        :type template: str | None
        :return: Deleted cache file paths.
        :rtype: list[str]
        """
        removed = []
        if not os.path.isdir(self.root):
            return removed
        for name in sorted(os.listdir(self.root)):
            if not name.endswith('.cache'):
                continue
            path = os.path.join(self.root, name)
            if template is not None:
                if '_{}_'.format(template) not in name:
                    continue
                try:
                    stored = self._read(path)
                except CacheCorrupt as e:
                    self.app.log.debug('Skipping cache \'%s\': %s', path, e)
                    continue
                if stored.template != template:
                    continue
            self._discard(path)
            removed.append(path)
        return removed

    @staticmethod
    def _read(path):
        try:
            with open(path, encoding='utf-8') as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            raise CacheCorrupt('Could not read cache: {}'.format(e))
        if not isinstance(data, dict):
            raise CacheCorrupt('Malformed cache record')
        return CacheRecord.from_dict(data)

    def _discard(self, path):
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
        except PermissionError:
            self.app.log.warning('Unable to delete cache \'%s\'', path)
