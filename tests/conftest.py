import os
import json
import shutil
import pytest

RESOURCES_ROOT = os.path.join(os.path.dirname(__file__), 'resources')


class Resources:
    """
    Copies fixture directories from tests/resources.
    """
    def __init__(self, root):
        self.root = root

    def path(self, name):
        return os.path.join(self.root, name)

    def copy(self, name, dest):
        shutil.copytree(self.path(name), dest, dirs_exist_ok=True)
        return dest


class StubCompiler:
    """
    Stands in for the Less compiler, recording every compile.
    """
    version = 'stub'

    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def compile(self, request, source, fragments=()):
        self.calls.append((request, source, list(fragments)))
        if self.error is not None:
            raise self.error
        return '/* {0} */\n'.format(len(self.calls)) + source + ''.join(fragments)


@pytest.fixture
def resources():
    return Resources(RESOURCES_ROOT)


@pytest.fixture
def temp_dir(tmpdir):
    return str(tmpdir)


@pytest.fixture
def make_app(resources, temp_dir):
    """
    Get a factory creating an App from the 'app_new' resource, with optional plugin params and extra resources
    copied over it.
    """
    from lesscompanion.app import App

    def factory(params=None, *extra):
        root = os.path.join(temp_dir, 'test_app')
        resources.copy('app_new', root)
        for name in extra:
            resources.copy(name, root)

        config_path = os.path.join(root, 'lesscompanion.json')
        with open(config_path) as fh:
            config = json.load(fh)
        config.setdefault('plugin_params', {})['lesstemplatecompanion'] = params or {}
        with open(config_path, 'w') as fh:
            json.dump(config, fh)

        return App(root)

    return factory


@pytest.fixture
def stub_compiler():
    return StubCompiler
