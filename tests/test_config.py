import pytest


def test_defaults_and_overrides():
    from lesscompanion.app.config import PluginConfig

    config = PluginConfig({'mode': 0, 'lessfile': 'less/template.less', 'options': {'env': 'development', 'a': 1}},
                          {'mode': 2, 'options': {'env': 'production'}})

    assert config.get('mode') == 2
    assert config.get('lessfile') == 'less/template.less'
    assert config.get('options') == {'env': 'production', 'a': 1}
    assert config.get('missing', 'default') == 'default'


def test_json_values():
    from lesscompanion.app.config import PluginConfig

    config = PluginConfig(values='{"useLESS": "1", "cssCompress": "0"}')

    assert config.get_bool('useLESS')
    assert not config.get_bool('cssCompress')
    assert config.to_dict() == {'useLESS': '1', 'cssCompress': '0'}


def test_invalid_values():
    from lesscompanion.app.config import PluginConfig

    with pytest.raises(ValueError):
        PluginConfig(values='{not json')
    with pytest.raises(ValueError):
        PluginConfig(values='[1, 2]')
    assert PluginConfig(values='').to_dict() == {}


@pytest.mark.parametrize('value,expected', [
    ('1', True), ('0', False), ('', False), ('true', True), ('false', False), ('off', False),
    (1, True), (0, False), (True, True), (None, False)
])
def test_get_bool(value, expected):
    from lesscompanion.app.config import PluginConfig

    assert PluginConfig(values={'flag': value}).get_bool('flag') is expected


def test_get_int():
    from lesscompanion.app.config import PluginConfig

    config = PluginConfig(values={'mode': '2', 'broken': 'two'})

    assert config.get_int('mode') == 2
    assert config.get_int('broken', 1) == 1
    assert config.get_int('missing', 3) == 3


def test_merge_does_not_modify_defaults():
    from lesscompanion.app.config import PluginConfig

    defaults = {'options': {'env': 'development'}}
    PluginConfig(defaults, {'options': {'env': 'production'}})

    assert defaults == {'options': {'env': 'development'}}
