def test_trims_whitespace():
    from lesscompanion.sanitizer import sanitize_value

    assert sanitize_value('  hello  ') == 'hello'


def test_quotes_paths():
    from lesscompanion.sanitizer import sanitize_value

    assert sanitize_value('foo/bar') == '"foo/bar"'
    assert sanitize_value('  images/logo.png ') == '"images/logo.png"'


def test_quotes_empty_values():
    from lesscompanion.sanitizer import sanitize_value

    assert sanitize_value('') == '""'
    assert sanitize_value('   ') == '""'
    assert sanitize_value(None) == '""'


def test_passes_plain_values():
    from lesscompanion.sanitizer import sanitize_value

    assert sanitize_value('#0088cc') == '#0088cc'
    assert sanitize_value('60px') == '60px'
    assert sanitize_value(12) == '12'
    assert sanitize_value(True) == 'true'


def test_excludes_rich_text():
    from lesscompanion.sanitizer import sanitize

    raw = {
        'linkColor': ' #0088cc ',
        'logoPath': 'images/logo.png',
        'fontFamily': '',
        'textLogo': '<b>My site</b>',
        'slogan': '.slogan',
        'copyText': '# copy',
        'customCssCode': '.x { color: red; }'
    }

    assert sanitize(raw) == {'linkColor': '#0088cc', 'logoPath': '"images/logo.png"', 'fontFamily': '""'}


def test_custom_exclusions():
    from lesscompanion.sanitizer import sanitize

    raw = {'a': '1', 'b': '2'}

    assert sanitize(raw, exclude=['a']) == {'b': '2'}
    assert sanitize(raw, exclude=None) == {'a': '1', 'b': '2'}


def test_does_not_modify_input():
    from lesscompanion.sanitizer import sanitize

    raw = {'a': ' 1 ', 'textLogo': 'x'}
    sanitize(raw)

    assert raw == {'a': ' 1 ', 'textLogo': 'x'}
