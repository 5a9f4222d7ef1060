"""
Less variable sanitizing.

Template params are free-form strings typed in by users. Before they can be injected as Less variables they are
trimmed, quoted when they look like paths, and given an explicit empty string literal when blank. Params holding rich
text or HTML (which may start with '.' or '#') are dropped altogether, as they would be parsed as selectors.
"""

DEFAULT_EXCLUDED = ('customCssCode', 'textLogo', 'slogan', 'copyText')


def sanitize_value(value):
    """
    Sanitize a single param value.

    :param value: Raw param value.
    :type value: object
    :return: Value safe to use as a Less variable value.
    :rtype: str
    """
    if value is None:
        value = ''
    elif isinstance(value, bool):
        value = 'true' if value else 'false'
    value = str(value).strip()

    if '/' in value:
        value = '"{}"'.format(value)
    if value == '':
        value = '""'
    return value


def sanitize(raw, exclude=DEFAULT_EXCLUDED):
    """
    Return a sanitized copy of the given params, with excluded keys removed.

    :param raw: Mapping of param names to raw values.
    :type raw: dict[str, object]
    :param exclude: Param names to drop before sanitizing.
    :type exclude: collections.Iterable[str]
    :rtype: dict[str, str]
    """
    exclude = set(exclude or ())
    return dict((name, sanitize_value(value)) for name, value in raw.items() if name not in exclude)
