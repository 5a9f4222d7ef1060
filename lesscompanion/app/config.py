import copy
import json


class PluginConfig:
    """
    Params for a plugin. Values set in the apps config file are merged over the plugins defaults.
    """

    def __init__(self, defaults=None, values=None):
        """
        :param defaults: Default param values.
        :type defaults: dict[str, object] | None
        :param values: Configured param values.
        :type values: dict[str, object] | str | None
        """
        self.values = PluginConfig.merge_dict(defaults or {}, PluginConfig.parse(values))

    @staticmethod
    def parse(values):
        """
        Get a params dictionary from a JSON string or dictionary.

        :type values: dict[str, object] | str | None
        :rtype: dict[str, object]
        :raises ValueError: If values is a string that is not a JSON object.
        """
        if values is None or values == '':
            return {}
        if isinstance(values, str):
            values = json.loads(values)
        if not isinstance(values, dict):
            raise ValueError('Params must be an object, got {}'.format(type(values).__name__))
        return values

    def get(self, key, default=None):
        value = self.values.get(key, None)
        return default if value is None else value

    def get_bool(self, key, default=False):
        """
        Get a param as a boolean. Accepts the string and integer forms that form fields store, e.g. '0', '1', 'true'.

        :type key: str
        :type default: bool
        :rtype: bool
        """
        value = self.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() not in ('', '0', 'false', 'no', 'off')
        return bool(value)

    def get_int(self, key, default=0):
        try:
            return int(self.get(key, default))
        except (TypeError, ValueError):
            return default

    def to_dict(self):
        return copy.deepcopy(self.values)

    @staticmethod
    def merge_dict(target, source):
        """
        Return a merged copy of two dictionaries. Overwriting any matching keys from the second over the first, but
        merging any dictionary values.

        :param target: Original dictionary to copy and update.
        :type target: dict
        :param source: Dictionary to update items from.
        :type source: dict
        :return: Copied and updated target dictionary.
        :rtype: dict
        """
        merged = copy.copy(target)
        for key in source:
            if key in merged and isinstance(merged[key], dict) and isinstance(source[key], dict):
                merged[key] = PluginConfig.merge_dict(merged[key], source[key])
                continue
            merged[key] = source[key]
        return merged
