"""
Page document the host renders. Plugins register stylesheets, head links, and scripts on it while a page is being
prepared, and may rewrite the rendered body afterwards.
"""
from collections import OrderedDict
import jinja2

HEAD_TEMPLATE = '''\
{%- for uri, attribs in stylesheets.items() %}
  <link rel="stylesheet" href="{{ uri }}"{% for name, value in attribs.items() %} {{ name }}="{{ value }}"{% endfor %} />
{%- endfor %}
{%- for link in head_links %}
  <link href="{{ link.href }}" {{ link.rel_type }}="{{ link.relation }}"\
{% for name, value in link.attribs.items() %} {{ name }}="{{ value }}"{% endfor %} />
{%- endfor %}
{%- for script in script_declarations %}
  <script type="text/javascript">{{ script|safe }}</script>
{%- endfor %}
{%- for tag in custom_tags %}
  {{ tag|safe }}
{%- endfor %}
'''

_env = jinja2.Environment(autoescape=True)


class HeadLink:
    def __init__(self, href, relation, rel_type='rel', attribs=None):
        self.href = href
        self.relation = relation
        self.rel_type = rel_type
        self.attribs = attribs or {}


class Document:
    """
    An outgoing page. Only 'html' documents carry head data.
    """
    def __init__(self, template, type='html'):
        """
        :param template: Name of the template rendering the document.
        :type template: str
        :param type: Document type, e.g. 'html', 'json', 'feed'.
        :type type: str
        """
        self.template = template
        self.type = type
        self.stylesheets = OrderedDict()
        """:type: collections.OrderedDict[str, dict[str, str]]"""
        self.head_links = []
        """:type: list[HeadLink]"""
        self.script_declarations = []
        self.custom_tags = []
        self.body = None
        """:type: str | None"""

    def add_stylesheet(self, uri, **attribs):
        self.stylesheets[uri] = attribs

    def list_style_references(self):
        """
        :return: URIs of the registered stylesheets, in registration order.
        :rtype: list[str]
        """
        return list(self.stylesheets.keys())

    def remove_style_reference(self, uri):
        """
        :type uri: str
        :return: If the stylesheet was registered.
        :rtype: bool
        """
        return self.stylesheets.pop(uri, None) is not None

    def add_head_link(self, href, relation, rel_type='rel', attribs=None):
        self.head_links.append(HeadLink(href, relation, rel_type, attribs))

    def add_script_declaration(self, content):
        self.script_declarations.append(content)

    def add_custom_tag(self, html):
        self.custom_tags.append(html)

    def render_head(self):
        """
        Render the head markup for everything registered on the document.

        :rtype: str
        """
        return _env.from_string(HEAD_TEMPLATE).render(stylesheets=self.stylesheets,
                                                      head_links=self.head_links,
                                                      script_declarations=self.script_declarations,
                                                      custom_tags=self.custom_tags)

    def rewrite_body(self, rewrite):
        """
        Rewrite the rendered body.

        :param rewrite: Function taking the body, and returning a tuple of the new body and a count of changes made.
        :type rewrite: callable[str, tuple[str, int]]
        :return: Number of changes made. The body is only replaced if there were any.
        :rtype: int
        """
        if self.body is None:
            return 0
        body, count = rewrite(self.body)
        if count:
            self.body = body
        return count
