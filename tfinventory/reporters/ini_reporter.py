"""
Static INI inventory, for use with ``ansible -i <file>``.
"""
from jinja2 import Environment

from tfinventory.inventory import Inventory

_INI_TEMPLATE = """\
{% for name, hosts in groups.items() -%}
[{{ name }}]
{% for h in hosts -%}
{{ h }}
{% endfor %}
{% endfor -%}
"""


def build_report(inventory: Inventory) -> str:
    env = Environment(autoescape=False, keep_trailing_newline=True)
    template = env.from_string(_INI_TEMPLATE)
    return template.render(groups=inventory.groups)
