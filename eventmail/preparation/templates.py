"""Placeholder expansion for subject and body templates using Jinja2.

Templates use Jinja2 syntax, so a placeholder reads '{{date}}' or
'{{ name }}'. Values come from a flat string dictionary and any name not
in it renders as the empty string.
"""

import logging
import re
from typing import Any, Mapping, Optional

from jinja2 import ChainableUndefined, Environment, TemplateError, pass_context

from .exceptions import TemplateExpansionError

logger = logging.getLogger(__name__)

# Names the Jinja2 parser binds itself instead of looking them up in the
# render context. Bare placeholders with these names are rewritten to a
# context lookup so a capture group may use them like any other name.
RESERVED_PLACEHOLDER = re.compile(
    r"\{\{(-?)\s*(true|false|none|True|False|None|self)\s*(-?)\}\}"
)


@pass_context
def captured_value(context: Any, name: str) -> str:
    """Value of name in the render context, "" if it is not there."""
    return context.get(name, "")


class TemplateExpander:
    """Expands '{{key}}' placeholders from a dictionary of captured values.

    Unknown keys, including attribute access on them, render as the empty
    string. The environment carries no globals, so names such as 'range' or
    'lipsum' are unknown keys too. Output is plain text, so nothing is
    HTML-escaped.
    """

    def __init__(self, environment: Optional[Environment] = None):
        self.env = environment or Environment(
            autoescape=False,
            undefined=ChainableUndefined,
            keep_trailing_newline=True,
        )
        self.env.globals.clear()
        self.env.filters["captured"] = captured_value

    def expand(self, template: str, values: Mapping[str, str]) -> str:
        """Render template with values.

        Raises:
            TemplateExpansionError: If the template is malformed or rendering fails
        """
        source = RESERVED_PLACEHOLDER.sub(r'{{\1 "\2"|captured \3}}', template)
        try:
            rendered = self.env.from_string(source).render(dict(values))
        except TemplateError as e:
            error_msg = f"Template substitution failed: {e}"
            logger.error(error_msg)
            raise TemplateExpansionError(error_msg) from e
        except Exception as e:
            error_msg = f"Unexpected error during template substitution: {e}"
            logger.error(error_msg, exc_info=True)
            raise TemplateExpansionError(error_msg) from e

        logger.debug(f"Expanded template with keys: {', '.join(sorted(values))}")
        return rendered


_default_expander = TemplateExpander()


def expand_template(template: str, values: Mapping[str, str]) -> str:
    """Expand template with the shared default TemplateExpander."""
    return _default_expander.expand(template, values)
