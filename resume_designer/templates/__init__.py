"""Design template catalog."""

from .catalog import (
    DESIGN_TEMPLATES,
    TEMPLATE_STYLES,
    DesignTemplate,
    RemoteTemplateSource,
    TemplateCatalog,
    select_random_templates,
)
from .remote import HttpTemplateSource, parse_template_rows

__all__ = [
    "DESIGN_TEMPLATES",
    "TEMPLATE_STYLES",
    "DesignTemplate",
    "RemoteTemplateSource",
    "TemplateCatalog",
    "select_random_templates",
    "HttpTemplateSource",
    "parse_template_rows",
]
