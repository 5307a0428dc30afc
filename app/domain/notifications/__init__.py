"""Notification templates and rendering.

- Catalog: fixed templates with SMS and email variants
- Renderer: fills ``{token}`` placeholders from entity fields
"""

from app.domain.notifications.catalog import MessageTemplate, get_template, list_templates
from app.domain.notifications.renderer import render_text

__all__ = ["MessageTemplate", "get_template", "list_templates", "render_text"]
