"""Jinja2 template rendering for profile documents."""

import dataclasses
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape
from pydantic import BaseModel

from forumprofile.exceptions import RenderError


def _context_for(view_model: Any) -> dict:
    if hasattr(view_model, "as_context"):
        return view_model.as_context()
    if dataclasses.is_dataclass(view_model) and not isinstance(view_model, type):
        return dataclasses.asdict(view_model)
    if isinstance(view_model, BaseModel):
        return view_model.model_dump()
    if isinstance(view_model, dict):
        return dict(view_model)
    raise RenderError(f"Cannot render object of type {type(view_model).__name__}")


class TemplateRenderer:
    """Renders view models with templates bundled in forumprofile.resources."""

    def __init__(self, environment: Environment | None = None):
        self.environment = environment or Environment(
            loader=PackageLoader("forumprofile", "resources/templates"),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )

    def render(self, view_model: Any, template_name: str) -> str:
        """
        Render a view model to markup.

        Args:
            view_model: ProfileViewModel, dataclass, pydantic model or dict
            template_name: Template file name, e.g. "profile.html"

        Returns:
            Rendered markup

        Raises:
            RenderError: If the template is missing or fails to render
        """
        context = _context_for(view_model)
        try:
            template = self.environment.get_template(template_name)
            return template.render(context)
        except TemplateError as e:
            raise RenderError(f"Failed to render {template_name}: {e}") from e
