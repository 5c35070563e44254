"""Layouts are jinja templates, looked up by name.

The rendered post body is available to the template as `content` and the post
itself as `post`.  A minimal layout:

    <html><title>{{ post.title }}</title><body>{{ content }}</body></html>

"""

from logging import getLogger
from pathlib import Path
from typing import Mapping

from jinja2 import (
    BaseLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)

from . import exc

logger = getLogger(__name__)


class TemplateStore:
    def __init__(self, loader: BaseLoader, suffix: str = "") -> None:
        self.suffix = suffix
        self.env = Environment(
            loader=loader,
            autoescape=select_autoescape(default=True, default_for_string=True),
            keep_trailing_newline=True,
        )

    @classmethod
    def from_mapping(cls, layouts: Mapping[str, str]) -> "TemplateStore":
        return cls(DictLoader(dict(layouts)))

    @classmethod
    def from_directory(cls, layouts_dir: Path) -> "TemplateStore":
        """Layout 'post' is the file 'post.html' in the directory."""
        logger.info("loading layouts from %s", layouts_dir)
        return cls(FileSystemLoader(str(layouts_dir), encoding="utf-8"), suffix=".html")

    def get_layout(self, name: str) -> Template:
        try:
            return self.env.get_template(name + self.suffix)
        except TemplateNotFound as e:
            raise exc.UnknownLayout(name) from e
        except TemplateSyntaxError as e:
            raise exc.BrokenLayout(name, str(e)) from e
