from typing import Optional, Sequence, FrozenSet
from datetime import datetime
from dataclasses import dataclass, field
import enum

from .conv import slugify
from .exc import BlogsiteException


@dataclass(frozen=True)
class SourceFile:
    """The raw contents of one content file, before any parsing."""

    name: str
    text: str


@dataclass(frozen=True)
class Post:
    layout: str
    title: str
    date: datetime
    body: str
    slug: str
    source: str
    categories: FrozenSet[str] = frozenset()
    description: Optional[str] = None
    published: bool = True

    def output_path(self) -> str:
        """Where this post should be written, relative to the output directory.

        This is the same as Jekyll's default permalink style:
        /:categories/:year/:month/:day/:title.html

        Categories and the slug are slugified, so the path can't climb out of
        the output directory.

        """
        parts = sorted({slugify(c) for c in self.categories} - {""})
        parts.extend(
            [
                f"{self.date.year:04d}",
                f"{self.date.month:02d}",
                f"{self.date.day:02d}",
                f"{slugify(self.slug) or 'index'}.html",
            ]
        )
        return "/".join(parts)

    def render_date(self) -> str:
        return self.date.strftime("%Y-%m-%d")


@dataclass(frozen=True)
class FileError:
    """A file that couldn't be processed, and why."""

    source: str
    error: BlogsiteException

    def describe(self) -> str:
        return f"{self.source}: {type(self.error).__name__}: {self.error}"


@enum.unique
class ErrorPolicy(enum.Enum):
    ABORT = "abort"
    COLLECT = "collect"


@dataclass
class Site:
    """All the posts of one generation run, newest first."""

    posts: Sequence[Post]
    errors: Sequence[FileError] = field(default_factory=list)


@dataclass(frozen=True)
class RenderedDocument:
    post: Post
    html: str

    @property
    def path(self) -> str:
        return self.post.output_path()


@dataclass
class BuildReport:
    written: Sequence[str]
    errors: Sequence[FileError]

    def ok(self) -> bool:
        return len(self.errors) == 0
