from concurrent.futures import ThreadPoolExecutor
from logging import getLogger
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union
import functools

from markupsafe import Markup

from . import exc, conv
from .config import Config
from .feed import make_feed
from .frontmatter import parse_front_matter
from .layouts import TemplateStore
from .markdown import render_markdown
from .value_objs import (
    BuildReport,
    ErrorPolicy,
    FileError,
    Post,
    RenderedDocument,
    Site,
    SourceFile,
)

logger = getLogger(__name__)

SOURCE_SUFFIXES = {".md", ".markdown"}

FEED_FILENAME = "feed.xml"


def post_from_source(source: SourceFile, default_layout: str = "post") -> Post:
    metadata, body = parse_front_matter(source.text, source.name)
    date_prefix, slug = conv.split_filename(source.name)

    raw_date = metadata.get("date")
    if raw_date is None:
        raw_date = date_prefix
    if raw_date is None:
        raise exc.UnparseableDate(source.name, None)
    date = conv.DateConverter().convert(raw_date, source.name)

    title = metadata.get("title")
    if title is None:
        # as Jekyll does: 2020-03-14-some-title.md is "Some Title"
        title = " ".join(word.capitalize() for word in slug.split("-") if word)

    return Post(
        layout=metadata.get("layout", default_layout),
        title=title,
        date=date,
        body=body,
        slug=slug,
        source=source.name,
        categories=conv.categories_from_metadata(metadata),
        description=metadata.get("description"),
        published=metadata.get("published", True),
    )


def _parse_or_record(
    source: SourceFile, default_layout: str, policy: ErrorPolicy
) -> Union[Post, FileError]:
    try:
        return post_from_source(source, default_layout)
    except exc.BlogsiteException as e:
        if policy is ErrorPolicy.ABORT:
            raise
        logger.warning("unable to parse %s: %s", source.name, e)
        return FileError(source.name, e)


def collect_posts(
    sources: Sequence[SourceFile],
    policy: ErrorPolicy = ErrorPolicy.COLLECT,
    workers: int = 1,
    default_layout: str = "post",
) -> Site:
    """Parse all the sources into a Site, newest post first.

    Posts with equal dates stay in input order.  Files that can't be parsed
    (including those without a usable date) are left out and recorded in
    Site.errors, unless the policy is ABORT in which case the first error (in
    input order) is raised.

    """
    parse = functools.partial(
        _parse_or_record, default_layout=default_layout, policy=policy
    )
    results: List[Union[Post, FileError]]
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(parse, sources))
    else:
        results = [parse(source) for source in sources]

    posts = []
    errors = []
    for result in results:
        if isinstance(result, FileError):
            errors.append(result)
        elif not result.published:
            logger.info("skipping unpublished post %s", result.source)
        else:
            posts.append(result)

    # sorted() is stable, even when reversed
    posts = sorted(posts, key=lambda p: p.date, reverse=True)
    logger.info("collected %d posts (%d errors)", len(posts), len(errors))
    return Site(posts=posts, errors=errors)


def render_post(post: Post, store: TemplateStore) -> str:
    layout = store.get_layout(post.layout)
    content = Markup(render_markdown(post.body))
    try:
        return layout.render(content=content, post=post)
    except Exception as e:
        # whatever a layout raises, only this post is broken
        raise exc.BrokenLayout(post.layout, f"{type(e).__name__}: {e}") from e


def render_site(
    site: Site, store: TemplateStore, policy: ErrorPolicy = ErrorPolicy.COLLECT
) -> Tuple[List[RenderedDocument], List[FileError]]:
    documents = []
    errors = []
    for post in site.posts:
        try:
            documents.append(RenderedDocument(post, render_post(post, store)))
        except exc.BlogsiteException as e:
            if policy is ErrorPolicy.ABORT:
                raise
            logger.warning("unable to render %s: %s", post.source, e)
            errors.append(FileError(post.source, e))
    return documents, errors


def find_sources(source_dir: Path) -> List[Path]:
    """All the post files under the directory, in a stable order."""
    return sorted(
        (
            path
            for path in source_dir.rglob("*")
            if path.suffix in SOURCE_SUFFIXES and path.is_file()
        ),
        key=lambda path: path.relative_to(source_dir).as_posix(),
    )


def read_source(path: Path, source_dir: Path) -> SourceFile:
    name = path.relative_to(source_dir).as_posix()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise exc.UnreadableSource(name, str(e)) from e
    return SourceFile(name=name, text=text)


def load_sources(
    source_dir: Path, policy: ErrorPolicy = ErrorPolicy.COLLECT
) -> Tuple[List[SourceFile], List[FileError]]:
    sources = []
    errors = []
    if not source_dir.is_dir():
        logger.warning("source dir ('%s') not found, there are no posts", source_dir)
    for path in find_sources(source_dir):
        try:
            sources.append(read_source(path, source_dir))
        except exc.UnreadableSource as e:
            if policy is ErrorPolicy.ABORT:
                raise
            logger.warning("unable to read %s: %s", path, e)
            errors.append(FileError(e.source, e))
    return sources, errors


def write_site(documents: Iterable[RenderedDocument], output_dir: Path) -> List[str]:
    written: List[str] = []
    for document in documents:
        if document.path in written:
            logger.warning(
                "%s overwrites an earlier post at %s", document.post.source, document.path
            )
        output_path = output_dir / document.path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(document.html, encoding="utf-8")
        logger.debug("wrote %s", output_path)
        written.append(document.path)
    return written


def build_site(config: Config) -> BuildReport:
    """Read the posts, render them and write them out.

    Every file that can be built is built, even if others fail.

    """
    policy = ErrorPolicy.ABORT if config.fail_fast else ErrorPolicy.COLLECT
    sources, read_errors = load_sources(config.source_dir, policy)
    site = collect_posts(
        sources,
        policy=policy,
        workers=config.workers,
        default_layout=config.default_layout,
    )
    store = TemplateStore.from_directory(config.layouts_dir)
    documents, render_errors = render_site(site, store, policy)

    written = write_site(documents, config.output_dir)
    if config.base_url is not None:
        feed = make_feed(
            [document.post for document in documents],
            base_url=config.base_url,
            title=config.site_title,
            description=config.site_description,
        )
        config.output_dir.mkdir(parents=True, exist_ok=True)
        (config.output_dir / FEED_FILENAME).write_bytes(feed)
        written.append(FEED_FILENAME)
    else:
        logger.info("no base_url configured, not writing a feed")

    errors = [*read_errors, *site.errors, *render_errors]
    logger.info("wrote %d files to %s", len(written), config.output_dir)
    for error in errors:
        logger.error("failed: %s", error.describe())
    return BuildReport(written=written, errors=errors)
