from datetime import datetime, timezone

import pytest

from blogsite import exc
from blogsite.svc import collect_posts, post_from_source
from blogsite.value_objs import ErrorPolicy, SourceFile

from .utils import make_source


def test_post_from_source():
    source = make_source(
        "2020-03-14-druid.md",
        layout="page",
        title='"Druid, a Rust GUI"',
        date="2020-03-15 10:00:00 +0000",
        categories="rust gui",
        description="About druid's architecture",
    )
    post = post_from_source(source)
    assert post.layout == "page"
    assert post.title == "Druid, a Rust GUI"
    assert post.date == datetime(2020, 3, 15, 10, tzinfo=timezone.utc)
    assert post.categories == frozenset({"rust", "gui"})
    assert post.body == "Hi, so about *blogsite*...\n"
    assert post.slug == "druid"
    assert post.source == "2020-03-14-druid.md"
    assert post.description == "About druid's architecture"
    assert post.published is True
    assert post.output_path() == "gui/rust/2020/03/15/druid.html"


def test_post_from_source__defaults_from_filename():
    post = post_from_source(make_source("2018-05-08-covid-19-links.md"), "default")
    assert post.layout == "default"
    assert post.title == "Covid 19 Links"
    assert post.date == datetime(2018, 5, 8, tzinfo=timezone.utc)
    assert post.categories == frozenset()
    assert post.output_path() == "2018/05/08/covid-19-links.html"


def test_post_from_source__no_front_matter():
    source = SourceFile("2018-05-08-plain.md", "Just prose.\n")
    post = post_from_source(source)
    assert post.body == "Just prose.\n"
    assert post.date == datetime(2018, 5, 8, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "source",
    [
        pytest.param(SourceFile("about.md", "Just prose.\n"), id="no date at all"),
        pytest.param(make_source("about.md", title="About"), id="undated file"),
        pytest.param(make_source("about.md", date="whenever"), id="bad date"),
        pytest.param(make_source("2020-01-01-x.md", date="whenever"), id="bad date wins"),
    ],
)
def test_post_from_source__unparseable_date(source):
    with pytest.raises(exc.UnparseableDate):
        post_from_source(source)


def test_collect__sorted_newest_first():
    sources = [
        make_source("a.md", date="2018-05-08"),
        make_source("b.md", date="2020-03-14"),
        make_source("c.md", date="not a date"),
    ]
    site = collect_posts(sources)
    assert [p.source for p in site.posts] == ["b.md", "a.md"]
    (error,) = site.errors
    assert error.source == "c.md"
    assert isinstance(error.error, exc.UnparseableDate)

    again = collect_posts(sources)
    assert again.posts == site.posts
    assert [e.source for e in again.errors] == ["c.md"]


def test_collect__ties_keep_input_order():
    sources = [
        make_source("x.md", date="2020-01-01"),
        make_source("y.md", date="2020-01-02"),
        make_source("z.md", date="2020-01-01"),
        make_source("w.md", date="2020-01-01T00:00:00+00:00"),
    ]
    site = collect_posts(sources)
    assert [p.source for p in site.posts] == ["y.md", "x.md", "z.md", "w.md"]


def test_collect__offsets_are_compared_as_instants():
    sources = [
        make_source("utc.md", date='"2020-01-01 10:00:00 +0000"'),
        make_source("paris.md", date='"2020-01-01 10:30:00 +0100"'),
    ]
    site = collect_posts(sources)
    assert [p.source for p in site.posts] == ["utc.md", "paris.md"]


def test_collect__errors_collected():
    sources = [
        SourceFile("2020-01-01-unterminated.md", "---\ntitle: A\n"),
        make_source("2020-01-02-fine.md"),
        SourceFile("2020-01-03-not-yaml.md", "---\ntitle: A\nnonsense\n---\n"),
    ]
    site = collect_posts(sources, policy=ErrorPolicy.COLLECT)
    assert [p.source for p in site.posts] == ["2020-01-02-fine.md"]
    assert [e.source for e in site.errors] == [
        "2020-01-01-unterminated.md",
        "2020-01-03-not-yaml.md",
    ]
    assert all(isinstance(e.error, exc.MalformedFrontMatter) for e in site.errors)


def test_collect__abort_on_first_error():
    sources = [
        make_source("2020-01-02-fine.md"),
        SourceFile("2020-01-01-unterminated.md", "---\ntitle: A\n"),
        make_source("undated.md"),
    ]
    with pytest.raises(exc.MalformedFrontMatter):
        collect_posts(sources, policy=ErrorPolicy.ABORT)


def test_collect__unpublished_posts_are_skipped():
    sources = [
        make_source("2020-01-01-draft.md", published="false"),
        make_source("2020-01-02-live.md", published="true"),
    ]
    site = collect_posts(sources)
    assert [p.slug for p in site.posts] == ["live"]
    assert site.errors == []


@pytest.mark.parametrize("policy", [ErrorPolicy.COLLECT, ErrorPolicy.ABORT])
def test_collect__worker_pool_matches_serial(policy):
    sources = [
        make_source(f"2020-01-{day:02d}-post-{n}.md")
        for n, day in enumerate([5, 3, 5, 1, 3, 9, 2, 5], start=1)
    ]
    serial = collect_posts(sources, policy=policy)
    pooled = collect_posts(sources, policy=policy, workers=4)
    assert pooled == serial
    assert [p.slug for p in pooled.posts] == [
        "post-6",
        "post-1",
        "post-3",
        "post-8",
        "post-2",
        "post-5",
        "post-7",
        "post-4",
    ]


def test_collect__worker_pool_aborts_on_first_error_in_input_order():
    sources = [
        make_source("2020-01-01-fine.md"),
        make_source("undated.md"),
        SourceFile("2020-01-02-unterminated.md", "---\n"),
    ]
    with pytest.raises(exc.UnparseableDate):
        collect_posts(sources, policy=ErrorPolicy.ABORT, workers=3)


def test_collect__nothing():
    site = collect_posts([])
    assert site.posts == []
    assert site.errors == []
