from typing import Sequence

from feedgen.feed import FeedGenerator

from .value_objs import Post


def post_url(base_url: str, post: Post) -> str:
    return f"{base_url.rstrip('/')}/{post.output_path()}"


def make_feed(
    posts: Sequence[Post], base_url: str, title: str, description: str = ""
) -> bytes:
    """An RSS feed of the posts, in the order given."""
    feed_url = f"{base_url.rstrip('/')}/feed.xml"
    fg = FeedGenerator()
    fg.id(feed_url)
    fg.title(title)
    fg.language("en")
    fg.link(href=feed_url, rel="self")
    fg.link(href=base_url, rel="alternate")
    # RSS requires a channel description
    fg.description(description or title)

    for post in posts:
        fe = fg.add_entry(order="append")
        url = post_url(base_url, post)
        fe.id(url)
        fe.title(post.title)
        fe.link(href=url)
        fe.pubDate(post.date)
        if post.description:
            fe.description(post.description)
        for category in sorted(post.categories):
            fe.category(term=category)

    return fg.rss_str(pretty=True)
