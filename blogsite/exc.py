class BlogsiteException(Exception):
    """ABC for blogsite exceptions to make it possible to catch them collectively"""


class MalformedFrontMatter(BlogsiteException):
    """The front matter block is present but can't be read"""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class UnparseableDate(BlogsiteException):
    """The post has no date, or the date it has can't be understood"""

    def __init__(self, source: str, value: object):
        self.source = source
        self.value = value
        super().__init__(f"{source}: unparseable date {value!r}")


class UnknownLayout(BlogsiteException):
    def __init__(self, layout: str):
        self.layout = layout
        super().__init__(f"no such layout: {layout!r}")


class BrokenLayout(BlogsiteException):
    """The layout exists but failed to load or to render"""

    def __init__(self, layout: str, reason: str):
        self.layout = layout
        self.reason = reason
        super().__init__(f"layout {layout!r} is broken: {reason}")


class UnreadableSource(BlogsiteException):
    """The file isn't UTF-8"""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")
