"""Front matter: the YAML block at the top of a content file.

A file with front matter looks like this:

    ---
    layout: post
    title: Hello, World
    date: 2020-03-14 10:00:00 +0000
    categories: rust gui
    ---
    The body, in markdown.

The opening marker must be the very first line.  Files without one simply
have no metadata.

"""

from typing import Any, Dict, Mapping, Tuple
import re

import yaml

from . import exc

BOM = "\ufeff"

OPENING_MARKER_REGEX = re.compile(r"^---[ \t]*$")

# YAML allows a document to be ended with "..." as well
CLOSING_MARKER_REGEX = re.compile(r"^(---|\.\.\.)[ \t]*$")

STRING_KEYS = ["layout", "title", "description"]


def parse_front_matter(
    text: str, source: str = "<string>"
) -> Tuple[Dict[str, Any], str]:
    """Split the text into (metadata, body).

    Raises MalformedFrontMatter if there is an opening marker but the block
    is unterminated or isn't a mapping of keys to values.

    """
    stripped = text[1:] if text.startswith(BOM) else text
    lines = stripped.splitlines(keepends=True)
    if len(lines) == 0 or not OPENING_MARKER_REGEX.match(lines[0].rstrip("\r\n")):
        return {}, text

    for index, line in enumerate(lines[1:], start=1):
        if CLOSING_MARKER_REGEX.match(line.rstrip("\r\n")):
            closing_index = index
            break
    else:
        raise exc.MalformedFrontMatter(source, "no closing '---' marker")

    block = "".join(lines[1:closing_index])
    body = "".join(lines[closing_index + 1 :])

    try:
        metadata = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise exc.MalformedFrontMatter(source, f"invalid front matter: {e}") from e

    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, dict):
        raise exc.MalformedFrontMatter(
            source, "front matter must be a set of 'key: value' lines"
        )
    validate_metadata(metadata, source)
    return metadata, body


def validate_metadata(metadata: Mapping[Any, Any], source: str) -> None:
    """Check the types of the keys we know about, so problems show up when
    parsing rather than later when rendering."""
    for key in metadata:
        if not isinstance(key, str):
            raise exc.MalformedFrontMatter(source, f"non-string key: {key!r}")

    for key in STRING_KEYS:
        if key in metadata and not isinstance(metadata[key], str):
            raise exc.MalformedFrontMatter(source, f"'{key}' must be a string")

    for key in ["categories", "category"]:
        value = metadata.get(key)
        if value is None or isinstance(value, str):
            continue
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            continue
        raise exc.MalformedFrontMatter(
            source, f"'{key}' must be a string or a list of strings"
        )

    if "published" in metadata and not isinstance(metadata["published"], bool):
        raise exc.MalformedFrontMatter(source, "'published' must be true or false")


def dump_front_matter(metadata: Mapping[str, Any], body: str) -> str:
    """The reverse of parse_front_matter."""
    if len(metadata) == 0:
        yaml_txt = ""
    else:
        yaml_txt = yaml.safe_dump(
            dict(metadata),
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False,
            width=1000,
        )
    return f"---\n{yaml_txt}---\n{body}"
