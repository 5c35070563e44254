from typing import Dict

from blogsite.value_objs import SourceFile

POST_LAYOUT = """<html>
<head><title>{{ post.title }}</title></head>
<body>
<h1 class="post-title">{{ post.title }}</h1>
<time>{{ post.render_date() }}</time>
<article>{{ content }}</article>
</body>
</html>
"""


def make_source(name: str = "2020-03-14-hello-world.md", **metadata: str) -> SourceFile:
    """A source file with the given front matter and a short body."""
    lines = ["---"]
    lines.extend(f"{key}: {value}" for key, value in metadata.items())
    lines.append("---")
    lines.append("Hi, so about *blogsite*...")
    return SourceFile(name=name, text="\n".join(lines) + "\n")


def write_files(root, files: Dict[str, str]) -> None:
    for relative_path, text in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
