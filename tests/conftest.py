import pytest

from blogsite.layouts import TemplateStore

from .utils import POST_LAYOUT


@pytest.fixture(scope="function")
def template_store() -> TemplateStore:
    return TemplateStore.from_mapping({"post": POST_LAYOUT})
