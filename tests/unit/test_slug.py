import pytest

from src.domain.slug import derive_slug, is_valid_slug


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Hello, World! 2024", "hello-world-2024"),
        ("  Leading and trailing  ", "leading-and-trailing"),
        ("Multiple   spaces\tand\nlines", "multiple-spaces-and-lines"),
        ("Already-hyphenated title", "already-hyphenated-title"),
        ("--Dashes-- everywhere--", "dashes-everywhere"),
        ("Café Crème", "caf-crme"),
        ("UPPER case", "upper-case"),
    ],
)
def test_derive_slug(title, expected):
    assert derive_slug(title) == expected


@pytest.mark.parametrize("title", ["", "  ", "!!!", "¿¡ ... !?", "日本語"])
def test_derive_slug_without_alphanumerics_is_empty(title):
    assert derive_slug(title) == ""


@pytest.mark.parametrize(
    "title",
    ["Hello, World! 2024", "a - b - c", "Web Development: 10 Tips", "x", "  --  "],
)
def test_derive_slug_is_idempotent(title):
    once = derive_slug(title)
    assert derive_slug(once) == once


def test_derived_slug_is_valid_when_non_empty():
    slug = derive_slug("Branding for Small Businesses (Part 2)")
    assert slug == "branding-for-small-businesses-part-2"
    assert is_valid_slug(slug)


@pytest.mark.parametrize("slug", ["hello", "hello-world", "post-2024", "a1-b2-c3"])
def test_valid_slugs(slug):
    assert is_valid_slug(slug)


@pytest.mark.parametrize(
    "slug",
    ["", "Hello", "hello_world", "-hello", "hello-", "hello--world", "hello world", "hello\n"],
)
def test_invalid_slugs(slug):
    assert not is_valid_slug(slug)


def test_custom_pattern():
    assert is_valid_slug("hello_world", r"^[a-z_]+$")
    assert not is_valid_slug("hello-world", r"^[a-z_]+$")
