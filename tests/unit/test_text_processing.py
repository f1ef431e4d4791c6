"""Unit tests for text processing helpers."""

import pytest

from folio.utils.text_processing import slugify, truncate_display


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, expected",
    [
        ("My Portfolio 2025!", "my-portfolio-2025"),
        ("  Minimal   Dark  ", "minimal-dark"),
        ("Café Développeur", "cafe-developpeur"),
        ("!!!", ""),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


@pytest.mark.unit
def test_slugify_respects_max_len():
    slug = slugify("a" * 10 + " " + "b" * 10, max_len=11)

    assert slug == "aaaaaaaaaa"


@pytest.mark.unit
def test_truncate_display():
    assert truncate_display("short", 10) == "short"
    assert truncate_display("this is a very long string", 10) == "this is..."
