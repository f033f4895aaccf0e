"""Category table: name lookup, ids and titles."""
import pytest

from blogsite.categories import Category, validate_categories


@pytest.mark.parametrize(
    "name, category_id",
    [
        ("technology", 1),
        ("Design", 2),
        ("STARTUP", 3),
        ("lifestyle", 4),
        ("tools", 5),
        ("mobile", 6),
        ("tips", 7),
    ],
)
def test_from_name(name, category_id):
    assert Category.from_name(name).category_id == category_id


@pytest.mark.parametrize("name", ["", "cooking", "tech", "technology1"])
def test_from_name_unknown(name):
    assert Category.from_name(name) is None


def test_titles():
    assert [c.title for c in Category] == [
        "Technology", "Design", "Startup", "Lifestyle", "Tools", "Mobile", "Tips",
    ]


def test_validate_categories_accepts_table():
    validate_categories()
