import pytest

from pdfutils.errors import InvalidInputError
from pdfutils.page_ops import (
    format_page_list,
    numbered_name,
    page_range_to_indices,
    parse_page_bounds,
    parse_page_list,
)


def test_page_bounds():
    assert parse_page_bounds("2", " 4 ") == (2, 4)
    assert parse_page_bounds("3", "3", total_pages=3) == (3, 3)


@pytest.mark.parametrize("start, end", [("", "3"), ("a", "2"), ("5", "2"), ("0", "1"), ("1.5", "2")])
def test_page_bounds_rejects_bad_input(start, end):
    with pytest.raises(InvalidInputError):
        parse_page_bounds(start, end)


def test_page_bounds_message_names_empty_input():
    with pytest.raises(InvalidInputError) as exc:
        parse_page_bounds("", "3")
    assert str(exc.value) == "[EMPTY] and 3 is not a valid range of pages!"


def test_page_bounds_beyond_document():
    with pytest.raises(InvalidInputError, match="file has 4 pages"):
        parse_page_bounds("2", "5", total_pages=4)


def test_page_range_to_indices():
    assert page_range_to_indices(2, 4) == [1, 2, 3]
    assert page_range_to_indices(1, 1) == [0]


def test_page_list():
    assert parse_page_list("3, 1,2-4") == [0, 1, 2, 3]
    assert parse_page_list("7", total_pages=7) == [6]


@pytest.mark.parametrize("text", ["", "  ", "0", "x", "4-2", "-3", "2-"])
def test_page_list_rejects_bad_input(text):
    with pytest.raises(InvalidInputError):
        parse_page_list(text)


def test_page_list_beyond_document():
    with pytest.raises(InvalidInputError):
        parse_page_list("2,5", total_pages=4)


def test_format_page_list():
    assert format_page_list([5, 1, 3, 1]) == "1,3,5"
    assert format_page_list([]) == ""


def test_numbered_name_padding():
    assert numbered_name("img_", 1, 12) == "img_01.png"
    assert numbered_name("img_", 3, 9) == "img_3.png"
    assert numbered_name("page", 7, 100, ".jpg") == "page007.jpg"


def test_numbered_names_sort_in_page_order():
    names = [numbered_name("img_", i, 120) for i in range(1, 121)]
    assert sorted(names) == names
