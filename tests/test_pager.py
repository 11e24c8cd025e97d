import pytest

from book_editor.pager import entry_range, page_window, paginate, total_pages


@pytest.mark.parametrize("length,size", [(0, 10), (1, 10), (10, 10), (101, 25), (57, 100)])
def test_pages_cover_view_exactly_once(length, size):
    view = list(range(length))
    _, pages = paginate(view, size, 1)
    assert pages == max(1, -(-length // size))

    collected = []
    for page in range(1, pages + 1):
        chunk, _ = paginate(view, size, page)
        collected.extend(chunk)
    assert collected == view


def test_empty_view_has_one_empty_page():
    assert paginate([], 25, 1) == ([], 1)
    assert paginate([], 25, 7) == ([], 1)


def test_out_of_range_pages_are_clamped():
    view = list(range(30))
    assert paginate(view, 10, 0) == (list(range(10)), 3)
    assert paginate(view, 10, -4) == (list(range(10)), 3)
    assert paginate(view, 10, 99) == (list(range(20, 30)), 3)


def test_last_page_is_short():
    chunk, pages = paginate(list(range(23)), 10, 3)
    assert chunk == [20, 21, 22]
    assert pages == 3


def test_non_positive_page_size_is_treated_as_one():
    assert total_pages(3, 0) == 3
    assert paginate(["a", "b"], 0, 2) == (["b"], 2)


@pytest.mark.parametrize("page,pages,expected", [
    (1, 1, [1]),
    (2, 3, [1, 2, 3]),
    (1, 10, [1, 2, 3, 4, 5]),
    (3, 10, [1, 2, 3, 4, 5]),
    (6, 10, [4, 5, 6, 7, 8]),
    (9, 10, [6, 7, 8, 9, 10]),
    (50, 10, [6, 7, 8, 9, 10]),
])
def test_page_window(page, pages, expected):
    assert page_window(page, pages) == expected


def test_entry_range():
    assert entry_range(1, 25, 0) == (0, 0)
    assert entry_range(1, 25, 10) == (1, 10)
    assert entry_range(3, 10, 23) == (21, 23)
    assert entry_range(9, 10, 23) == (21, 23)
