import copy

import pytest

from book_editor.errors import IndexOutOfRange, UnknownColumn
from book_editor.tracker import EditTracker


def test_edit_marks_record_and_field(books):
    tracker = EditTracker(books)
    tracker.record_edit(0, "Title", "Dune Messiah")

    assert tracker.is_record_modified(0)
    assert tracker.is_field_modified(0, "Title")
    assert not tracker.is_field_modified(0, "Author")
    assert not tracker.is_record_modified(1)
    assert tracker.modified_count() == 1
    assert tracker.deltas[0] is tracker.current[0]


def test_reverting_last_changed_field_clears_delta(books):
    tracker = EditTracker(books)
    tracker.record_edit(1, "Title", "Persuasion")
    tracker.record_edit(1, "Author", "J. Austen")
    tracker.record_edit(1, "Title", "Emma")

    assert tracker.is_record_modified(1)
    assert tracker.modified_fields(1) == ["Author"]

    tracker.record_edit(1, "Author", "Jane Austen")
    assert not tracker.is_record_modified(1)
    assert tracker.modified_count() == 0


def test_year_edits_compare_as_strings(books):
    tracker = EditTracker(books)
    tracker.record_edit(0, "PublishedYear", "1965")
    assert tracker.current[0]["PublishedYear"] == 1965
    assert not tracker.is_record_modified(0)

    tracker.record_edit(0, "PublishedYear", "01965")
    assert tracker.current[0]["PublishedYear"] == "01965"
    assert tracker.is_field_modified(0, "PublishedYear")

    tracker.record_edit(0, "PublishedYear", "")
    assert tracker.current[0]["PublishedYear"] == ""
    assert tracker.is_record_modified(0)


def test_delta_invariant_holds_after_every_edit(books):
    tracker = EditTracker(books)
    edits = [
        (0, "Genre", "Fantasy"), (2, "ISBN", "x"), (0, "Genre", "Science Fiction"),
        (3, "PublishedYear", 1939), (2, "ISBN", "9780441569595"), (3, "Title", "Rebecca"),
    ]
    for index, column, value in edits:
        tracker.record_edit(index, column, value)
        for i in range(len(tracker)):
            differs = any(
                str(tracker.current[i][c]) != str(tracker.original[i][c]) for c in books[0]
            )
            assert tracker.is_record_modified(i) == differs
    assert tracker.modified_indices() == [3]


def test_reset_restores_original(books):
    snapshot = copy.deepcopy(books)
    tracker = EditTracker(books)
    tracker.record_edit(2, "Author", "Someone Else")
    tracker.record_edit(3, "PublishedYear", "n/a")
    tracker.reset()

    assert tracker.current == snapshot
    assert tracker.modified_count() == 0

    tracker.record_edit(0, "Title", "Changed")
    assert tracker.original == snapshot


def test_original_is_not_shared_with_input(books):
    tracker = EditTracker(books)
    books[0]["Title"] = "Mutated by caller"
    assert tracker.original[0]["Title"] == "Dune"
    assert not tracker.is_record_modified(0)


@pytest.mark.parametrize("index", [-1, 4, 100])
def test_out_of_range_index(books, index):
    tracker = EditTracker(books)
    with pytest.raises(IndexOutOfRange):
        tracker.record_edit(index, "Title", "x")
    with pytest.raises(IndexOutOfRange):
        tracker.is_record_modified(index)


def test_unknown_column(books):
    tracker = EditTracker(books)
    with pytest.raises(UnknownColumn):
        tracker.record_edit(0, "Publisher", "x")
    with pytest.raises(KeyError):
        tracker.is_field_modified(0, "id")
