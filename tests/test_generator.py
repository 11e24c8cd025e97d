import pytest

from book_editor.generator import generate, iter_generate, make_faker
from book_editor.rules import COLUMNS, GENRES


def _ean13_valid(code: str) -> bool:
    digits = [int(d) for d in code]
    return sum(d * (3 if i % 2 else 1) for i, d in enumerate(digits)) % 10 == 0


def test_generated_field_domains():
    records = generate(500, seed=11)
    assert len(records) == 500
    for record in records:
        assert tuple(record) == COLUMNS
        assert 1 <= len(record["Title"].split()) <= 5
        assert " " in record["Author"].strip()
        assert record["Genre"] in GENRES
        assert 1800 <= record["PublishedYear"] <= 2023
        assert len(record["ISBN"]) == 13
        assert record["ISBN"].isdigit()
        assert _ean13_valid(record["ISBN"])


def test_seed_makes_output_reproducible():
    assert generate(20, seed=7) == generate(20, seed=7)
    assert generate(20, fake=make_faker(7)) == generate(20, seed=7)


def test_chunks():
    chunks = list(iter_generate(25, chunk_size=10, seed=1))
    assert [len(c) for c in chunks] == [10, 10, 5]
    assert [r for c in chunks for r in c] == generate(25, seed=1)


def test_zero_and_negative_counts():
    assert generate(0) == []
    with pytest.raises(ValueError):
        generate(-1)
    with pytest.raises(ValueError):
        list(iter_generate(5, chunk_size=0))
