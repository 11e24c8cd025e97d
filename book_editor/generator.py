"""
Synthetic book records for demos and load testing.

Output is unseeded by default. Pass ``seed`` (or an explicitly seeded
``Faker``) to get a reproducible collection.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from faker import Faker

from .records import Record, make_record
from .rules import GENRES, SAMPLE_YEAR_MAX, SAMPLE_YEAR_MIN

LOCALE = "en_US"


def make_faker(seed: Optional[int] = None) -> Faker:
    fake = Faker(LOCALE)
    if seed is not None:
        fake.seed_instance(seed)
    return fake


def random_book(fake: Faker) -> Record:
    title = " ".join(fake.words(nb=fake.random_int(1, 5)))
    return make_record(
        Title=title,
        Author=f"{fake.first_name()} {fake.last_name()}",
        Genre=fake.random_element(GENRES),
        PublishedYear=fake.random_int(SAMPLE_YEAR_MIN, SAMPLE_YEAR_MAX),
        ISBN=fake.isbn13(separator=""),
    )


def iter_generate(count: int, chunk_size: int = 1000, seed: Optional[int] = None,
                  fake: Optional[Faker] = None) -> Iterator[List[Record]]:
    """Yield ``count`` records in chunks of at most ``chunk_size``."""
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    fake = fake or make_faker(seed)

    remaining = count
    while remaining > 0:
        n = min(chunk_size, remaining)
        yield [random_book(fake) for _ in range(n)]
        remaining -= n


def generate(count: int, seed: Optional[int] = None,
             fake: Optional[Faker] = None) -> List[Record]:
    books: List[Record] = []
    for chunk in iter_generate(count, seed=seed, fake=fake):
        books.extend(chunk)
    return books
