"""
Fixed domain rules for the book table.

This file exists to keep the column set and the allowed value domains
explicit and in one place.
"""

COLUMNS = ("Title", "Author", "Genre", "PublishedYear", "ISBN")
YEAR_COLUMN = "PublishedYear"
TEXT_COLUMNS = tuple(c for c in COLUMNS if c != YEAR_COLUMN)

CSV_DELIMITER = ","
CSV_LINE_TERMINATOR = "\n"
EXPORT_FILENAME = "edited_books.csv"

PAGE_SIZES = (10, 25, 50, 100)
DEFAULT_PAGE_SIZE = 25
PAGE_WINDOW = 5

# Range hint used when no record carries a positive year
FALLBACK_YEAR_BOUNDS = (0, 2023)

SAMPLE_COUNT = 10000
SAMPLE_YEAR_MIN = 1800
SAMPLE_YEAR_MAX = 2023

GENRES = (
    "Science Fiction", "Fantasy", "Mystery", "Romance", "Non-fiction",
    "History", "Biography", "Self-help", "Children", "Horror",
    "Thriller", "Young Adult", "Classic", "Poetry", "Drama",
)
