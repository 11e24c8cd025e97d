import pytest

from book_editor import config
from book_editor.main import app
from book_editor.records import make_record
from book_editor.session import Session


@pytest.fixture(autouse=True)
def fresh_session():
    app.state.settings = config.Settings()
    app.state.session = Session()
    yield app.state.session


@pytest.fixture
def books():
    return [
        make_record(Title="Dune", Author="Frank Herbert", Genre="Science Fiction",
                    PublishedYear=1965, ISBN="9780441013593"),
        make_record(Title="Emma", Author="Jane Austen", Genre="Classic",
                    PublishedYear=1815, ISBN="9780141439587"),
        make_record(Title="Neuromancer", Author="William Gibson", Genre="Science Fiction",
                    PublishedYear=1984, ISBN="9780441569595"),
        make_record(Title="Rebecca", Author="Daphne du Maurier", Genre="Mystery",
                    PublishedYear=1938, ISBN="9780380730407"),
    ]
