import pytest

from tests.fakes import FakeCatalog, search_doc, subject_work

DUNE_BOOKMARK = {
    "title": "Dune",
    "author_name": ["Frank Herbert"],
    "subject": ["Science Fiction", "Adventure"],
}


@pytest.fixture
def dune_catalog(catalog: FakeCatalog) -> FakeCatalog:
    catalog.subjects["science_fiction"] = [
        subject_work("Dune", "Frank Herbert", key="/works/OL893415W", year=1965),
        subject_work("Hyperion", "Dan Simmons", key="/works/OL1963268W", year=1989),
        subject_work("Solaris", "Stanisław Lem", cover_edition_key="OL7297218M"),
    ]
    catalog.subjects["adventure"] = [
        subject_work("Treasure Island", "Robert Louis Stevenson", key="/works/OL24034W"),
        subject_work("Hyperion", "Dan Simmons", key="/works/OL1963268W"),
    ]
    catalog.authors["Frank Herbert"] = [
        search_doc("Dune", "Frank Herbert", key="/works/OL893415W"),
        search_doc("Children of Dune", "Frank Herbert", key="/works/OL893502W", year=1976),
        search_doc("Treasure Island", "Robert Louis Stevenson", key="/works/OL24034W"),
    ]
    return catalog
