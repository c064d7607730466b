import pytest

from catalog_search.storage import CatalogEntry


@pytest.fixture()
def abc_entries() -> list[CatalogEntry]:
    return [
        CatalogEntry(id="a", name="Alpha Bakery", summary="Bread", embedding=[1.0, 0.0]),
        CatalogEntry(id="b", name="Beta Garage", summary="Cars", embedding=[0.0, 1.0]),
        CatalogEntry(id="c", name="Gamma Cafe", summary="Coffee", embedding=[0.7, 0.7]),
    ]
