from quotebook.data.defaults import DEFAULT_PACKAGES
from quotebook.services.packages import PackageCatalog, expand_package


def test_expand_appends_copies_with_fresh_ids(items):
    pkg = DEFAULT_PACKAGES[0]
    before = pkg.model_dump()

    out = expand_package(pkg, items)

    assert len(out) == 5
    assert out[:2] == items
    assert len({it.id for it in out}) == 5
    assert [it.description for it in out[2:]] == [p.description for p in pkg.items]
    assert pkg.model_dump() == before


def test_expand_twice_gives_distinct_ids():
    pkg = DEFAULT_PACKAGES[1]
    once = expand_package(pkg, [])
    twice = expand_package(pkg, once)
    assert len(twice) == 8
    assert len({it.id for it in twice}) == 8


def test_catalog_lookup():
    cat = PackageCatalog()
    assert [p.id for p in cat.list_packages()] == ["pkg1", "pkg2", "pkg3"]
    assert cat.get("pkg2").name == "Growth Website + PM"
    assert cat.get("nope") is None
