from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from quotebook.models.common import gen_id
from quotebook.models.item import Item, PackageItem
from quotebook.models.package import Package


def expand_package(package: Package, items: Iterable[PackageItem]) -> List[Item]:
    """
    Lignes existantes + copie de chaque ligne du package, avec un nouvel id.
    Le package n'est pas modifié; les totaux restent à recalculer.
    """
    out: List[Item] = list(items)
    for it in package.items:
        data = it.model_dump(exclude={"id"})
        out.append(Item(id=gen_id(), **data))
    return out


class PackageCatalog:
    """Catalogue figé de packages (données de référence)."""

    def __init__(self, packages: Optional[Sequence[Package]] = None) -> None:
        if packages is None:
            from quotebook.data.defaults import DEFAULT_PACKAGES
            packages = DEFAULT_PACKAGES
        self._packages = tuple(packages)

    def list_packages(self) -> List[Package]:
        return list(self._packages)

    def get(self, package_id: str) -> Optional[Package]:
        for p in self._packages:
            if p.id == package_id:
                return p
        return None
