from __future__ import annotations

from collections.abc import Callable

import pytest

from kinlayout.models import Person


@pytest.fixture()
def make_people() -> Callable[..., dict[str, Person]]:
    """Build Person records keyed by id; keyword args give birth dates."""

    def _make(*ids: str, **births: str) -> dict[str, Person]:
        return {pid: Person(id=pid, name=f"Person {pid}", birth_date=births.get(pid)) for pid in ids}

    return _make
