"""Sample families loaded by the quickstart."""

from __future__ import annotations

from family_quickstart.models import Address, Child, Family, Parent, Pet


def adamski_family() -> Family:
    return Family(
        id="Adamski.1",
        last_name="Adamski",
        parents=[
            Parent(first_name="Victor"),
            Parent(first_name="Cynthia"),
        ],
        children=[
            Child(
                first_name="James Thomas",
                gender="male",
                grade=5,
                pets=[Pet(given_name="Snickers")],
            ),
        ],
        address=Address(state="IL", county="Kane", city="Carpentersville"),
        is_registered=False,
    )


def orlando_family() -> Family:
    return Family(
        id="Orlando.1983",
        last_name="Orlando",
        parents=[
            Parent(family_name="Camel", first_name="Nancy"),
            Parent(family_name="Orlando", first_name="Mark"),
        ],
        children=[
            Child(
                family_name="Orlando",
                first_name="Megan",
                gender="female",
                grade=8,
                pets=[Pet(given_name="Blue"), Pet(given_name="Max")],
            ),
            Child(
                family_name="Orlando",
                first_name="Nicholas",
                gender="male",
                grade=1,
            ),
        ],
        address=Address(state="IL", county="DuPage", city="Villa Park"),
        is_registered=True,
    )
