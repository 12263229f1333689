#!/usr/bin/env python3
"""Example of caching lookup records as constants."""

from typing import List

from constant_cache import CachesConstants, DuplicateIdentifierError


class Status(CachesConstants):
    """A lookup table kept in memory for the example."""

    rows: List["Status"] = []

    def __init__(self, name: str) -> None:
        self.name = name

    @classmethod
    def all(cls) -> List["Status"]:
        return list(cls.rows)

    def __repr__(self) -> str:
        return f"Status({self.name!r})"


def main() -> None:
    """Run the example."""
    Status.rows = [Status("Pending"), Status("Active"), Status("Completed, Late")]
    Status.cache_constants()

    print(f"Constants: {', '.join(Status.constants)}")
    print(f"Status.constants.PENDING -> {Status.constants.PENDING}")
    print(f"Status.constant('COMPLETED_LATE') -> {Status.constant('COMPLETED_LATE')}")

    Status.rows.append(Status("active"))
    try:
        Status.cache_constants(strict=True)
    except DuplicateIdentifierError as e:
        print(f"Duplicate: {e}")


if __name__ == "__main__":
    main()
