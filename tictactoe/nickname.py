"""Random player nicknames built from name fragments and a five-digit number."""

from __future__ import annotations

import random

_NAME_PARTS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (
        ("Ai", "Aq", "Al", "As", "Ain", "An", "Aya", "Ar", "Azu", "Aby", "Aga", "Ash"),
        ("gul", "zhan", "khan", "bike", "dana", "zada", "zere", "na", "sulu", "sha",
         "aru", "tyn", "nur", "ma", "li", "da"),
    ),
    (("Zh", "Zhe", "Zhan"), ("an", "nur", "bek", "ar", "at", "lan")),
    (("Nur", "Nurz", "Nuri"), ("zhan", "bek", "ai", "lan", "gul", "zat")),
    (("Ba", "Bi", "Be", "Bo", "Bai", "Bat"), ("nur", "tch", "gdat", "lek", "bek")),
    (("Mar", "Man", "Malik", "Mun", "Mira", "Madi"), ("bek", "gul", "lan", "sha", "nur")),
    (
        ("Tal", "Tim", "Tay", "Tur", "Tolk", "Tari", "Temu"),
        ("gul", "nar", "bek", "sha", "at", "tjin"),
    ),
    (("Dar", "Dau", "Dina", "Dani", "Dos"), ("bek", "gul", "at", "zhan", "sha")),
    (("Lan", "Laz", "Lai", "Liya", "Lazat"), ("gul", "sha", "bek", "nur")),
    (("Cam", "Cal", "Car", "Caz"), ("gul", "sha", "zan")),
    (
        ("Sam", "Sak", "San", "Sanz", "Ser", "Sau", "Sultan", "Sa"),
        ("gul", "zhan", "nur", "sha", "ar", "na"),
    ),
)


def random_nickname(rng: random.Random | None = None) -> str:
    """Return a nickname such as ``Aigul48213``."""
    rng = rng or random.Random()
    prefixes, suffixes = rng.choice(_NAME_PARTS)
    prefix = rng.choice(prefixes)
    suffix = rng.choice(suffixes)
    number = rng.randrange(10000, 100000)
    return f"{prefix}{suffix}{number}"


def main(argv: list[str] | None = None) -> int:
    """Print one random nickname."""
    print(random_nickname())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())