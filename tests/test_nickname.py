import random
import re

from tictactoe.nickname import main, random_nickname

_PATTERN = re.compile(r"^([A-Z][a-z]+)(\d{5})$")
_INITIALS = set("AZNBMTDLCS")


def test_nickname_format():
    rng = random.Random(1)
    for _ in range(200):
        name = random_nickname(rng)
        match = _PATTERN.match(name)
        assert match is not None, name
        assert 10000 <= int(match.group(2)) <= 99999


def test_seeded_generators_agree():
    first = [random_nickname(random.Random(42)) for _ in range(3)]
    second = [random_nickname(random.Random(42)) for _ in range(3)]
    assert first == second


def test_names_vary():
    rng = random.Random(7)
    names = {random_nickname(rng) for _ in range(50)}
    assert len(names) > 40


def test_default_rng_works():
    name = random_nickname()
    match = _PATTERN.match(name)
    assert bool(match) is True, name
    assert name[0] in _INITIALS
    assert 10000 <= int(match.group(2)) <= 99999


def test_main_prints_one_nickname(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert len(lines) == 1
    assert _PATTERN.match(lines[0])