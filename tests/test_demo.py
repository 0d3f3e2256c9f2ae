"""Tests for the command-line demo."""

import pytest

from balatro_ai.demo import deal, main


def test_full_house(capsys):
    assert main(["2C", "2D", "7S", "7H", "7D"]) == 0
    out = capsys.readouterr().out
    assert "Hand: 2C 2D 7S 7H 7D" in out
    assert "AI plays: 2C 2D 7S 7H 7D" in out
    assert "Full House, 5 card(s), heuristic score 260" in out
    assert "Mask: 11111" in out


def test_cards_in_one_argument(capsys):
    assert main(["AS KS QS JS 10S"]) == 0
    assert "Royal Flush" in capsys.readouterr().out


def test_rules_preset_changes_player_view_only(capsys):
    assert main(["5H", "6D", "7C", "8S", "--rules", "four_fingers"]) == 0
    out = capsys.readouterr().out
    assert "Played as a whole: Straight" in out
    assert "High Card" in out.split("AI plays:")[1]


def test_random_hand_lists_candidates(capsys):
    assert main(["--random", "5", "--seed", "3", "--all"]) == 0
    out = capsys.readouterr().out
    assert "Candidates:" in out
    assert len(out.split("Candidates:")[1].strip().splitlines()) == 31


def test_deal_is_seeded():
    assert deal(8, seed=11) == deal(8, seed=11)
    assert len(deal(8, seed=11)) == 8


@pytest.mark.parametrize("argv", [
    ["ZZ"],
    [],
    ["--random", "9"],
    ["AS", "--rules", "nope"],
    ["AS", "--max-select", "0"],
    ["2C 3C 4C 5C 6C 7C 8C 9C 10C"],
])
def test_bad_input_exits_with_usage_error(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2
