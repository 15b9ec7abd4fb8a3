"""
Tests for the command-line interface.
"""

import argparse
import json

from ..cli import build_parser, cmd_guess, cmd_hide, main


def scripted_input(answers):
    answers = iter(answers)
    return lambda prompt: next(answers)


class TestCLI:

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_selfplay_text(self, capsys):
        assert main(["selfplay", "--secret", "23"]) == 0
        out = capsys.readouterr().out
        assert "Result: success in 6 guesses" in out
        assert "Efficiency: excellent" in out

    def test_selfplay_json(self, capsys):
        assert main(["selfplay", "--secret", "23", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["guesses"] == [50, 25, 12, 18, 21, 23]

    def test_selfplay_bad_secret(self, capsys):
        assert main(["selfplay", "--secret", "0"]) == 1
        assert "Error" in capsys.readouterr().out

    def test_selfplay_unknown_strategy(self, capsys):
        assert main(["selfplay", "--strategy", "psychic"]) == 1

    def test_guess_command(self, capsys):
        args = argparse.Namespace(max_guesses=None)
        code = cmd_guess(args, input_fn=scripted_input(["too low", "banana", "correct"]))
        out = capsys.readouterr().out
        assert code == 0
        assert "I guess 75" in out
        assert "Could not understand" in out
        assert "The number is 75!" in out

    def test_guess_command_contradiction(self, capsys):
        args = argparse.Namespace(max_guesses=None)
        code = cmd_guess(args, input_fn=scripted_input(["higher"] * 7))
        assert code == 1
        assert "restart" in capsys.readouterr().out

    def test_hide_command(self, capsys):
        args = build_parser().parse_args(["hide", "--seed", "4", "--max-guesses", "100"])
        answers = ["abc"] + [str(n) for n in range(1, 101)]
        code = cmd_hide(args, input_fn=scripted_input(answers))
        out = capsys.readouterr().out
        assert code == 0
        assert "Please enter a whole number" in out
        assert "Correct!" in out

    def test_input_closed(self, capsys):
        def closed(prompt):
            raise EOFError

        args = argparse.Namespace(max_guesses=None)
        assert cmd_guess(args, input_fn=closed) == 1
