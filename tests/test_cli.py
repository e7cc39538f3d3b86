from chesstourney import cli
from chesstourney.cli import main
from chesstourney.store import InMemoryStore, JsonFileStore
from chesstourney.tournament import TournamentController, TournamentQueries


def _run(path, *argv):
    return main(["--data", str(path), "--seed", "5", *argv])


def _register_and_approve(path, names):
    for name in names:
        assert _run(path, "register", name, "--rating", "1500") == 0
    for player in JsonFileStore(path).list_players():
        assert _run(path, "approve", player.id) == 0


def test_full_round_from_the_command_line(tmp_path, capsys):
    path = tmp_path / "event.json"
    _register_and_approve(path, ["Ama Mensah", "Kofi Boateng", "Yaw Owusu"])

    assert _run(path, "pair", "--round", "1") == 0
    out = capsys.readouterr().out
    assert "Board   1" in out
    assert "Bye:" in out

    match = JsonFileStore(path).list_matches(round_number=1)[0]
    assert _run(path, "result", match.id, "1-0") == 0
    assert _run(path, "advance") == 0
    assert _run(path, "status") == 0

    out = capsys.readouterr().out
    assert "Now playing round 2 of 5" in out
    assert "Round 2 of 5 (swiss, IN_PROGRESS)" in out

    scores = sorted(p.score for p in JsonFileStore(path).list_players())
    # winner, bye from round one, fresh bye from round two
    assert sum(scores) == 2.0


def test_round_robin_command(tmp_path, capsys):
    path = tmp_path / "event.json"
    _register_and_approve(path, ["A One", "B Two", "C Three", "D Four"])

    assert _run(path, "round-robin") == 0
    assert _run(path, "status") == 0

    out = capsys.readouterr().out
    assert "Round 1 of 3 (round_robin, IN_PROGRESS)" in out
    assert len(JsonFileStore(path).list_matches()) == 6


def test_errors_are_reported_with_exit_code(tmp_path, capsys):
    path = tmp_path / "event.json"

    assert _run(path, "approve", "Player-missing") == 1
    assert "Error:" in capsys.readouterr().out

    assert _run(path, "register", "Ama", "--rating", "lots") == 1
    assert not path.exists()


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage:" in capsys.readouterr().out


class ScriptedSession:
    """Stands in for a prompt session, replaying fixed input lines."""

    def __init__(self, lines):
        self.lines = list(lines)

    def prompt(self, message):
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def test_shell_survives_unbalanced_quotes(monkeypatch, capsys):
    monkeypatch.setattr(
        cli, "PromptSession", lambda **kwargs: ScriptedSession(['register "Ama', "status"])
    )
    controller = TournamentController(InMemoryStore())
    queries = TournamentQueries(controller.store)

    assert cli.run_interactive_mode(cli.create_main_parser(), controller, queries) == 0

    out = capsys.readouterr().out
    assert "Error:" in out
    assert "Round 1 of 5 (swiss, IN_PROGRESS)" in out
    assert "Goodbye!" in out
    assert controller.store.list_players() == []
