"""The interactive terminal, driven through a patched input()."""

import pytest
from graphviz import ExecutableNotFound

import cli
from automaton import Automaton


def _run(monkeypatch, capsys, *commands):
    lines = iter(commands)

    def fake_input(prompt=""):
        try:
            line = next(lines)
        except StopIteration:
            raise EOFError
        if isinstance(line, BaseException):
            raise line
        return line

    monkeypatch.setattr("builtins.input", fake_input)
    cli.main()
    return capsys.readouterr().out


class TestCommands:
    def test_test_command(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, "test parity 1", "test parity 11", "exit")
        assert out.splitlines()[-3:] == ["ACCEPTED", "REJECTED", "Goodbye!"]

    def test_empty_word(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, "test alternating", "read parity")
        assert "ACCEPTED" in out
        assert "q0" in out.splitlines()

    def test_unknown_symbol_is_rejected(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, "test parity 0a1")
        assert "REJECTED" in out

    def test_read_reports_errors(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, "read parity 0a1")
        assert "Error: The symbol 'a' at position 1 is not part of Σ" in out

    def test_trace(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, "trace alternating 0001")
        assert "q0 -> q1 -> e" in out.splitlines()

    def test_show(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, "show alternating")
        assert "  Sinks: e" in out
        assert "    q0: 0 -> q1, 1 -> e" in out

    def test_list(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, "list")
        assert "  alternating: 3 states, 2 symbols" in out
        assert "  parity: 4 states, 2 symbols" in out

    @pytest.mark.parametrize(
        "command, message",
        [
            ("frobnicate", "Unknown command: frobnicate"),
            ("test", "Usage: test <name> [word]"),
            ("show", "Usage: show <name>"),
            ("test nope 01", "Automaton not found: nope"),
            ("test parity 0 1", "Usage: test <name> [word]"),
            ("trace parity 0 1 1", "Usage: trace <name> [word]"),
            ("show parity extra", "Usage: show <name>"),
            ("graph parity extra", "Usage: graph <name>"),
        ],
    )
    def test_bad_commands(self, monkeypatch, capsys, command, message):
        out = _run(monkeypatch, capsys, command)
        assert message in out

    def test_eof_ends_session(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys)
        assert out.rstrip().endswith("Goodbye!")


def test_load_catalog_builds_every_entry():
    automata = cli.load_catalog()
    assert set(automata) == {"parity", "alternating"}
    assert automata["alternating"].sink_states == ("e",)


class TestArguments:
    def test_extra_tokens_do_not_run_the_command(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, "test parity 0 1")
        assert "ACCEPTED" not in out
        assert "REJECTED" not in out


class TestHelpAndInterrupts:
    def test_help_lists_commands(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, "help")
        for command in ["list", "show <name>", "graph <name>", "read <name> [word]",
                        "test <name> [word]", "trace <name> [word]", "exit"]:
            assert command in out
        assert "An omitted word is the empty word." in out

    def test_keyboard_interrupt_prints_hint(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, KeyboardInterrupt(), "test parity 1", "exit")
        lines = out.splitlines()
        assert "Use 'exit' to quit" in lines
        assert lines[-2:] == ["ACCEPTED", "Goodbye!"]

    def test_quit_alias(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, "quit", "test parity 1")
        assert "ACCEPTED" not in out
        assert out.rstrip().endswith("Goodbye!")


class TestGraph:
    def test_graph_renders(self, monkeypatch, capsys):
        calls = []

        def fake_to_graphviz(self, filename="automaton", view=True, render=True):
            calls.append((self.label, filename, view))

        monkeypatch.setattr(Automaton, "to_graphviz", fake_to_graphviz)
        out = _run(monkeypatch, capsys, "graph parity")
        assert "Created: parity.png" in out
        assert len(calls) == 1
        assert calls[0][1:] == ("parity", True)

    @pytest.mark.parametrize(
        "error",
        [
            FileNotFoundError(2, "No such file or directory", "xdg-open"),
            ExecutableNotFound(["dot"]),
            RuntimeError("unsupported platform"),
        ],
    )
    def test_graph_failure_keeps_session_alive(self, monkeypatch, capsys, error):
        def failing_to_graphviz(self, filename="automaton", view=True, render=True):
            raise error

        monkeypatch.setattr(Automaton, "to_graphviz", failing_to_graphviz)
        out = _run(monkeypatch, capsys, "graph parity", "test parity 1", "exit")
        lines = out.splitlines()
        assert any(line.startswith("Error: ") for line in lines)
        assert "Created: parity.png" not in out
        assert lines[-2:] == ["ACCEPTED", "Goodbye!"]
