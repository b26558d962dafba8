from typing_extensions import Dict, List

from graphviz import CalledProcessError

from automaton import Automaton
from catalog import CATALOG
from errors import AutomatonError


def load_catalog() -> Dict[str, Automaton]:
    automata: Dict[str, Automaton] = {}
    for name, factory in CATALOG.items():
        automaton = factory()
        for message in automaton.diagnostics.values():
            print(f"Warning: {message}")
        automata[name] = automaton
    return automata


def _word(parts: List[str]) -> str:
    return parts[2] if len(parts) > 2 else ""


def _usage(cmd: str) -> str:
    return f"Usage: {cmd} <name>" + ("" if cmd in ["show", "graph"] else " [word]")


def main():
    """Simple interactive terminal for running the catalog automata on words."""
    automata = load_catalog()

    print("DFA Terminal - Type 'help' for commands\n")

    while True:
        try:
            command = input("> ").strip()
            if not command:
                continue

            parts = command.split()
            cmd = parts[0].lower()

            # Exit
            if cmd in ["exit", "quit"]:
                break

            # Help
            elif cmd == "help":
                print(
                    """
Commands:
    list                  - List all automata
    show <name>           - Show automaton info
    graph <name>          - Visualize automaton
    read <name> [word]    - Print the state reached after reading word
    test <name> [word]    - Test if word is accepted
    trace <name> [word]   - Print the states visited while reading word
    exit                  - Exit

An omitted word is the empty word.
"""
                )

            # List
            elif cmd == "list":
                for name, aut in sorted(automata.items()):
                    print(
                        f"  {name}: {len(aut.states)} states, "
                        f"{len(aut.alphabet)} symbols  {aut.label}"
                    )

            elif cmd not in ["show", "graph", "read", "test", "trace"]:
                print(f"Unknown command: {cmd}")

            elif len(parts) < 2 or len(parts) > (2 if cmd in ["show", "graph"] else 3):
                print(_usage(cmd))

            elif parts[1] not in automata:
                print(f"Automaton not found: {parts[1]}")

            # Show automaton info
            elif cmd == "show":
                aut = automata[parts[1]]
                print(f"\n{parts[1]}: {aut.label}")
                print(f"  States: {', '.join(aut.states)}")
                print(f"  Alphabet: {', '.join(aut.alphabet)}")
                print(f"  Start: {aut.initial_state}")
                print(f"  Accepting: {', '.join(aut.accepting_states)}")
                print(f"  Sinks: {', '.join(aut.sink_states)}")
                for state, row in aut.transitions.items():
                    moves = ", ".join(f"{sym} -> {tgt}" for sym, tgt in row.items())
                    print(f"    {state}: {moves}")
                print()

            # Graph automaton
            elif cmd == "graph":
                # ExecutableNotFound is a RuntimeError; a missing viewer is an OSError
                try:
                    automata[parts[1]].to_graphviz(filename=parts[1], view=True)
                    print(f"Created: {parts[1]}.png")
                except (CalledProcessError, RuntimeError, OSError) as e:
                    print(f"Error: {e}")

            # Final state
            elif cmd == "read":
                try:
                    print(automata[parts[1]].read(_word(parts)))
                except AutomatonError as e:
                    print(f"Error: {e}")

            # Test word on automaton
            elif cmd == "test":
                result = automata[parts[1]].test(_word(parts))
                print("ACCEPTED" if result else "REJECTED")

            # Visited states
            elif cmd == "trace":
                try:
                    print(" -> ".join(automata[parts[1]].trace(_word(parts))))
                except AutomatonError as e:
                    print(f"Error: {e}")

        except KeyboardInterrupt:
            print("\nUse 'exit' to quit")
        except EOFError:
            break

    print("Goodbye!")


if __name__ == "__main__":
    main()
