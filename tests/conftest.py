"""
Pytest configuration and fixtures for the DFA tests.

Provides the catalog automata and a raw shorthand table for construction tests.
"""

import pytest


@pytest.fixture
def parity():
    """Even number of 0s and odd number of 1s."""
    from catalog import parity_automaton

    return parity_automaton()


@pytest.fixture
def alternating():
    """Empty or alternating 0/1 strings starting with 0; 'e' is a trap."""
    from catalog import alternating_automaton

    return alternating_automaton()


@pytest.fixture
def alternating_table():
    """Raw transitions of the alternating automaton, written in full form."""
    return {
        "q0": {"0": "q1", "1": "e"},
        "q1": {"0": "e", "1": "q0"},
        "e": {"0": "e", "1": "e"},
    }
