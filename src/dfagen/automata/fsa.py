# Copyright 2012 Matt Chaput. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY MATT CHAPUT ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL MATT CHAPUT OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of Matt Chaput.

"""
This module implements the state graph shared by every phase of the whitelist
pipeline. An :class:`Automaton` owns all of its :class:`State` objects in a
single id -> state map; states refer to each other only by id, so removing a
state from the map is enough to drop it from the graph.
"""

import itertools
from string import ascii_letters, digits

from cached_property import cached_property

# Symbols accepted in whitelist entries. The dot is an ordinary symbol.
ALPHABET = frozenset(ascii_letters + digits + ".")

START_NAME = "S"
DEAD_NAME = "dead-state"
FINAL_MARK = "*"


# Exceptions


class AutomatonError(Exception):
    """
    Base class for errors raised while building, minimizing or rendering an
    automaton.

    Attributes:
        message (str): Explanation of the error.
    """

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class InvalidSymbol(AutomatonError, ValueError):
    """
    Raised when a whitelist entry contains a character outside the automaton's
    alphabet.

    Attributes:
        symbol (str): The offending character.
        string (str): The whitelist entry containing it.
        position (int): Index of the character in the entry.
    """

    def __init__(self, symbol, string=None, position=None):
        self.symbol = symbol
        self.string = string
        self.position = position
        if string is None:
            message = f"Symbol {symbol!r} is not in the alphabet"
        else:
            message = (
                f"Symbol {symbol!r} at position {position} of {string!r} "
                f"is not in the alphabet"
            )
        super().__init__(message)


class EmptyGraphInvariantViolation(AutomatonError):
    """
    Raised when the state graph is internally inconsistent, for example when a
    transition points at a state that is no longer tracked. This always
    indicates a bug in the merge logic; callers should not retry.
    """


# States


class State:
    """
    A single node of the automaton.

    Attributes:
        id (int): Unique identifier, assigned by the owning automaton.
        name (str): Base display name, without the accept marker.
        accepting (bool): Whether the state is a final state.
        transitions (dict): Maps a symbol to the id of the destination state.
    """

    __slots__ = ("id", "name", "accepting", "transitions")

    def __init__(self, id: int, name: str, accepting: bool = False):
        self.id = id
        self.name = name
        self.accepting = accepting
        self.transitions = {}

    def __repr__(self) -> str:
        return f"<{self.label} {self.transitions!r}>"

    def __eq__(self, other):
        return isinstance(other, State) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def label(self) -> str:
        """
        The name used in the transition table. Accepting states carry a
        trailing ``*`` so the table is self-describing.
        """
        if self.accepting:
            return self.name + FINAL_MARK
        return self.name


# Graph


class Automaton:
    """
    Deterministic automaton over a fixed alphabet, stored as an arena of
    states keyed by id.

    The start state always has id ``0`` and cannot be removed. Any symbol
    without an explicit transition leads to the dead state; the dead state
    itself is only materialized (see :meth:`add_dead_state`) while the graph
    is being minimized.

    Attributes:
        initial (int): Id of the start state.
        alphabet (frozenset): The symbols transitions may be labelled with.
        states (dict): Maps state ids to :class:`State` objects.
        dead (int): Id of the dead state, or None if there is none.
    """

    def __init__(self, alphabet=ALPHABET):
        self.alphabet = frozenset(alphabet)
        self.initial = 0
        self.states = {}
        self.dead = None
        self._counter = itertools.count()
        self.new_state(START_NAME)

    def __len__(self):
        return len(self.states)

    def __contains__(self, sid):
        return sid in self.states

    def __iter__(self):
        for sid in sorted(self.states):
            yield self.states[sid]

    @cached_property
    def symbols(self):
        """The alphabet as a sorted tuple."""
        return tuple(sorted(self.alphabet))

    def new_state(self, name=None):
        """
        Creates a state with the next free id and registers it.

        Args:
            name (str, optional): Base display name. Defaults to ``Q<id>``.

        Returns:
            State: The new state.
        """
        sid = next(self._counter)
        if name is None:
            name = f"Q{sid}"
        state = State(sid, name)
        self.states[sid] = state
        return state

    def state(self, sid):
        """
        Returns the state with the given id.

        Raises:
            EmptyGraphInvariantViolation: If no such state is tracked.
        """
        try:
            return self.states[sid]
        except KeyError:
            raise EmptyGraphInvariantViolation(f"No state with id {sid!r}")

    def start(self):
        return self.state(self.initial)

    def add_transition(self, src, label, dest):
        """
        Adds (or replaces) the transition from ``src`` to ``dest`` on
        ``label``.

        Args:
            src (int): Source state id.
            label (str): A symbol from the alphabet.
            dest (int): Destination state id.

        Raises:
            InvalidSymbol: If the label is not in the alphabet.
            EmptyGraphInvariantViolation: If either state is not tracked.
        """
        if label not in self.alphabet:
            raise InvalidSymbol(label)
        self.state(dest)
        self.state(src).transitions[label] = dest

    def next_state(self, src, label):
        """
        Returns the id reached from ``src`` on ``label``, or the dead state's id
        (None when no dead state exists) if there is no explicit transition.
        """
        return self.state(src).transitions.get(label, self.dead)

    def is_final(self, sid):
        return self.state(sid).accepting

    def make_final(self, sid):
        self.state(sid).accepting = True

    def remove_state(self, sid):
        """
        Drops a state from the arena. Transitions pointing at it must already
        have been redirected; :meth:`check` reports any that were not.
        """
        if sid == self.initial:
            raise EmptyGraphInvariantViolation("The start state cannot be removed")
        if sid == self.dead:
            self.dead = None
        del self.states[sid]

    def add_dead_state(self):
        """
        Adds the absorbing, non-accepting dead state with a self-loop on every
        symbol, giving every state a total transition function.

        Returns:
            int: The dead state's id.
        """
        if self.dead is not None:
            return self.dead
        dead = self.new_state(DEAD_NAME)
        for label in self.symbols:
            dead.transitions[label] = dead.id
        self.dead = dead.id
        return dead.id

    def remove_dead_state(self):
        if self.dead is not None:
            self.remove_state(self.dead)

    def check(self):
        """
        Verifies that the start state exists and that every transition targets
        a tracked state.

        Raises:
            EmptyGraphInvariantViolation: On the first inconsistency found.
        """
        states = self.states
        if self.initial not in states:
            raise EmptyGraphInvariantViolation("The graph has no start state")
        for state in self:
            for label, dest in state.transitions.items():
                if dest not in states:
                    raise EmptyGraphInvariantViolation(
                        f"{state.label} has a transition on {label!r} "
                        f"to missing state {dest!r}"
                    )

    def transition_count(self):
        return sum(len(state.transitions) for state in self.states.values())

    def accept(self, string):
        """
        Runs ``string`` through the automaton from the start state.

        Returns:
            bool: True if the string ends in an accepting state. A missing
            transition or a symbol outside the alphabet rejects.
        """
        sid = self.initial
        for label in string:
            sid = self.state(sid).transitions.get(label)
            if sid is None or sid == self.dead:
                return False
        return self.is_final(sid)

    def generate_all(self, sid=None, sofar=""):
        """
        Yields every string accepted from ``sid`` (default: the start state),
        prefixed with ``sofar``. Paths through the dead state are skipped, so
        this terminates for any graph built from a finite whitelist.
        """
        if sid is None:
            sid = self.initial
        state = self.state(sid)
        if state.accepting:
            yield sofar
        for label in sorted(state.transitions):
            dest = state.transitions[label]
            if dest != self.dead:
                yield from self.generate_all(dest, sofar + label)
