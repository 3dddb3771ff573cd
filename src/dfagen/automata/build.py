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

from loguru import logger

from dfagen.automata.fsa import ALPHABET, Automaton, InvalidSymbol
from dfagen.util import now


def validate(string, alphabet=ALPHABET):
    """
    Checks that every character of a whitelist entry is in the alphabet.

    Args:
        string (str): The whitelist entry.
        alphabet (frozenset): The allowed symbols.

    Raises:
        TypeError: If the entry is not a string.
        InvalidSymbol: On the first character outside the alphabet.
    """
    if not isinstance(string, str):
        raise TypeError(f"Whitelist entries must be strings, not {string!r}")
    for i, char in enumerate(string):
        if char not in alphabet:
            raise InvalidSymbol(char, string, i)


def add_string(dfa, string):
    """
    Adds one whitelist entry to the automaton, reusing the existing chain of
    states for any prefix already present.

    The entry is validated before any state is created, so a bad entry never
    leaves a partial chain behind.

    Args:
        dfa (Automaton): The automaton under construction.
        string (str): The entry to add.

    Returns:
        int: The number of states created for this entry.
    """
    validate(string, dfa.alphabet)

    start = dfa.start()
    if not string:
        start.accepting = True
        return 0

    created = 0
    pointer = start
    last = len(string) - 1
    for i, label in enumerate(string):
        dest = pointer.transitions.get(label)
        if dest is None:
            state = dfa.new_state()
            pointer.transitions[label] = state.id
            created += 1
        else:
            state = dfa.state(dest)

        if i == last:
            state.accepting = True
            pointer = start
        else:
            pointer = state
    return created


def build(whitelist, alphabet=ALPHABET):
    """
    Builds the prefix-sharing automaton for a whitelist.

    Shared prefixes reuse the same chain of states and divergent suffixes fork
    into new ones. The result is deterministic but generally not minimal.
    Entries are added in sorted order so state ids do not depend on set
    iteration order.

    Args:
        whitelist (iterable): The strings to accept.
        alphabet (iterable, optional): The allowed symbols.

    Returns:
        tuple: ``(automaton, start_id)``.

    Raises:
        InvalidSymbol: If an entry uses a symbol outside the alphabet.
    """
    t = now()
    dfa = Automaton(alphabet)
    entries = sorted(set(whitelist), key=_sort_key)
    for string in entries:
        add_string(dfa, string)

    logger.debug(
        "Built {} states and {} transitions from {} entries in {:.4f}s",
        len(dfa),
        dfa.transition_count(),
        len(entries),
        now() - t,
    )
    return dfa, dfa.initial


def _sort_key(string):
    # Non-strings sort last; add_string rejects them with a TypeError
    if isinstance(string, str):
        return (0, string)
    return (1, repr(string))
