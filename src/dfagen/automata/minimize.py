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
Table-filling (Moore) minimization of an :class:`~dfagen.automata.fsa.Automaton`.

Every unordered pair of states starts out unmarked (assumed equivalent). Pairs
where exactly one state accepts are marked first; after that a pair is marked
whenever some symbol leads it to an already marked pair, until a whole pass
over the table marks nothing new. The unmarked pairs that remain are grouped
into equivalence classes with a union-find, and each class is collapsed onto
its lowest-numbered state.
"""

from loguru import logger

from dfagen.automata.fsa import EmptyGraphInvariantViolation
from dfagen.util import now


def fill_table(dfa, symbols=None):
    """
    Computes the distinguishability table for every state of the automaton.

    The automaton must already contain a dead state (see
    :meth:`~dfagen.automata.fsa.Automaton.add_dead_state`); missing
    transitions are resolved to it.

    Args:
        dfa (Automaton): The automaton.
        symbols (iterable, optional): Additional symbols to compare on. The
            automaton's own alphabet is always included.

    Returns:
        tuple: ``(ids, table)`` where ``ids`` lists the state ids in ascending
        order and ``table[i][j]`` is True when ``ids[i]`` and ``ids[j]`` are
        distinguishable. The table is symmetric.

    Raises:
        EmptyGraphInvariantViolation: If the automaton has no dead state.
    """
    if dfa.dead is None:
        raise EmptyGraphInvariantViolation(
            "The table can only be filled once the dead state has been added"
        )
    if symbols is None:
        symbols = dfa.symbols
    else:
        # The automaton's own symbols are always compared
        symbols = tuple(sorted(dfa.alphabet | frozenset(symbols)))
    dead = dfa.dead
    ids = sorted(dfa.states)
    index = {sid: i for i, sid in enumerate(ids)}
    states = [dfa.states[sid] for sid in ids]
    size = len(ids)

    table = [[False] * size for _ in range(size)]

    # Accepting and non-accepting states are distinguished by the empty string
    for i in range(size):
        for j in range(i):
            if states[i].accepting != states[j].accepting:
                table[i][j] = table[j][i] = True

    passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        # Top down: transitions usually lead to higher ids than their source
        for i in reversed(range(size)):
            trans1 = states[i].transitions
            row = table[i]
            for j in reversed(range(i)):
                if row[j]:
                    continue
                trans2 = states[j].transitions
                for label in symbols:
                    dest1 = index[trans1.get(label, dead)]
                    dest2 = index[trans2.get(label, dead)]
                    if table[dest1][dest2]:
                        row[j] = table[j][i] = True
                        changed = True
                        break

    logger.debug(
        "Distinguishability table for {} states settled after {} passes", size, passes
    )
    return ids, table


def equivalence_classes(ids, table):
    """
    Groups the states left unmarked in the table into equivalence classes.

    Args:
        ids (list): State ids in table order, as returned by
            :func:`fill_table`.
        table (list): The distinguishability table.

    Returns:
        list: One sorted list of state ids per class, ordered by the lowest id.
        The first id of each class is its representative.
    """
    size = len(ids)
    parent = list(range(size))

    def find(x):
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(a, b):
        ra, rb = find(a), find(b)
        if ra < rb:
            parent[rb] = ra
        elif rb < ra:
            parent[ra] = rb

    for i in range(size):
        for j in range(i):
            if not table[i][j]:
                union(i, j)

    classes = {}
    for i in range(size):
        classes.setdefault(find(i), []).append(ids[i])
    return [classes[root] for root in sorted(classes)]


def merge_states(dfa, classes):
    """
    Collapses each equivalence class onto its representative.

    For a class that does not contain the dead state, the representative takes
    over any transitions it lacked from the other members, every transition
    into the class is pointed at the representative, and the other members are
    removed. States in the dead state's class can never reach an accepting
    state: they are removed (the start state is kept, without transitions)
    and transitions into them are dropped. The dead state itself is left for
    the caller to remove.

    Args:
        dfa (Automaton): The automaton, with its dead state present.
        classes (list): Classes as returned by :func:`equivalence_classes`.

    Returns:
        int: The number of states removed.
    """
    initial = dfa.initial
    dead = dfa.dead
    states = dfa.states

    mapping = {}
    hopeless = set()
    for members in classes:
        if dead in members:
            hopeless.update(members)
            continue
        rep = members[0]
        for sid in members[1:]:
            mapping[sid] = rep

    for sid, rep in mapping.items():
        rep_trans = states[rep].transitions
        for label, dest in states[sid].transitions.items():
            rep_trans.setdefault(label, dest)

    doomed = (set(mapping) | hopeless) - {initial, dead}
    for sid, state in states.items():
        if sid in doomed or sid == dead:
            continue
        trans = state.transitions
        for label in list(trans):
            dest = mapping.get(trans[label], trans[label])
            if dest in hopeless:
                del trans[label]
            else:
                trans[label] = dest

    for sid in sorted(doomed):
        dfa.remove_state(sid)
    return len(doomed)


def minimize(dfa, alphabet=None):
    """
    Minimizes the automaton in place.

    Adds a dead state, fills the distinguishability table, merges every
    equivalence class onto its lowest-numbered state and finally removes the
    dead state again.

    Args:
        dfa (Automaton): The automaton to minimize.
        alphabet (iterable, optional): Additional symbols to compare on.
            The automaton's own alphabet is always included.

    Returns:
        Automaton: The same automaton.

    Raises:
        EmptyGraphInvariantViolation: If the graph is inconsistent before or
            after merging.
    """
    t = now()
    dfa.check()
    before = len(dfa)

    dfa.add_dead_state()
    ids, table = fill_table(dfa, alphabet)
    classes = equivalence_classes(ids, table)
    removed = merge_states(dfa, classes)
    dfa.remove_dead_state()
    dfa.check()

    logger.debug(
        "Minimized {} states to {} ({} merged) in {:.4f}s",
        before,
        len(dfa),
        removed,
        now() - t,
    )
    return dfa


def redundant_classes(dfa):
    """
    Re-runs the table-filling check and returns the classes of two or more
    states that would still be merged. The result is empty for a minimal
    automaton. The graph is left as it was, apart from the id counter.
    """
    had_dead = dfa.dead is not None
    dead = dfa.add_dead_state()
    try:
        ids, table = fill_table(dfa)
        classes = equivalence_classes(ids, table)
    finally:
        if not had_dead:
            dfa.remove_dead_state()

    redundant = []
    for members in classes:
        if dead in members:
            # Only the start state may share the dead state's class
            extra = [sid for sid in members if sid not in (dead, dfa.initial)]
        else:
            extra = members[1:]
        if extra:
            redundant.append([sid for sid in members if sid != dead])
    return redundant
