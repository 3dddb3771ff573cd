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

from dfagen.automata.fsa import EmptyGraphInvariantViolation


def table_rows(dfa):
    """
    Yields a ``(symbol, source_label, destination_label)`` triple for every
    explicit transition, ordered by source state id and then by symbol.

    Raises:
        EmptyGraphInvariantViolation: If the dead state is still in the graph
            or a transition points at a missing state.
    """
    if dfa.dead is not None:
        raise EmptyGraphInvariantViolation(
            "The dead state must be removed before the table is rendered"
        )
    for state in dfa:
        trans = state.transitions
        for label in sorted(trans):
            yield label, state.label, dfa.state(trans[label]).label


def serialize(dfa):
    """
    Renders the automaton as a transition table, one line per transition in
    the form ``symbol,source, destination``. Accepting states are marked with
    a trailing ``*`` in their label.

    >>> from dfagen.automata.build import build
    >>> dfa, _ = build({"ab"})
    >>> print(serialize(dfa), end="")
    a,S, Q1
    b,Q1, Q2*
    """
    return "".join(f"{label},{src}, {dest}\n" for label, src, dest in table_rows(dfa))
