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

from dfagen.automata.build import build
from dfagen.automata.fsa import ALPHABET
from dfagen.automata.minimize import minimize
from dfagen.automata.table import serialize
from dfagen.util import now


class DFAGenerator:
    """
    Turns a whitelist of strings into the transition table of the minimal DFA
    accepting exactly those strings.

    Each call to :meth:`generate` works on a freshly built automaton, which is
    kept on :attr:`dfa` afterwards for inspection. A generator is not safe to
    share between threads; use one per caller.

    Example:
        >>> gen = DFAGenerator()
        >>> print(gen.generate({"cat", "car"}), end="")
        c,S, Q1
        a,Q1, Q2
        r,Q2, Q3*
        t,Q2, Q3*
    """

    def __init__(self, alphabet=ALPHABET):
        """
        Args:
            alphabet (iterable, optional): The symbols whitelist entries may
                use. Defaults to ``a-z``, ``A-Z``, ``0-9`` and ``.``.
        """
        self.alphabet = frozenset(alphabet)
        self.dfa = None

    def __str__(self):
        if self.dfa is None:
            return ""
        return serialize(self.dfa)

    def reset(self):
        """Discards the automaton from the previous call."""
        self.dfa = None

    def generate(self, whitelist):
        """
        Builds and minimizes the automaton for ``whitelist`` and returns its
        transition table.

        Args:
            whitelist (iterable): The strings to accept.

        Returns:
            str: The transition table, see
            :func:`~dfagen.automata.table.serialize`.

        Raises:
            InvalidSymbol: If an entry uses a symbol outside the alphabet.
            EmptyGraphInvariantViolation: If minimization left the graph in
                an inconsistent state.
        """
        t = now()
        self.reset()
        dfa, _ = build(whitelist, self.alphabet)
        minimize(dfa)
        text = serialize(dfa)
        self.dfa = dfa

        logger.debug("Generated {} state automaton in {:.4f}s", len(dfa), now() - t)
        return text
