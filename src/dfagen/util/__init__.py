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


import random
import time

from dfagen.automata.fsa import ALPHABET

now = time.perf_counter


def random_name(size=8, chars=None):
    """
    Generates a random string of symbols from an automaton alphabet.

    Parameters:
    - size (int): The length of the string to generate. Default is 8.
    - chars (iterable): The symbols to draw from. Defaults to the full
      whitelist alphabet.

    Returns:
    - str: The randomly generated string.
    """
    if chars is None:
        chars = ALPHABET
    chars = sorted(chars)
    return "".join(random.choice(chars) for _ in range(size))


def random_whitelist(count, maxsize=8, chars=None, minsize=0):
    """
    Generates a set of up to ``count`` random strings with lengths between
    ``minsize`` and ``maxsize``. Duplicates collapse, so the set may be
    smaller than ``count``.
    """
    return {
        random_name(random.randint(minsize, maxsize), chars) for _ in range(count)
    }
