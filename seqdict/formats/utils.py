# Data provider abstract classes and interfaces.
#
# This file is part of seqdict.
#
# This work is licensed under the Creative Commons Attribution-NonCommercial
# 4.0 International License. To view a copy of this license, visit
# http://creativecommons.org/licenses/by-nc/4.0/ or send a letter to Creative
# Commons, PO Box 1866, Mountain View, CA 94042, USA.

__author__ = "Marc-Andre Legault"
__copyright__ = ("Copyright 2014 Marc-Andre Legault and Louis-Philippe "
                 "Lemieux Perreault. All rights reserved.")
__license__ = "Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)"

"""
Interfaces and abstract classes for data formats describing reference
sequences.
"""

import os


class AbstractSequenceSource(object):
    """Abstract data structure representing a collection of named sequences.

    An example of an implementation for this class could be a fasta file
    parser. Implementations can describe their content as a
    :py:class:`seqdict.structures.dictionary.SequenceDictionary`.

    """
    def __init__(self):
        raise NotImplementedError()

    def __getitem__(self, key):
        """Get a sequence using its name."""
        raise NotImplementedError()

    def get(self, key):
        """Get a given sequence from the container.

        As opposed to regular indexing, this should return None if the sequence
        can't be found.
        """
        raise NotImplementedError()

    def keys(self):
        """Get a list of the sequence IDs in the container (in order)."""
        raise NotImplementedError()

    def sequence_dictionary(self):
        """Build the sequence dictionary describing the container."""
        raise NotImplementedError()

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def file_uri(fn):
    """Get the URI (UR tag) for a local file."""
    return "file://{}".format(os.path.abspath(fn))
