# Structures to handle reference sequence records.
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

__all__ = ["SequenceRecord", "UNKNOWN_LENGTH", "LENGTH_TAG", "MD5_TAG",
           "URI_TAG", "ASSEMBLY_TAG", "SPECIES_TAG"]

import re
import collections


UNKNOWN_LENGTH = None

# Reserved tags.
LENGTH_TAG = "LN"
MD5_TAG = "M5"
URI_TAG = "UR"
ASSEMBLY_TAG = "AS"
SPECIES_TAG = "SP"

_NAME_REGEX = re.compile(r"\S+")


class SequenceRecord(object):
    """Object to represent a reference sequence (contig) description.

    :param name: The name of the sequence (e.g. ``chr1``).
    :type name: str

    :param length: The length of the sequence or ``None`` if it is unknown.
    :type length: int

    :param tags: Extra tags describing the sequence (optional).
    :type tags: dict

    Common examples for the tags:

    * ``M5``: MD5 checksum of the uppercase sequence
    * ``UR``: URI of the sequence (e.g. ``file:///data/hg19.fa``)
    * ``AS``: GRCh37
    * ``SP``: Homo sapiens

    The length is available through the ``LN`` tag, but it is stored in the
    ``length`` attribute. The ``index`` is assigned by the
    :py:class:`seqdict.structures.dictionary.SequenceDictionary` holding the
    record.

    """

    def __init__(self, name, length=UNKNOWN_LENGTH, tags=None):
        if not isinstance(name, str) or not _NAME_REGEX.fullmatch(name):
            raise ValueError("Invalid sequence name {!r}.".format(name))

        self._name = name
        self.length = length
        self.index = None
        self._tags = collections.OrderedDict()

        if tags is not None:
            for tag, value in tags.items():
                self.set_tag(tag, value)

    @property
    def name(self):
        return self._name

    @property
    def length(self):
        return self._length

    @length.setter
    def length(self, value):
        if value is UNKNOWN_LENGTH:
            self._length = UNKNOWN_LENGTH
            return

        # Integers or integer strings only (no booleans, no truncation).
        if isinstance(value, bool) or (isinstance(value, float) and
                                       not value.is_integer()):
            raise ValueError("Invalid length {!r} for sequence '{}'.".format(
                value, self._name
            ))

        length = int(value)
        if length < 0:
            raise ValueError("Invalid length {} for sequence '{}'.".format(
                value, self._name
            ))
        self._length = length

    @property
    def tags(self):
        """Return an ordered copy of the tags (excluding the length)."""
        return collections.OrderedDict(self._tags)

    def get_tag(self, tag):
        """Get the value of a tag or None if it is not set."""
        if tag == LENGTH_TAG:
            if self._length is UNKNOWN_LENGTH:
                return None
            return str(self._length)
        return self._tags.get(tag)

    def set_tag(self, tag, value):
        """Set the value of a tag. Setting a tag to None removes it."""
        if tag == LENGTH_TAG:
            self.length = value
        elif value is None:
            self._tags.pop(tag, None)
        else:
            self._tags[tag] = str(value)

    def has_known_length(self):
        return self._length is not UNKNOWN_LENGTH

    def is_same_sequence(self, other):
        """Check if two records describe the same sequence.

        Only the name and length are compared. An unknown length is
        compatible with any length.

        """
        if self is other:
            return True

        if self._name != other.name:
            return False

        if self.has_known_length() and other.has_known_length():
            return self._length == other.length

        return True

    def copy(self):
        """Return a copy of the record that is not bound to a dictionary."""
        return SequenceRecord(self._name, self._length, self._tags)

    def __eq__(self, other):
        if not isinstance(other, SequenceRecord):
            return NotImplemented
        return bool(
            self._name == other.name and
            self._length == other.length and
            dict(self._tags) == dict(other.tags)
        )

    __hash__ = None

    def __repr__(self):
        return "<SequenceRecord: {} (length={}, index={})>".format(
            self._name, self._length, self.index
        )
