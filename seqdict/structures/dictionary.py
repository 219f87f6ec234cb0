# Structure to handle reference sequence dictionaries.
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

__all__ = ["SequenceDictionary", "SequenceDictionaryError", "DuplicateName",
           "UnknownSequence", "AliasConflict", "DictionaryMismatch",
           "SizeMismatch", "NameMismatch", "TagConflict",
           "InvariantViolation"]


import hashlib
import logging

from .. import settings
from .sequences import SequenceRecord, UNKNOWN_LENGTH, LENGTH_TAG, MD5_TAG


logger = logging.getLogger(__name__)


class SequenceDictionaryError(Exception):
    """Base class for the errors raised by sequence dictionaries."""
    def __init__(self, message):
        super(SequenceDictionaryError, self).__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class DuplicateName(SequenceDictionaryError, ValueError):
    def __init__(self, name):
        super(DuplicateName, self).__init__(
            "Cannot add sequence that already exists in the dictionary: "
            "'{}'.".format(name)
        )
        self.name = name


class UnknownSequence(SequenceDictionaryError, KeyError):
    def __init__(self, name):
        super(UnknownSequence, self).__init__(
            "Sequence '{}' doesn't exist in the dictionary.".format(name)
        )
        self.name = name


class AliasConflict(SequenceDictionaryError, ValueError):
    def __init__(self, alias, bound_to, requested):
        super(AliasConflict, self).__init__(
            "Alias '{}' was already set to '{}' (requested '{}').".format(
                alias, bound_to, requested
            )
        )
        self.alias = alias
        self.bound_to = bound_to
        self.requested = requested


class DictionaryMismatch(SequenceDictionaryError, ValueError):
    """Two dictionaries are not compatible at a given index.

    ``first`` and ``second`` are the records (or sizes) that were compared.

    """
    def __init__(self, message, index, first, second):
        super(DictionaryMismatch, self).__init__(
            "Sequence dictionaries are not the same: {}.".format(message)
        )
        self.index = index
        self.first = first
        self.second = second


class SizeMismatch(DictionaryMismatch):
    def __init__(self, first_size, second_size):
        super(SizeMismatch, self).__init__(
            "found {} and {} sequences".format(first_size, second_size),
            min(first_size, second_size), first_size, second_size
        )


class NameMismatch(DictionaryMismatch):
    def __init__(self, index, first_name, second_name):
        super(NameMismatch, self).__init__(
            "non-equal sequence names ('{}' and '{}') at index {}".format(
                first_name, second_name, index
            ),
            index, first_name, second_name
        )


class TagConflict(SequenceDictionaryError, ValueError):
    def __init__(self, name, tag, first_value, second_value):
        super(TagConflict, self).__init__(
            "Cannot merge the two dictionaries. Sequence '{}' at tag '{}' has "
            "the values: '{}' and '{}'.".format(name, tag, first_value,
                                                second_value)
        )
        self.name = name
        self.tag = tag
        self.values = (first_value, second_value)


class InvariantViolation(SequenceDictionaryError, RuntimeError):
    pass


class SequenceDictionary(object):
    """Ordered collection of uniquely named reference sequences.

    :param sequences: An initial list of records (optional).
    :type sequences: list

    Records are indexed by their position (``record.index``) and by their
    name. Aliases can be registered to access a record using alternative
    names (e.g. ``1``, ``chr1``, ``NC_000001.10``), they are not part of the
    ordered sequences.

    This class is not thread safe. A dictionary should be built by a single
    writer and then be treated as read-only.

    """

    def __init__(self, sequences=None):
        self._sequences = []
        self._by_name = {}

        if sequences is not None:
            self.replace_all(sequences)

    @property
    def sequences(self):
        """Tuple of the records in index order."""
        return tuple(self._sequences)

    def replace_all(self, sequences):
        """Replace all the sequences of the dictionary.

        The indices are recomputed and the aliases are cleared. If the list
        contains duplicated names, :py:class:`DuplicateName` is raised and the
        dictionary is left unchanged.

        """
        if not isinstance(sequences, list):
            sequences = list(sequences)

        by_name = {}
        for record in sequences:
            if record.name in by_name:
                raise DuplicateName(record.name)
            by_name[record.name] = record

        for i, record in enumerate(sequences):
            record.index = i

        self._sequences = sequences
        self._by_name = by_name

    def append(self, record):
        """Add a record at the end of the dictionary."""
        if settings.DEBUG:
            self.validate()

        if record.name in self._by_name:
            raise DuplicateName(record.name)

        record.index = len(self._sequences)
        self._sequences.append(record)
        self._by_name[record.name] = record

    def add_alias(self, original_name, alias_name):
        """Add an alternative name for a sequence (e.g. ``MT`` and ``chrM``).

        :param original_name: An existing sequence name (or alias).
        :type original_name: str

        :param alias_name: The new name.
        :type alias_name: str

        :returns: The record associated to both names.
        :rtype: :py:class:`seqdict.structures.sequences.SequenceRecord`

        """
        if original_name is None:
            raise ValueError("The original name cannot be None.")
        if alias_name is None:
            raise ValueError("The alias name cannot be None.")

        record = self._by_name.get(original_name)
        if record is None:
            raise UnknownSequence(original_name)

        if original_name == alias_name:
            return record

        bound = self._by_name.get(alias_name)
        if bound is not None:
            if bound is record:
                return record
            raise AliasConflict(alias_name, bound.name, record.name)

        if settings.DEBUG:
            self.validate()

        self._by_name[alias_name] = record

        return record

    def get(self, name):
        """Get a sequence using its name or an alias.

        As opposed to regular indexing, this returns None if the sequence
        can't be found.

        """
        return self._by_name.get(name)

    def get_by_index(self, index):
        """Get a sequence using its index or None if it's out of range."""
        if index < 0 or index >= len(self._sequences):
            return None
        return self._sequences[index]

    def index_of(self, name):
        """Get the index of a sequence or None if the name is not found."""
        record = self._by_name.get(name)
        if record is None:
            return None

        index = record.index
        if (index is None or not 0 <= index < len(self._sequences) or
                self._sequences[index] is not record):
            raise InvariantViolation(
                "Sequence '{}' is not at its index ({}). Was the dictionary "
                "modified concurrently?".format(record.name, record.index)
            )

        return index

    def keys(self):
        """Get the list of primary sequence names in index order."""
        return [record.name for record in self._sequences]

    names = keys

    def aliases(self):
        """Get a dict of the registered aliases to their primary name."""
        return {
            name: record.name for name, record in self._by_name.items()
            if name != record.name
        }

    def is_empty(self):
        return not self._sequences

    def total_length(self):
        """The sum of the lengths of the sequences.

        Sequences with an unknown length are counted as 0.

        """
        return sum(
            record.length for record in self._sequences
            if record.length is not UNKNOWN_LENGTH
        )

    def assert_same_dictionary(self, other):
        """Check that two dictionaries contain the same sequences.

        This is weaker than equality: only the names and lengths are compared
        (see :py:meth:`SequenceRecord.is_same_sequence`), other tags and
        aliases are ignored.

        :raises DictionaryMismatch: At the first difference. The subclasses
                                    :py:class:`SizeMismatch` and
                                    :py:class:`NameMismatch` are raised if the
                                    number of sequences or the names differ.

        """
        if self is other:
            return

        for i, (mine, theirs) in enumerate(zip(self._sequences,
                                               other.sequences)):
            if mine.name != theirs.name:
                raise NameMismatch(i, mine.name, theirs.name)

            if not mine.is_same_sequence(theirs):
                raise DictionaryMismatch(
                    "{!r} was found when {!r} was expected".format(theirs,
                                                                   mine),
                    i, mine, theirs
                )

        if len(self) != len(other):
            raise SizeMismatch(len(self), len(other))

    def checksum(self):
        """Compute a MD5 checksum for the dictionary.

        The checksum is computed every time this method is called: ::

            md5(seq1.M5 or (seq1.name + seq1.length) + " " + ...)

        :returns: The hex digest (32 characters) or the empty string if the
                  dictionary is empty.
        :rtype: str

        """
        if self.is_empty():
            return ""

        md5 = hashlib.md5()
        for i, record in enumerate(self._sequences):
            if i > 0:
                md5.update(b" ")

            md5_tag = record.get_tag(MD5_TAG)
            if md5_tag is not None:
                md5.update(md5_tag.encode())
            else:
                # Unknown lengths are written as 0.
                length = record.length
                if length is UNKNOWN_LENGTH:
                    length = 0
                md5.update(record.name.encode())
                md5.update(str(length).encode())

        return md5.hexdigest()

    def validate(self):
        """Check the internal consistency of the dictionary.

        :raises InvariantViolation: If the indices or the name index are not
                                    consistent with the ordered sequences.

        """
        primary = set()
        for i, record in enumerate(self._sequences):
            if record.index != i:
                raise InvariantViolation(
                    "Sequence '{}' has index {} but is at position "
                    "{}.".format(record.name, record.index, i)
                )

            if record.name in primary:
                raise InvariantViolation(
                    "Sequence '{}' is present more than once.".format(
                        record.name
                    )
                )
            primary.add(record.name)

            if self._by_name.get(record.name) is not record:
                raise InvariantViolation(
                    "Sequence '{}' is not indexed by its name.".format(
                        record.name
                    )
                )

        for name, record in self._by_name.items():
            position = record.index
            if (position is None or
                    not 0 <= position < len(self._sequences) or
                    self._sequences[position] is not record):
                raise InvariantViolation(
                    "Name '{}' is bound to a sequence that is not in the "
                    "dictionary.".format(name)
                )

    @staticmethod
    def merge(a, b, strict_tags=None):
        """Merge the tags of two dictionaries describing the same sequences.

        :param a: The first dictionary. Its values have precedence.
        :type a: :py:class:`SequenceDictionary`

        :param b: The second dictionary.
        :type b: :py:class:`SequenceDictionary`

        :param strict_tags: Tags that have to be equal if they are present in
                            both dictionaries (e.g. ``["M5", "LN"]``). Uses
                            ``settings.STRICT_TAGS`` if None.
        :type strict_tags: list

        :returns: A new dictionary with the union of the tags for every
                  sequence.
        :rtype: :py:class:`SequenceDictionary`

        Both dictionaries need to have the same sequence names in the same
        order. When values differ for a tag that is not strict, a warning is
        logged and the value from ``a`` is used.

        """
        if strict_tags is None:
            strict_tags = settings.STRICT_TAGS
        if isinstance(strict_tags, str):
            strict_tags = (strict_tags, )
        strict_tags = set(strict_tags)

        if len(a) != len(b):
            raise SizeMismatch(len(a), len(b))

        for i, (first, second) in enumerate(zip(a.sequences, b.sequences)):
            if first.name != second.name:
                raise NameMismatch(i, first.name, second.name)

        merged = SequenceDictionary()
        for first, second in zip(a.sequences, b.sequences):
            record = SequenceRecord(first.name)

            # Union of the tags, in order of appearance.
            first_tags = first.tags
            second_tags = second.tags
            all_tags = list(first_tags)
            all_tags.extend(t for t in second_tags if t not in first_tags)

            for tag in all_tags:
                value = _resolve(first.name, tag, first_tags.get(tag),
                                 second_tags.get(tag), strict_tags)
                record.set_tag(tag, value)

            record.length = _resolve(first.name, LENGTH_TAG, first.length,
                                     second.length, strict_tags)

            merged.append(record)

        return merged

    def __len__(self):
        return len(self._sequences)

    def __iter__(self):
        return iter(self._sequences)

    def __contains__(self, name):
        return name in self._by_name

    def __getitem__(self, key):
        if isinstance(key, int):
            # No negative indexing, as in get_by_index.
            if key < 0:
                raise IndexError("Invalid sequence index {}.".format(key))
            return self._sequences[key]

        record = self._by_name.get(key)
        if record is None:
            raise UnknownSequence(key)
        return record

    def __eq__(self, other):
        if not isinstance(other, SequenceDictionary):
            return NotImplemented
        return self._sequences == list(other.sequences)

    __hash__ = None

    def __repr__(self):
        return "<SequenceDictionary: {} sequences, length {}, md5 {}>".format(
            len(self), self.total_length(), self.checksum() or "-"
        )


def _resolve(name, tag, first, second, strict_tags):
    """Pick the value for a tag when merging (the first value has
    precedence).

    """
    if first is None:
        return second

    if second is not None and first != second:
        if tag in strict_tags:
            error = TagConflict(name, tag, first, second)
            logger.error(error.message)
            raise error

        logger.warning(
            "Found sequence entry for which tags differ: '{}' at tag '{}' "
            "has the two values: '{}' and '{}'. Using value '{}'.".format(
                name, tag, first, second, first
            )
        )

    return first
