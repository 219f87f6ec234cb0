
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

import hashlib
import unittest
from unittest import mock

from .. import settings
from ..structures import dictionary as sd
from ..structures.dictionary import SequenceDictionary
from ..structures.sequences import SequenceRecord


def _records(*li):
    return [SequenceRecord(name, length) for name, length in li]


class TestSequenceDictionary(unittest.TestCase):
    """Tests the ordered collection of the structures.dictionary module."""

    def setUp(self):
        self.records = _records(("chr1", 100), ("chr2", 200), ("chrM", None))
        self.dict = SequenceDictionary(self.records)

    def test_empty(self):
        d = SequenceDictionary()
        self.assertEqual(len(d), 0)
        self.assertTrue(d.is_empty())
        self.assertEqual(d.total_length(), 0)
        self.assertEqual(d.sequences, ())
        self.assertIsNone(d.get("chr1"))
        self.assertIsNone(d.get_by_index(0))

    def test_init(self):
        self.assertEqual(len(self.dict), 3)
        self.assertFalse(self.dict.is_empty())
        self.assertEqual(list(self.dict.sequences), self.records)
        for i, record in enumerate(self.dict):
            self.assertIs(record, self.records[i])
            self.assertEqual(self.dict.get_by_index(i).index, i)

    def test_init_duplicate(self):
        records = _records(("chr1", 100), ("chr2", 200), ("chr1", 300))
        with self.assertRaises(sd.DuplicateName) as cm:
            SequenceDictionary(records)
        self.assertEqual(cm.exception.name, "chr1")

        # Nothing was assigned.
        for record in records:
            self.assertIsNone(record.index)

    def test_replace_all(self):
        self.dict.add_alias("chr1", "1")

        records = _records(("chrX", 10), ("chrY", 20))
        self.dict.replace_all(records)

        self.assertEqual(self.dict.keys(), ["chrX", "chrY"])
        self.assertEqual([r.index for r in records], [0, 1])
        self.assertIsNone(self.dict.get("chr1"))

        # Aliases are cleared.
        self.assertIsNone(self.dict.get("1"))
        self.assertEqual(self.dict.aliases(), {})

    def test_replace_all_duplicate(self):
        before = list(self.dict.sequences)
        self.dict.add_alias("chr1", "1")

        records = _records(("chrX", 10), ("chrX", 20))
        self.assertRaises(sd.DuplicateName, self.dict.replace_all, records)

        # The dictionary was left unchanged.
        self.assertEqual(list(self.dict.sequences), before)
        self.assertEqual([r.index for r in before], [0, 1, 2])
        self.assertIs(self.dict.get("1"), before[0])
        self.assertEqual([r.index for r in records], [None, None])

    def test_replace_all_iterable(self):
        self.dict.replace_all(r for r in _records(("chr3", 1), ("chr4", 2)))
        self.assertEqual(self.dict.keys(), ["chr3", "chr4"])

    def test_append(self):
        d = SequenceDictionary()
        for i, record in enumerate(self.records):
            d.append(record)
            self.assertEqual(record.index, i)
            self.assertEqual(len(d), i + 1)

        self.assertEqual(d, self.dict)

    def test_append_duplicate(self):
        self.assertRaises(sd.DuplicateName, self.dict.append,
                          SequenceRecord("chr2", 200))
        self.assertEqual(len(self.dict), 3)

        # Aliases are bound names too.
        self.dict.add_alias("chr2", "2")
        self.assertRaises(sd.DuplicateName, self.dict.append,
                          SequenceRecord("2", 200))
        self.assertEqual(len(self.dict), 3)

    def test_lookup(self):
        self.assertIs(self.dict.get("chr2"), self.records[1])
        self.assertIsNone(self.dict.get("chr3"))

        self.assertIs(self.dict.get_by_index(2), self.records[2])
        self.assertIsNone(self.dict.get_by_index(3))
        self.assertIsNone(self.dict.get_by_index(-1))

        self.assertEqual(self.dict.index_of("chr2"), 1)
        self.assertIsNone(self.dict.index_of("chr3"))

    def test_getitem(self):
        self.assertIs(self.dict["chrM"], self.records[2])
        self.assertIs(self.dict[0], self.records[0])

        with self.assertRaises(sd.UnknownSequence):
            self.dict["chr3"]

        # UnknownSequence is a KeyError.
        self.assertRaises(KeyError, self.dict.__getitem__, "chr3")
        self.assertRaises(IndexError, self.dict.__getitem__, 10)

        # Negative positions are out of range, as for get_by_index.
        self.assertRaises(IndexError, self.dict.__getitem__, -1)
        self.assertIsNone(self.dict.get_by_index(-1))

    def test_contains(self):
        self.assertIn("chr1", self.dict)
        self.assertNotIn("1", self.dict)
        self.dict.add_alias("chr1", "1")
        self.assertIn("1", self.dict)

    def test_keys(self):
        self.dict.add_alias("chr1", "1")
        self.assertEqual(self.dict.keys(), ["chr1", "chr2", "chrM"])
        self.assertEqual(self.dict.names(), self.dict.keys())

    def test_total_length(self):
        # The unknown length counts as 0.
        self.assertEqual(self.dict.total_length(), 300)

    def test_sequences_is_read_only(self):
        self.assertIsInstance(self.dict.sequences, tuple)

    def test_validate(self):
        self.dict.add_alias("chrM", "MT")
        self.dict.validate()

        # Corrupting the indices from the outside.
        self.records[1].index = 5
        self.assertRaises(sd.InvariantViolation, self.dict.validate)
        self.assertRaises(sd.InvariantViolation, self.dict.index_of, "chr2")

    def test_debug_validation(self):
        self.records[0].index = 2
        record = SequenceRecord("chr3", 10)
        with mock.patch.object(settings, "DEBUG", True):
            self.assertRaises(sd.InvariantViolation, self.dict.append, record)
            self.assertRaises(sd.InvariantViolation, self.dict.add_alias,
                              "chr2", "2")

        # The dictionary was left unchanged.
        self.assertEqual(len(self.dict), 3)
        self.assertNotIn("chr3", self.dict)
        self.assertIsNone(record.index)
        self.assertNotIn("2", self.dict)

    def test_debug_replace_all_repairs(self):
        self.records[0].index = 2
        with mock.patch.object(settings, "DEBUG", True):
            self.dict.replace_all(self.records)
            self.dict.append(SequenceRecord("chr3", 10))

        self.assertEqual([r.index for r in self.dict], [0, 1, 2, 3])

    def test_repr(self):
        self.assertEqual(
            repr(SequenceDictionary()),
            "<SequenceDictionary: 0 sequences, length 0, md5 ->"
        )
        self.assertEqual(
            repr(self.dict),
            "<SequenceDictionary: 3 sequences, length 300, md5 {}>".format(
                self.dict.checksum()
            )
        )


class TestAliases(unittest.TestCase):
    """Tests the alias registration."""

    def setUp(self):
        self.dict = SequenceDictionary(
            _records(("chr1", 100), ("chr2", 200), ("chrM", 16569))
        )

    def test_add_alias(self):
        record = self.dict.add_alias("chr1", "1")
        self.assertIs(record, self.dict.get("chr1"))
        self.assertIs(self.dict.get("1"), record)
        self.assertEqual(self.dict.index_of("1"), 0)

        # Not added to the sequences.
        self.assertEqual(len(self.dict), 3)
        self.assertEqual(record.index, 0)
        self.assertEqual(self.dict.aliases(), {"1": "chr1"})

    def test_same_name(self):
        record = self.dict.add_alias("chr1", "chr1")
        self.assertIs(record, self.dict.get("chr1"))
        self.assertEqual(self.dict.aliases(), {})

    def test_idempotent(self):
        first = self.dict.add_alias("chr1", "1")
        second = self.dict.add_alias("chr1", "1")
        self.assertIs(first, second)
        self.assertEqual(self.dict.aliases(), {"1": "chr1"})

    def test_alias_of_alias(self):
        self.dict.add_alias("chrM", "MT")
        record = self.dict.add_alias("MT", "M")
        self.assertIs(record, self.dict.get("chrM"))
        self.assertEqual(self.dict.aliases(), {"MT": "chrM", "M": "chrM"})

    def test_unknown_sequence(self):
        with self.assertRaises(sd.UnknownSequence) as cm:
            self.dict.add_alias("chr3", "3")
        self.assertEqual(cm.exception.name, "chr3")
        self.assertNotIn("3", self.dict)

    def test_conflict(self):
        with self.assertRaises(sd.AliasConflict) as cm:
            self.dict.add_alias("chr1", "chr2")
        self.assertEqual(cm.exception.alias, "chr2")
        self.assertEqual(cm.exception.bound_to, "chr2")
        self.assertEqual(cm.exception.requested, "chr1")

        self.dict.add_alias("chr1", "1")
        self.assertRaises(sd.AliasConflict, self.dict.add_alias, "chr2", "1")
        self.assertIs(self.dict.get("1"), self.dict.get("chr1"))

    def test_none(self):
        self.assertRaises(ValueError, self.dict.add_alias, None, "1")
        self.assertRaises(ValueError, self.dict.add_alias, "chr1", None)


class TestEquality(unittest.TestCase):
    """Tests the equality and compatibility checks."""

    def setUp(self):
        self.d1 = SequenceDictionary(_records(("chr1", 100), ("chr2", 200)))
        self.d2 = SequenceDictionary(_records(("chr1", 100), ("chr2", 200)))

    def test_eq(self):
        self.assertEqual(self.d1, self.d2)
        self.assertEqual(SequenceDictionary(), SequenceDictionary())

        self.d2.get("chr2").set_tag("M5", "0123456789abcdef")
        self.assertNotEqual(self.d1, self.d2)

    def test_eq_order(self):
        d3 = SequenceDictionary(_records(("chr2", 200), ("chr1", 100)))
        self.assertNotEqual(self.d1, d3)

    def test_eq_ignores_aliases(self):
        self.d1.add_alias("chr1", "1")
        self.d2.add_alias("chr2", "2")
        self.assertEqual(self.d1, self.d2)

    def test_unhashable(self):
        self.assertRaises(TypeError, hash, self.d1)

    def test_same_dictionary(self):
        self.d1.get("chr1").set_tag("UR", "file:///data/ref.fa")
        self.d2.add_alias("chr1", "1")
        self.assertIsNone(self.d1.assert_same_dictionary(self.d2))
        self.assertIsNone(self.d1.assert_same_dictionary(self.d1))

    def test_same_dictionary_name(self):
        d3 = SequenceDictionary(_records(("chr1", 100), ("chrX", 200)))
        with self.assertRaises(sd.NameMismatch) as cm:
            self.d1.assert_same_dictionary(d3)
        self.assertEqual(cm.exception.index, 1)
        self.assertIn("index 1", str(cm.exception))

    def test_same_dictionary_length(self):
        d3 = SequenceDictionary(_records(("chr1", 100), ("chr2", 201)))
        with self.assertRaises(sd.DictionaryMismatch) as cm:
            self.d1.assert_same_dictionary(d3)
        self.assertEqual(cm.exception.index, 1)
        self.assertNotIsInstance(cm.exception, sd.NameMismatch)

    def test_same_dictionary_size(self):
        d3 = SequenceDictionary(
            _records(("chr1", 100), ("chr2", 200), ("chr3", 300))
        )
        self.assertRaises(sd.SizeMismatch, self.d1.assert_same_dictionary,
                          d3)
        self.assertRaises(sd.SizeMismatch, d3.assert_same_dictionary,
                          self.d1)


class TestChecksum(unittest.TestCase):
    """Tests the dictionary MD5 checksum."""

    def test_empty(self):
        self.assertEqual(SequenceDictionary().checksum(), "")

    def test_single(self):
        d = SequenceDictionary(_records(("chr1", 100)))
        self.assertEqual(d.checksum(), hashlib.md5(b"chr1100").hexdigest())
        self.assertEqual(len(d.checksum()), 32)

    def test_deterministic(self):
        d = SequenceDictionary(_records(("chr1", 100), ("chr2", 200)))
        self.assertEqual(d.checksum(), d.checksum())
        self.assertEqual(
            d.checksum(),
            SequenceDictionary(_records(("chr1", 100),
                                        ("chr2", 200))).checksum()
        )
        self.assertEqual(d.checksum(),
                         hashlib.md5(b"chr1100 chr2200").hexdigest())

    def test_md5_tag(self):
        records = _records(("chr1", 100), ("chr2", 200))
        records[0].set_tag("M5", "f126cdf8a6e0c7f379d618ff66beb2da")
        d = SequenceDictionary(records)

        expected = b"f126cdf8a6e0c7f379d618ff66beb2da chr2200"
        self.assertEqual(d.checksum(), hashlib.md5(expected).hexdigest())

    def test_unknown_length(self):
        d = SequenceDictionary(_records(("chrM", None)))
        self.assertEqual(d.checksum(), hashlib.md5(b"chrM0").hexdigest())

    def test_order(self):
        d1 = SequenceDictionary(_records(("chr1", 100), ("chr2", 200)))
        d2 = SequenceDictionary(_records(("chr2", 200), ("chr1", 100)))
        self.assertNotEqual(d1.checksum(), d2.checksum())

    def test_aliases(self):
        d = SequenceDictionary(_records(("chr1", 100)))
        checksum = d.checksum()
        d.add_alias("chr1", "1")
        self.assertEqual(d.checksum(), checksum)
