# Fasta file format parser and utilities.
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


import hashlib
import logging

import pyfaidx

from .utils import AbstractSequenceSource, file_uri
from ..structures.dictionary import SequenceDictionary
from ..structures.sequences import (SequenceRecord, MD5_TAG, URI_TAG,
                                    ASSEMBLY_TAG, SPECIES_TAG)


logger = logging.getLogger(__name__)

_CHUNK_SIZE = 2 ** 20


class FastaFile(AbstractSequenceSource):
    """Indexed fasta file (the index is created by ``pyfaidx`` if needed)."""

    def __init__(self, filename):
        if filename.endswith(".gz"):
            raise ValueError("Support for compressed fasta files is not "
                             "yet implemented.")

        self.filename = filename
        self.f = pyfaidx.Fasta(filename)

    def __getitem__(self, key):
        return self.f[key]

    def keys(self):
        return list(self.f.keys())

    def get(self, key):
        if key not in self.f:
            return None
        return self.f[key][:].seq

    def sequence_md5(self, key):
        """Compute the MD5 of the uppercase sequence (M5 tag)."""
        record = self.f[key]
        md5 = hashlib.md5()
        for start in range(0, len(record), _CHUNK_SIZE):
            chunk = record[start:start + _CHUNK_SIZE].seq
            md5.update(chunk.upper().encode())
        return md5.hexdigest()

    def sequence_dictionary(self, md5=False, uri=True, assembly=None,
                            species=None):
        """Build the sequence dictionary for the fasta file.

        :param md5: Compute the M5 tag for every sequence (this reads the
                    whole file).
        :type md5: bool

        :param uri: Add the UR tag pointing to the fasta file.
        :type uri: bool

        :param assembly: Value of the AS tag (optional).
        :type assembly: str

        :param species: Value of the SP tag (optional).
        :type species: str

        :returns: The sequence dictionary, in the order of the fasta file.
        :rtype: :py:class:`seqdict.structures.dictionary.SequenceDictionary`

        """
        dictionary = SequenceDictionary()
        for name in self.keys():
            record = SequenceRecord(name, len(self.f[name]))

            if md5:
                logger.debug("Computing MD5 for '{}'".format(name))
                record.set_tag(MD5_TAG, self.sequence_md5(name))

            if uri:
                record.set_tag(URI_TAG, file_uri(self.filename))

            record.set_tag(ASSEMBLY_TAG, assembly)
            record.set_tag(SPECIES_TAG, species)

            dictionary.append(record)

        return dictionary

    def close(self):
        self.f.close()
