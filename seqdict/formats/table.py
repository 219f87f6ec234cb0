# Tabular representations of sequence dictionaries (fasta indices, data
# frames).
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

__all__ = ["to_dataframe", "from_dataframe", "read_fai"]


import pandas as pd

from .utils import file_uri
from ..structures.dictionary import SequenceDictionary
from ..structures.sequences import SequenceRecord, URI_TAG


FAI_COLUMNS = ["name", "length", "offset", "line_bases", "line_width"]


def to_dataframe(dictionary):
    """Convert a sequence dictionary to a pandas DataFrame.

    :param dictionary: The sequence dictionary.
    :type dictionary: :py:class:`seqdict.structures.dictionary.SequenceDictionary`

    :returns: A DataFrame with the ``name``, ``length`` and ``index`` columns
              and one column per tag. Missing tags are NaN.
    :rtype: :py:class:`pandas.DataFrame`

    """
    tags = []
    rows = []
    for record in dictionary:
        row = {"name": record.name, "length": record.length,
               "index": record.index}
        for tag, value in record.tags.items():
            if tag not in tags:
                tags.append(tag)
            row[tag] = value
        rows.append(row)

    df = pd.DataFrame(rows, columns=["name", "length", "index"] + tags)
    df["length"] = df["length"].astype("Int64")
    return df


def from_dataframe(df, name_col="name", length_col="length", tags=None):
    """Build a sequence dictionary from a DataFrame.

    :param df: The DataFrame (one sequence per row, in order).
    :type df: :py:class:`pandas.DataFrame`

    :param name_col: The column containing the sequence names.
    :type name_col: str

    :param length_col: The column containing the lengths (NA for unknown
                       lengths). Can be None if there are no lengths.
    :type length_col: str

    :param tags: The columns to use as tags. By default, all the columns
                 except the name, length and index are used.
    :type tags: list

    """
    if tags is None:
        tags = [c for c in df.columns
                if c not in (name_col, length_col, "index")]

    records = []
    for _, row in df.iterrows():
        length = None
        if length_col is not None and not pd.isnull(row[length_col]):
            length = int(row[length_col])

        record = SequenceRecord(str(row[name_col]), length)
        for tag in tags:
            if not pd.isnull(row[tag]):
                record.set_tag(tag, row[tag])

        records.append(record)

    return SequenceDictionary(records)


def read_fai(fn, uri=None):
    """Read a fasta index (.fai) as a sequence dictionary.

    :param fn: The path to the fasta index.
    :type fn: str

    :param uri: The path to the fasta file, used for the UR tag (optional).
    :type uri: str

    """
    df = pd.read_csv(fn, sep="\t", header=None, names=FAI_COLUMNS,
                     usecols=[0, 1], dtype={"name": str, "length": int})

    if uri is not None:
        df[URI_TAG] = file_uri(uri)

    return from_dataframe(df)
