#!/usr/bin/env python
# -*- coding: utf-8 -*-

# How to build source distribution
# python setup.py sdist --format gztar
# python setup.py sdist --format zip

import os

from setuptools import setup, find_packages


MAJOR = 0
MINOR = 1
MICRO = 0
VERSION = "{}.{}.{}".format(MAJOR, MINOR, MICRO)


def write_version_file(fn=None):
    if fn is None:
        fn = os.path.join(
            os.path.dirname(os.path.abspath(__file__)),
            os.path.join("seqdict", "version.py")
        )
    content = ("# THIS FILE WAS GENERATED FROM SEQDICT SETUP.PY\n"
               "seqdict_version = \"{version}\"\n")

    with open(fn, "w") as f:
        f.write(content.format(version=VERSION))


def setup_package():
    # Saving the version into a file
    write_version_file()

    setup(
        name="seqdict",
        version=VERSION,
        description=("Reference sequence dictionaries: ordered collections "
                     "of named contigs with checksums and merging."),
        long_description=("This package provides a data structure to "
                          "describe the reference sequences (contigs) a "
                          "genomic dataset is aligned against. It handles "
                          "sequence aliases, computes dictionary checksums, "
                          "checks the compatibility of references and merges "
                          "the metadata of dictionaries. Dictionaries can be "
                          "built from fasta files, fasta indices, data frames "
                          "or the Ensembl API."),
        author="Marc-André Legault",
        author_email="legaultmarc@gmail.com",
        license="CC BY-NC 4.0",
        packages=find_packages(exclude=["docs", "demos"]),
        classifiers=["Development Status :: 4 - Beta",
                     "Intended Audience :: Developers",
                     "Intended Audience :: Science/Research",
                     "Operating System :: Unix",
                     "Operating System :: MacOS :: MacOS X",
                     "Operating System :: POSIX :: Linux",
                     "Programming Language :: Python",
                     "Programming Language :: Python :: 3",
                     "Topic :: Scientific/Engineering :: Bio-Informatics"],
        keywords="bioinformatics genomics reference sequence dictionary",
        python_requires=">=3.8",
        install_requires=["requests >= 2.4.3", "pandas >= 1.0",
                          "pyfaidx >= 0.5"],
    )

    return


if __name__ == "__main__":
    setup_package()
