# Utilities to interact with the Ensembl database.
# This module contains code to query the Ensembl REST API and to describe the
# reference assemblies as sequence dictionaries.

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


import logging
import time

import requests

from .. import settings
from ..structures.dictionary import SequenceDictionary
from ..structures.sequences import SequenceRecord, ASSEMBLY_TAG, SPECIES_TAG


__all__ = ["query_ensembl", "get_url_prefix", "assembly_dictionary",
           "EnsemblQueryError"]

logger = logging.getLogger(__name__)

LAST_QUERY = 0


class EnsemblQueryError(Exception):
    """Exception raised when the Ensembl API did not return a response."""
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return repr(self.value)


def query_ensembl(url):
    """Query the given (Ensembl rest api) url and get a json reponse.

    :param url: The API url to query.
    :type url: str

    :returns: A python object loaded from the JSON response from the server
              or None if the request failed.

    """
    global LAST_QUERY

    this_query_time = time.time()
    delta_t = this_query_time - LAST_QUERY
    LAST_QUERY = this_query_time

    response = requests.get(url, headers={"Content-Type": "application/json"})

    if not response.ok:
        logger.warning("Request '{}' failed.".format(url))
        logger.warning("[{}] {}".format(response.status_code,
                                        response.reason))
        # If we busted we wait what they ask us to wait.
        if response.status_code == 429:
            sleep_time = float(response.headers.get("Retry-After", 1))
            logger.warning("Waiting {}s before next Ensembl request (at "
                           "the server's request).".format(sleep_time))
            time.sleep(sleep_time)

            return query_ensembl(url)

        return None

    reset = response.headers.get("X-RateLimit-Reset")  # Time to reset
    remaining = response.headers.get("X-RateLimit-Remaining")
    if reset is not None and remaining is not None and int(remaining) > 0:
        # Max time for request (s / request) to not exceed quota:
        max_t = 1.0 * int(reset) / int(remaining)
        if delta_t < max_t:
            time.sleep(max_t - delta_t + 0.5)  # We add a buffer of 0.5s.

    return response.json()


def get_url_prefix(build):
    """Generate a Ensembl REST API URL prefix for the given build."""
    if build.lower() in ("grch37", "hg19"):
        return "https://grch37.rest.ensembl.org/"
    elif build.lower() in ("grch38", "hg38"):
        return "https://rest.ensembl.org/"
    else:
        raise ValueError("Invalid build '{}'. Valid builds are: GRCh37 and "
                         "GRCh38.".format(build))


def assembly_dictionary(build=None, karyotype_only=True, chr_aliases=True):
    """Get the sequence dictionary of the human reference assembly.

    :param build: The genome build (GRCh37 or GRCh38). Defaults to the build
                  in the settings.
    :type build: str

    :param karyotype_only: Only keep the chromosomes (1-22, X, Y, MT).
    :type karyotype_only: bool

    :param chr_aliases: Register the ``chr`` prefixed names (and ``chrM``) as
                        aliases.
    :type chr_aliases: bool

    :returns: The sequences in the karyotype order, followed by the other
              top level regions (if ``karyotype_only`` is False).
    :rtype: :py:class:`seqdict.structures.dictionary.SequenceDictionary`

    """
    if build is None:
        build = settings.BUILD

    url = "{}info/assembly/homo_sapiens?content-type=application/json"
    url = url.format(get_url_prefix(build))

    res = query_ensembl(url)
    if res is None:
        raise EnsemblQueryError("Could not get the assembly information for "
                                "build '{}'.".format(build))

    regions = {}
    for region in res["top_level_region"]:
        # Chromosomes have precedence over other coordinate systems.
        name = region["name"]
        if name in regions and region["coord_system"] != "chromosome":
            continue
        regions[name] = region

    names = [name for name in res.get("karyotype", []) if name in regions]
    if not karyotype_only:
        for region in res["top_level_region"]:
            if region["name"] not in names:
                names.append(region["name"])

    assembly = res.get("assembly_name")
    dictionary = SequenceDictionary()
    for name in names:
        record = SequenceRecord(name, regions[name]["length"])
        record.set_tag(ASSEMBLY_TAG, assembly)
        record.set_tag(SPECIES_TAG, "Homo sapiens")
        dictionary.append(record)

    if chr_aliases:
        for name in names:
            alias = "chrM" if name == "MT" else "chr{}".format(name)
            if alias not in dictionary:
                dictionary.add_alias(name, alias)

    return dictionary
