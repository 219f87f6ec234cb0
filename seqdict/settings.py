# Default settings.

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


import os
import logging
import configparser


logger = logging.getLogger(__name__)


BUILD = "GRCh37"
SEQDICT_ROOT = ""
DEBUG = False

# Tags that have to agree when merging dictionaries (URI, MD5 and length).
DEFAULT_STRICT_TAGS = ("UR", "M5", "LN")
STRICT_TAGS = DEFAULT_STRICT_TAGS


def get_config():
    """Return a path to the seqdict configuration file."""
    # Check if the configuration file exists.
    config_file = os.path.join(SEQDICT_ROOT, "seqdictrc.ini")
    if not os.path.isfile(config_file):
        _create_default_config(config_file)

    return config_file


def _create_default_config(fn):
    """Create the default configuration file."""

    config = configparser.RawConfigParser()

    config.add_section("seqdictConfiguration")
    config.set("seqdictConfiguration", "DEBUG", "False")
    config.set("seqdictConfiguration", "BUILD", "GRCh37")

    config.add_section("merge")
    config.set("merge", "STRICT_TAGS", ",".join(DEFAULT_STRICT_TAGS))

    with open(fn, "w") as f:
        config.write(f)


def parse_tag_list(s):
    """Parse a comma separated list of tags (e.g. 'UR, M5,LN')."""
    return tuple(tag.strip() for tag in s.split(",") if tag.strip())


def _init_build(config):
    global BUILD

    BUILD = config.get("seqdictConfiguration", "BUILD", fallback=BUILD)

    # The BUILD can also be set as an environment variable.
    if os.environ.get("SEQDICT_BUILD"):
        BUILD = os.environ.get("SEQDICT_BUILD")


def _init_merge(config):
    global STRICT_TAGS

    if config.has_option("merge", "STRICT_TAGS"):
        STRICT_TAGS = parse_tag_list(config.get("merge", "STRICT_TAGS"))


def _init_settings():
    # Create the directory where the configuration file will be.
    global DEBUG
    global SEQDICT_ROOT
    try:
        SEQDICT_ROOT = os.path.expanduser(os.environ["SEQDICT_ROOT"])
    except KeyError:
        SEQDICT_ROOT = os.path.abspath(os.path.join(
            os.path.expanduser("~"),
            ".seqdict"
        ))

    config = configparser.RawConfigParser()
    try:
        if not os.path.isdir(SEQDICT_ROOT):
            os.mkdir(SEQDICT_ROOT)

        # Read the configuration file.
        config.read(get_config())

    except OSError as e:
        logger.warning("Could not use the configuration directory '{}' "
                       "({}). Using default settings.".format(SEQDICT_ROOT, e))

    # Load settings related to the genome build.
    _init_build(config)

    # Load settings related to dictionary merging.
    _init_merge(config)

    # Check if debug mode.
    DEBUG = config.get("seqdictConfiguration", "DEBUG",
                       fallback="False").lower() == "true"


_init_settings()
