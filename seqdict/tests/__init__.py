
# This file is part of seqdict.
#
# This work is licensed under the Creative Commons Attribution-NonCommercial
# 4.0 International License. To view a copy of this license, visit
# http://creativecommons.org/licenses/by-nc/4.0/ or send a letter to Creative
# Commons, PO Box 1866, Mountain View, CA 94042, USA.


__author__ = "Louis-Philippe Lemieux Perreault"
__copyright__ = ("Copyright 2014 Marc-Andre Legault and Louis-Philippe "
                 "Lemieux Perreault. All rights reserved.")
__license__ = "Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)"


import unittest

from . import test_structures, test_dictionary, test_merge, test_formats
from . import test_ensembl, test_settings


loader = unittest.TestLoader()
test_suite = unittest.TestSuite([
    loader.loadTestsFromModule(test_structures),
    loader.loadTestsFromModule(test_dictionary),
    loader.loadTestsFromModule(test_merge),
    loader.loadTestsFromModule(test_formats),
    loader.loadTestsFromModule(test_ensembl),
    loader.loadTestsFromModule(test_settings),
])
