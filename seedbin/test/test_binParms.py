###############################################################################
#
# test_binParms.py - tuning parameter tests
#
###############################################################################
#                                                                             #
#    This program is free software: you can redistribute it and/or modify     #
#    it under the terms of the GNU General Public License as published by     #
#    the Free Software Foundation, either version 3 of the License, or        #
#    (at your option) any later version.                                      #
#                                                                             #
#    This program is distributed in the hope that it will be useful,          #
#    but WITHOUT ANY WARRANTY; without even the implied warranty of           #
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the            #
#    GNU General Public License for more details.                             #
#                                                                             #
#    You should have received a copy of the GNU General Public License        #
#    along with this program. If not, see <http://www.gnu.org/licenses/>.     #
#                                                                             #
###############################################################################

import argparse

import pytest
import numpy as np

from seedbin.binParms import BinParms
from seedbin.errors import ConfigError


def test_defaults():
    parms = BinParms().validate()

    np.testing.assert_equal(parms.lenFilter, 500)
    np.testing.assert_almost_equal(parms.covgFilter, 5.0)
    np.testing.assert_equal(parms.binLenFilter, 300)
    np.testing.assert_almost_equal(parms.binCovgFilter, 5.0)
    np.testing.assert_equal(parms.xLimit, 30)
    np.testing.assert_almost_equal(parms.maxEValue, 1e-20)
    np.testing.assert_almost_equal(parms.refMaxEValue, 1e-10)
    np.testing.assert_almost_equal(parms.minLen, 0.5)
    np.testing.assert_equal(parms.maxGap, 600)
    np.testing.assert_equal(parms.kProt, 8)
    np.testing.assert_equal(parms.kDna, 15)
    np.testing.assert_equal(parms.dangLen, 50)
    np.testing.assert_equal(parms.binStrength, 10)
    assert parms.nameSuffix == 'clonal population'


def test_from_options():
    options = argparse.Namespace(binStrength=4, kProt=None, dangLen=0, contig_file='x.fasta')
    parms = BinParms.fromOptions(options)

    np.testing.assert_equal(parms.binStrength, 4)
    np.testing.assert_equal(parms.kProt, 8)
    np.testing.assert_equal(parms.dangLen, 0)
    assert '--binStrength=4' in str(parms)


def test_unknown_parameter():
    with pytest.raises(ConfigError):
        BinParms(binStrenght=4)


@pytest.mark.parametrize('field,value', [
    ('binCovgFilter', -1.0),
    ('lenFilter', -1),
    ('dangLen', -1),
    ('kDna', 0),
    ('kProt', 0),
    ('maxEValue', 1e-101),
    ('refMaxEValue', 1e-200),
    ('minLen', 1.5),
    ('minLen', -0.1),
    ('maxGap', -5),
    ('xLimit', -1),
    ('binStrength', 0),
    ('nameSuffix', 'bad\tsuffix'),
])
def test_validate_rejects(field, value):
    with pytest.raises(ConfigError):
        BinParms(**{field: value}).validate()


def test_validate_accepts_limits():
    BinParms(minLen=0.0, maxEValue=1e-100, dangLen=0, binStrength=1, nameSuffix='').validate()
    BinParms(minLen=1.0).validate()
