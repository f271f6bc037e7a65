###############################################################################
#
# binParms.py - tuning parameters for binning
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

from seedbin.defaultValues import DefaultValues
from seedbin.errors import ConfigError


class BinParms():
    """Tuning parameters for contig filtering, the seed-protein search, and kmer binning.

    lenFilter / covgFilter        minimum length / coverage for a seed-search contig
    binLenFilter / binCovgFilter  minimum length / coverage for a binning contig
    xLimit                        maximum run of ambiguity characters in a binning contig
    maxEValue / refMaxEValue      BLAST e-value limits for the seed and reference-genome searches
    minLen                        minimum fraction of a protein that must match in a BLAST hit
    maxGap                        maximum gap between BLAST hits for merging
    kProt / kDna                  protein and DNA kmer lengths
    dangLen                       repeat-region kmer length (0 disables the repeat pass)
    binStrength                   minimum kmer-hit differential for placing a contig
    nameSuffix                    suffix appended to species names to form bin names
    """

    FIELDS = ('lenFilter', 'binLenFilter', 'covgFilter', 'binCovgFilter', 'xLimit',
              'maxEValue', 'refMaxEValue', 'minLen', 'maxGap', 'kProt', 'kDna',
              'dangLen', 'binStrength', 'nameSuffix')

    def __init__(self, **kwargs):
        self.lenFilter = DefaultValues.LEN_FILTER
        self.binLenFilter = DefaultValues.BIN_LEN_FILTER
        self.covgFilter = DefaultValues.COVG_FILTER
        self.binCovgFilter = DefaultValues.BIN_COVG_FILTER
        self.xLimit = DefaultValues.X_LIMIT
        self.maxEValue = DefaultValues.MAX_E_VALUE
        self.refMaxEValue = DefaultValues.REF_MAX_E_VALUE
        self.minLen = DefaultValues.MIN_LEN
        self.maxGap = DefaultValues.MAX_GAP
        self.kProt = DefaultValues.K_PROT
        self.kDna = DefaultValues.K_DNA
        self.dangLen = DefaultValues.DANG_LEN
        self.binStrength = DefaultValues.BIN_STRENGTH
        self.nameSuffix = DefaultValues.NAME_SUFFIX

        for key, value in kwargs.items():
            if key not in self.FIELDS:
                raise ConfigError('Unknown tuning parameter: %s' % key)
            setattr(self, key, value)

    @classmethod
    def fromOptions(cls, options):
        """Build parameters from an argparse namespace, ignoring missing options."""
        kwargs = {}
        for field in cls.FIELDS:
            value = getattr(options, field, None)
            if value is not None:
                kwargs[field] = value

        return cls(**kwargs)

    def validate(self):
        """Raise a ConfigError if any parameter is out of range."""
        if self.binCovgFilter < 0.0:
            raise ConfigError('Binning coverage filter cannot be negative.')
        if self.binLenFilter < 0:
            raise ConfigError('Binning length filter cannot be negative.')
        if self.covgFilter < 0.0:
            raise ConfigError('Seed-search coverage filter cannot be negative.')
        if self.lenFilter < 0:
            raise ConfigError('Seed-search length filter cannot be negative.')
        if self.dangLen < 0:
            raise ConfigError('Repeat-region kmer length (dangLen) cannot be negative.')
        if self.kDna < 1:
            raise ConfigError('DNA kmer length must be greater than 0.')
        if self.kProt < 1:
            raise ConfigError('Protein kmer length must be greater than 0.')
        if self.maxEValue < DefaultValues.MIN_E_VALUE_LIMIT:
            raise ConfigError('Seed-search e-value limit is too low. Minimum is %g.' % DefaultValues.MIN_E_VALUE_LIMIT)
        if self.refMaxEValue < DefaultValues.MIN_E_VALUE_LIMIT:
            raise ConfigError('Reference-genome e-value limit is too low. Minimum is %g.' % DefaultValues.MIN_E_VALUE_LIMIT)
        if self.maxGap < 0:
            raise ConfigError('Maximum gap size cannot be negative.')
        if self.minLen < 0.0 or self.minLen > 1.0:
            raise ConfigError('Minimum length match fraction must be between 0 and 1.')
        if self.xLimit < 0:
            raise ConfigError('Ambiguity-character limit (xLimit) cannot be negative.')
        if self.binStrength < 1:
            raise ConfigError('Bin strength cannot be less than 1.')
        if not self.nameSuffix.isprintable() or not self.nameSuffix.isascii():
            raise ConfigError('Name suffix can only contain printable characters.')

        return self

    def __str__(self):
        return ' '.join('--%s=%s' % (field, getattr(self, field)) for field in self.FIELDS)
