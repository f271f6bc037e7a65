###############################################################################
#
# contigFilter.py - decide which contigs are usable for binning
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

from seedbin.bin import Bin, BinStatus
from seedbin.defaultValues import DefaultValues
from seedbin.util.seqUtils import headerComment, parseCoverage, longestAmbiguousRun


class Contig():
    """An assembled contig read from the input FASTA file."""

    def __init__(self, label, seq, coverage, xRun):
        self.label = label
        self.seq = seq
        self.coverage = coverage
        self.xRun = xRun

    def __len__(self):
        return len(self.seq)

    @classmethod
    def fromRecord(cls, record):
        """Build a contig from a Biopython record. Coverage is None if the header has none."""
        seq = str(record.seq)
        coverage = parseCoverage(record.id, headerComment(record))

        return cls(record.id, seq, coverage, longestAmbiguousRun(seq))


class ContigFilter():
    """Classify contigs by length, coverage, and runs of ambiguity characters."""

    def __init__(self, parms):
        self.parms = parms

    def computeBin(self, contig, stats):
        """Create a single-contig bin with the appropriate status.

        stats is any object with a count(name, delta) method; the caller owns it.
        """
        stats.count('contig-in')
        stats.count('bases-in', len(contig))

        coverage = contig.coverage
        if coverage is None:
            stats.count('contig-covg-missing')
            coverage = DefaultValues.DEFAULT_COVERAGE

        contigBin = Bin(contig.label, len(contig), coverage)

        if len(contig) < self.parms.binLenFilter:
            stats.count('contig-bad-len')
            contigBin.status = BinStatus.BAD
        elif coverage < self.parms.binCovgFilter:
            stats.count('contig-bad-covg')
            contigBin.status = BinStatus.BAD
        elif contig.xRun > self.parms.xLimit:
            stats.count('contig-bad-xRun')
            contigBin.status = BinStatus.BAD
        elif len(contig) >= self.parms.lenFilter and coverage >= self.parms.covgFilter:
            stats.count('contig-seed-usable')
            contigBin.status = BinStatus.SEED_USABLE
        else:
            stats.count('contig-usable')
            contigBin.status = BinStatus.USABLE

        return contigBin
