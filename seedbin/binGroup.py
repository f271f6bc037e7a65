###############################################################################
#
# binGroup.py - the set of bins for a sample and the contig-to-bin index
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

import os
import json
import logging
from collections import Counter

from Bio import SeqIO

from seedbin.bin import Bin, BinStatus
from seedbin.contigFilter import Contig, ContigFilter
from seedbin.errors import DataIntegrityError, FormatError, InputError
from seedbin.util.seqUtils import readSeqRecords


class BinGroup():
    """A set of bins plus an index from each contig to the bin containing it.

    The group is the sole owner of its bins. Merging a bin into another
    removes it from the group and repoints its contigs, so every admitted
    contig always resolves to exactly one live bin.
    """

    def __init__(self, inputFile=None, logger=None):
        self.logger = logger or logging.getLogger('timestamp')
        self.contigMap = {}
        self.bins = {}
        self.stats = Counter()
        self.inputFile = inputFile

    def __iter__(self):
        return iter(list(self.bins.values()))

    def __len__(self):
        return len(self.bins)

    def size(self):
        """Number of live bins."""
        return len(self.bins)

    def contigCount(self):
        """Number of admitted contigs."""
        return len(self.contigMap)

    def getInputFile(self):
        return self.inputFile

    def addBin(self, newBin):
        """Add a bin and index its contigs."""
        if newBin.id in self.bins:
            raise DataIntegrityError('Bin %s is already in the group.' % newBin.id)

        seen = set()
        for contigId in newBin.contigs:
            if contigId in self.contigMap or contigId in seen:
                raise DataIntegrityError('Contig %s is already in a bin.' % contigId)
            seen.add(contigId)

        self.bins[newBin.id] = newBin
        for contigId in newBin.contigs:
            self.contigMap[contigId] = newBin

    def isLive(self, aBin):
        return self.bins.get(aBin.id) is aBin

    def merge(self, target, source):
        """Merge the source bin into the target bin."""
        if target is source:
            raise DataIntegrityError('Attempt to merge bin %s into itself.' % target.id)
        if not self.isLive(target):
            raise DataIntegrityError('Merge target %s is not in the group.' % target.id)
        if not self.isLive(source):
            raise DataIntegrityError('Merge source %s is not in the group.' % source.id)

        del self.bins[source.id]
        target.merge(source)
        for contigId in source.contigs:
            self.contigMap[contigId] = target

    def getContigBin(self, contigId):
        """Bin containing a contig, or None if the contig was filtered out."""
        return self.contigMap.get(contigId)

    def getBin(self, binId):
        return self.bins.get(binId)

    def getSignificantBins(self):
        """Bins with a taxon assigned, ordered by name and then ID."""
        significant = [b for b in self.bins.values() if b.isSignificant()]
        return sorted(significant, key=lambda b: (b.name, b.id))

    def count(self, statName, delta=1):
        """Increment a counter. Counters never decrease."""
        if delta < 0:
            raise DataIntegrityError('Counter %s cannot be decreased by %d.' % (statName, delta))
        self.stats[statName] += delta

    def getCount(self, statName):
        return self.stats.get(statName, 0)

    def counts(self):
        """Counters sorted by name."""
        return sorted(self.stats.items())

    def toJson(self):
        groupDict = {'bins': [b.toJson() for b in self.bins.values()],
                     'counts': dict(self.stats)}
        if self.inputFile is not None:
            groupDict['in_file'] = os.path.abspath(self.inputFile)

        return groupDict

    def save(self, outFile):
        """Write the bin group to a JSON checkpoint file."""
        tmpFile = outFile + '.tmp'
        with open(tmpFile, 'w') as fout:
            json.dump(self.toJson(), fout, indent=2)
        os.replace(tmpFile, outFile)

        self.logger.info('Bin group saved to %s.' % outFile)

    @classmethod
    def load(cls, inFile, logger=None):
        """Read a bin group from a JSON checkpoint file.

        The contig index is rebuilt from the bin member lists.
        """
        try:
            with open(inFile) as f:
                groupDict = json.load(f)
        except ValueError as e:
            raise FormatError('Checkpoint %s is not valid JSON: %s' % (inFile, e)) from e
        except OSError as e:
            raise InputError('Unable to read checkpoint %s: %s' % (inFile, e)) from e

        if not isinstance(groupDict, dict):
            raise FormatError('Checkpoint %s does not contain a bin group.' % inFile)

        if 'bins' not in groupDict or 'counts' not in groupDict:
            raise FormatError('Checkpoint %s is missing its bin list or count map.' % inFile)

        binList = groupDict['bins']
        counts = groupDict['counts']
        if not isinstance(binList, list) or not isinstance(counts, dict):
            raise FormatError('Checkpoint %s has a malformed bin list or count map.' % inFile)

        retVal = cls(groupDict.get('in_file'), logger)
        try:
            for binDict in binList:
                retVal.addBin(Bin.fromJson(binDict))
        except DataIntegrityError as e:
            raise FormatError('Checkpoint %s is inconsistent: %s' % (inFile, e)) from e

        for statName, value in counts.items():
            try:
                retVal.stats[statName] = int(value)
            except (TypeError, ValueError) as e:
                raise FormatError('Invalid count %s in checkpoint %s.' % (statName, inFile)) from e

        retVal.logger.info('%d contigs and %d bins read from %s.' % (retVal.contigCount(), retVal.size(), inFile))

        return retVal

    @classmethod
    def fromFasta(cls, fastaFile, parms, reducedFile, logger=None):
        """Filter the contigs in a FASTA file into single-contig bins.

        Contigs good enough for the seed-protein search are also written to
        the reduced FASTA file.
        """
        retVal = cls(fastaFile, logger)
        contigFilter = ContigFilter(parms)

        retVal.logger.info('Reading contigs from %s.' % fastaFile)
        seedUsableCount = 0
        with open(reducedFile, 'w') as fout:
            for record in readSeqRecords(fastaFile):
                contigBin = contigFilter.computeBin(Contig.fromRecord(record), retVal)
                if contigBin.status == BinStatus.SEED_USABLE:
                    SeqIO.write(record, fout, 'fasta')
                    seedUsableCount += 1

                if contigBin.status != BinStatus.BAD:
                    retVal.addBin(contigBin)

        retVal.logger.info('%d seed-search sequences written to %s, %d saved for binning.'
                           % (seedUsableCount, reducedFile, retVal.size()))

        return retVal

    def writeUnplaced(self, inFile, outFile):
        """Write the admitted contigs that are not in a significant bin."""
        self.logger.info('Transferring unplaced sequences from %s to %s.' % (inFile, outFile))

        outCount = 0
        skipCount = 0
        placeCount = 0
        with open(outFile, 'w') as fout:
            for record in readSeqRecords(inFile):
                contigBin = self.contigMap.get(record.id)
                if contigBin is None:
                    skipCount += 1
                elif contigBin.isSignificant():
                    placeCount += 1
                else:
                    SeqIO.write(record, fout, 'fasta')
                    outCount += 1

        self.logger.info('%d contigs are placed, %d have been rejected, %d written to %s.'
                         % (placeCount, skipCount, outCount, outFile))

        return outCount
