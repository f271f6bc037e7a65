###############################################################################
#
# binningMethods.py - methods for assigning unplaced contigs to starter bins
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

import logging

from seedbin.defaultValues import DefaultValues
from seedbin.errors import ConfigError, InputError
from seedbin.kmerDb import ProteinKmerDb, DnaKmerDb, rankHits
from seedbin.util.seqUtils import readSeqRecords


def chooseBin(counts, minDifference):
    """Pick the group for a contig from its kmer hit counts.

    Returns the chosen label (or None) and the name of the outcome. A single
    group must have at least minDifference hits; with several groups the best
    must beat the runner-up by at least minDifference.
    """
    ranked = rankHits(counts)
    if not ranked:
        return None, 'NoHits'

    targetId, targetCount = ranked[0]
    if len(ranked) == 1:
        if targetCount < minDifference:
            return None, 'UnambiguousWeak'
        return targetId, 'UnambiguousStrong'

    if targetCount - ranked[1][1] < minDifference:
        return None, 'AmbiguousWeak'

    return targetId, 'AmbiguousStrong'


class BinningMethodType():
    """Recipes for the contig-assignment phase."""
    STANDARD = 'STANDARD'
    STRICT = 'STRICT'
    REPORT = 'REPORT'

    ALL = (STANDARD, STRICT, REPORT)


class BinningMethod():
    """Base class for binning engines."""

    def __init__(self, parms, genomeSource, logger=None):
        self.logger = logger or logging.getLogger('timestamp')
        self.parms = parms
        self.genomeSource = genomeSource

    def classify(self, binGroup):
        """Assign unplaced contigs in the bin group to its starter bins."""
        starterBins = binGroup.getSignificantBins()
        if not starterBins:
            self.logger.warning('No starter bins available, so no contigs can be classified.')
            binGroup.count('kmer-starters-none')
            return

        self.runMethod(binGroup, starterBins)

    def runMethod(self, binGroup, starterBins):
        raise NotImplementedError


class NullBinningMethod(BinningMethod):
    """Leave the starter bins as they are."""

    def runMethod(self, binGroup, starterBins):
        self.logger.info('Contig assignment skipped for %d starter bins.' % len(starterBins))


class KmerBinningMethod(BinningMethod):
    """Place contigs using discriminating kmers from the reference genomes.

    The first pass scores each unplaced contig against kmers from the
    reference genomes of the starter bins. The optional second pass uses long
    DNA kmers from the contigs already placed to pick up repeat regions and
    mobile elements.
    """

    def __init__(self, parms, genomeSource, kmerDb, logger=None):
        BinningMethod.__init__(self, parms, genomeSource, logger)
        self.kmerDb = kmerDb

    def runMethod(self, binGroup, starterBins):
        inFile = binGroup.getInputFile()
        if inFile is None:
            raise InputError('Bin group has no contig file to classify.')

        binMap = {b.id: b for b in starterBins}

        self.processRefGenomes(binGroup, binMap, inFile)

        if self.parms.dangLen > 0:
            self.processRepeatRegions(binGroup, binMap, inFile, self.parms.dangLen)

    def processRefGenomes(self, binGroup, binMap, inFile):
        """Place contigs by discriminating kmers from the reference genomes."""
        try:
            for binId, starterBin in binMap.items():
                self.logger.info('Processing reference genomes for starter bin %s using ID %s.'
                                 % (starterBin.name, binId))
                for refGenomeId in starterBin.refGenomes:
                    refGenome = self.genomeSource.getGenome(refGenomeId)
                    self.logger.info('Scanning for kmers in %s.' % refGenome)
                    self.kmerDb.addGenome(refGenome, binId)
            self.kmerDb.finalize()

            minDifference = self.parms.binStrength
            contigCount = 0
            placeCount = 0
            self.logger.info('Scanning contigs in %s.' % inFile)
            for record in readSeqRecords(inFile):
                contigCount += 1
                contigBin = binGroup.getContigBin(record.id)
                if contigBin is None:
                    binGroup.count('kmer-contig-Skip')
                elif not contigBin.isSignificant():
                    counts = self.kmerDb.countHits(str(record.seq))
                    targetId, outcome = chooseBin(counts, minDifference)
                    binGroup.count('kmer-contig-' + outcome)
                    if targetId is not None:
                        binGroup.merge(binMap[targetId], contigBin)
                        binGroup.count('kmer-contig-Placed')
                        placeCount += 1

                if contigCount % DefaultValues.PROGRESS_INTERVAL == 0:
                    self.logger.info('%d contigs read, %d placed.' % (contigCount, placeCount))

            self.logger.info('%d contigs read and %d placed by discriminating-kmer analysis.'
                             % (contigCount, placeCount))
        finally:
            self.kmerDb.clear()

    def processRepeatRegions(self, binGroup, binMap, inFile, dangLen):
        """Place contigs sharing long kmers with contigs already in starter bins."""
        dangKmers = DnaKmerDb(dangLen, self.logger)
        try:
            readCount = 0
            scanCount = 0
            self.logger.info('Scanning %s for repeat-region kmers.' % inFile)
            for record in readSeqRecords(inFile):
                readCount += 1
                contigBin = binGroup.getContigBin(record.id)
                if contigBin is not None and contigBin.isSignificant():
                    scanCount += 1
                    dangKmers.addSequence(contigBin.id, str(record.seq))

                if readCount % DefaultValues.PROGRESS_INTERVAL == 0:
                    self.logger.info('%d contigs read and %d scanned for repeat-region kmers.' % (readCount, scanCount))
            dangKmers.finalize()

            readCount = 0
            scanCount = 0
            placeCount = 0
            self.logger.info('Scanning %s for repeat-region placement.' % inFile)
            for record in readSeqRecords(inFile):
                readCount += 1
                contigBin = binGroup.getContigBin(record.id)
                if contigBin is not None and not contigBin.isSignificant():
                    scanCount += 1
                    counts = dangKmers.countHits(str(record.seq))
                    if counts:
                        targetId = rankHits(counts)[0][0]
                        binGroup.merge(binMap[targetId], contigBin)
                        binGroup.count('repeat-contig-Placed')
                        placeCount += 1
                    else:
                        binGroup.count('repeat-contig-NoHits')

                if readCount % DefaultValues.PROGRESS_INTERVAL == 0:
                    self.logger.info('%d contigs read, %d checked, and %d placed during repeat-region placement pass.'
                                     % (readCount, scanCount, placeCount))

            self.logger.info('%d contigs placed by repeat-region analysis.' % placeCount)
        finally:
            dangKmers.clear()


def createBinningMethod(methodType, parms, genomeSource, logger=None):
    """Create the binning engine for a recipe."""
    if methodType == BinningMethodType.STANDARD:
        return KmerBinningMethod(parms, genomeSource, ProteinKmerDb(parms.kProt, logger), logger)
    elif methodType == BinningMethodType.STRICT:
        return KmerBinningMethod(parms, genomeSource, DnaKmerDb(parms.kDna, logger), logger)
    elif methodType == BinningMethodType.REPORT:
        return NullBinningMethod(parms, genomeSource, logger)

    raise ConfigError('Unknown binning method: %s' % methodType)
