###############################################################################
#
# binPhases.py - checkpointed phases of the binning pipeline
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
import logging
from collections import namedtuple

from seedbin.binGroup import BinGroup
from seedbin.defaultValues import DefaultValues
from seedbin.reporter import BinReporter
from seedbin.seedFinder import saveSeedProteins, saveRefGenomes
from seedbin.speciesGrouper import SpeciesGrouper

BinPhase = namedtuple('BinPhase', 'name saveFile function')


class PipelineContext():
    """Everything a phase needs besides the bin group."""

    def __init__(self, outDir, inFile, parms, finder, genomeSource, engine, logger=None):
        self.logger = logger or logging.getLogger('timestamp')
        self.outDir = outDir
        self.inFile = inFile
        self.parms = parms
        self.finder = finder
        self.genomeSource = genomeSource
        self.engine = engine

    def outFile(self, name):
        return os.path.join(self.outDir, name)

    def getNameSuffix(self):
        return self.parms.nameSuffix


def loadContigs(binGroup, context):
    """Filter the input contigs into single-contig bins."""
    return BinGroup.fromFasta(context.inFile, context.parms,
                              context.outFile(DefaultValues.REDUCED_FASTA),
                              context.logger)


def searchSeedProteins(binGroup, context):
    """Build one starter bin per species found by the seed-protein search."""
    logger = context.logger
    reducedFile = context.outFile(DefaultValues.REDUCED_FASTA)

    logger.info('Searching for seed proteins in %s.' % reducedFile)
    seedHits = context.finder.findSeedProteins(reducedFile)
    if not seedHits:
        logger.warning('No seed proteins could be found in this sample.')
        binGroup.count('sour-proteins-none')
        return binGroup

    binGroup.count('sour-proteins-found', len(seedHits))
    saveSeedProteins(seedHits, context.outFile(DefaultValues.SOUR_MAP))

    logger.info('Searching for reference genomes for %d seed-protein roles.' % len(seedHits))
    refHits = context.finder.findRefGenomes(seedHits, reducedFile)
    if not refHits:
        logger.warning('No reference genomes could be found for this sample.')
        binGroup.count('sour-refGenomes-none')
        return binGroup

    binGroup.count('sour-refGenomes-assigned', len(refHits))
    saveRefGenomes(refHits, context.outFile(DefaultValues.REF_GENOME_MAP))

    grouper = SpeciesGrouper(binGroup, context.genomeSource, context.getNameSuffix(), logger)
    starterBins = grouper.buildStarterBins(refHits)
    logger.info('%d starter bins created.' % len(starterBins))

    return binGroup


def assignContigs(binGroup, context):
    """Place the remaining contigs into the starter bins."""
    context.engine.classify(binGroup)
    return binGroup


def writeReports(binGroup, context):
    """Write the bin report, the statistics, and the bin FASTA files."""
    reporter = BinReporter(context.outDir, context.logger)
    reporter.writeReports(binGroup, context.inFile)
    return binGroup


PHASES = (BinPhase('CONTIG-LOAD', DefaultValues.LOAD_CHECKPOINT, loadContigs),
          BinPhase('SOUR-SEARCH', DefaultValues.STARTER_CHECKPOINT, searchSeedProteins),
          BinPhase('CONTIG-ASSIGNMENT', DefaultValues.KMER_CHECKPOINT, assignContigs),
          BinPhase('REPORTING', DefaultValues.REPORT_CHECKPOINT, writeReports))


class BinPipeline():
    """Run the binning phases, resuming after the last completed checkpoint.

    A phase is done when its checkpoint file exists. A failing phase writes
    no checkpoint, so the next run starts over at that phase.
    """

    def __init__(self, context, phases=PHASES):
        self.logger = context.logger
        self.context = context
        self.phases = phases

    def saveFile(self, phase):
        return self.context.outFile(phase.saveFile)

    def isDone(self, phase):
        return os.path.exists(self.saveFile(phase))

    def firstPending(self):
        """Index of the first phase without a checkpoint, or None if all are done."""
        for phaseIdx, phase in enumerate(self.phases):
            if not self.isDone(phase):
                return phaseIdx

        return None

    def run(self):
        """Run the pending phases and return the final bin group."""
        startIdx = self.firstPending()
        if startIdx is None:
            lastFile = self.saveFile(self.phases[-1])
            self.logger.info('All phases are complete. Loading results from %s.' % lastFile)
            return BinGroup.load(lastFile, self.logger)

        if startIdx > 0:
            prevFile = self.saveFile(self.phases[startIdx - 1])
            self.logger.info('Resuming at %s phase using %s.' % (self.phases[startIdx].name, prevFile))
            binGroup = BinGroup.load(prevFile, self.logger)
        else:
            binGroup = BinGroup(self.context.inFile, self.logger)

        for phase in self.phases[startIdx:]:
            self.logger.info('Executing %s phase.' % phase.name)
            binGroup = phase.function(binGroup, self.context)
            self.logger.info('%d bins and %d contigs at end of %s phase.'
                             % (binGroup.size(), binGroup.contigCount(), phase.name))
            binGroup.save(self.saveFile(phase))

        return binGroup
