###############################################################################
#
# reporter.py - output reports for a completed bin group
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

import prettytable
from Bio import SeqIO

from seedbin.defaultValues import DefaultValues
from seedbin.util.seqUtils import readSeqRecords

BIN_HEADER = ['Name', 'Taxon ID', 'Ref Genomes', 'Coverage', 'Length']


def binRow(aBin):
    return [aBin.name, str(aBin.taxonId), ','.join(aBin.refGenomes),
            '%.2f' % aBin.coverage, str(aBin.length)]


def binTable(binGroup):
    """Table of the significant bins in a bin group."""
    pTable = prettytable.PrettyTable(BIN_HEADER)
    pTable.align = 'c'
    pTable.align['Name'] = 'l'
    pTable.align['Ref Genomes'] = 'l'

    for aBin in binGroup.getSignificantBins():
        pTable.add_row(binRow(aBin))

    return pTable


def binFastaName(binNum, aBin):
    return '%s.%d.%d.fasta' % (DefaultValues.BIN_FASTA_PREFIX, binNum, aBin.taxonId)


class BinReporter():
    """Write the bin report, the counter statistics, and the bin FASTA files."""

    def __init__(self, outDir, logger=None):
        self.logger = logger or logging.getLogger('timestamp')
        self.outDir = outDir

    def writeBinReport(self, binGroup):
        outFile = os.path.join(self.outDir, DefaultValues.BIN_REPORT)
        with open(outFile, 'w') as fout:
            fout.write('\t'.join(BIN_HEADER) + '\n')
            for aBin in binGroup.getSignificantBins():
                fout.write('\t'.join(binRow(aBin)) + '\n')

        return outFile

    def writeStats(self, binGroup):
        outFile = os.path.join(self.outDir, DefaultValues.STATS_REPORT)
        with open(outFile, 'w') as fout:
            fout.write('Counter\tCount\n')
            for statName, value in binGroup.counts():
                fout.write('%s\t%d\n' % (statName, value))

        return outFile

    def writeBinFasta(self, binGroup, inFile):
        """Write the contigs of each significant bin to its own FASTA file.

        Returns the list of files written, in bin order.
        """
        significantBins = binGroup.getSignificantBins()
        fileMap = {}
        outFiles = []
        for binNum, aBin in enumerate(significantBins, 1):
            outFile = os.path.join(self.outDir, binFastaName(binNum, aBin))
            fileMap[aBin.id] = outFile
            outFiles.append(outFile)

        handles = {}
        try:
            for binId, outFile in fileMap.items():
                handles[binId] = open(outFile, 'w')

            for record in readSeqRecords(inFile):
                contigBin = binGroup.getContigBin(record.id)
                if contigBin is not None and contigBin.id in handles:
                    SeqIO.write(record, handles[contigBin.id], 'fasta')
        finally:
            for fout in handles.values():
                fout.close()

        self.logger.info('%d bin FASTA files written to %s.' % (len(outFiles), self.outDir))

        return outFiles

    def writeReports(self, binGroup, inFile):
        reportFile = self.writeBinReport(binGroup)
        self.logger.info('Bin report written to %s.' % reportFile)

        self.writeBinFasta(binGroup, inFile)
        binGroup.writeUnplaced(inFile, os.path.join(self.outDir, DefaultValues.UNPLACED_FASTA))

        statsFile = self.writeStats(binGroup)
        self.logger.info('Statistics written to %s.' % statsFile)

        self.logger.info('Bins found:\n%s' % binTable(binGroup).get_string())
