###############################################################################
#
# seedFinder.py - interface to the seed-protein search
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
from collections import defaultdict, namedtuple

from seedbin.common import checkDirExists
from seedbin.defaultValues import DefaultValues
from seedbin.errors import CollaboratorError, InputError
from seedbin.util.seqUtils import readFastaSeqIds

SeedLocation = namedtuple('SeedLocation', 'contigId begin end strand')

# a seed-protein region resolved to its closest reference genome
DnaHit = namedtuple('DnaHit', 'contigId roleId taxonId refGenomeId score')

SOUR_HEADER = ['role_id', 'contig_id', 'begin', 'end', 'strand']
REF_HEADER = ['contig_id', 'role_id', 'taxon_id', 'ref_genome_id', 'score']


def saveSeedProteins(seedHits, outFile):
    """Write a map of role IDs to seed-protein locations."""
    with open(outFile, 'w') as fout:
        fout.write('\t'.join(SOUR_HEADER) + '\n')
        for roleId in sorted(seedHits):
            for loc in seedHits[roleId]:
                fout.write('%s\t%s\t%d\t%d\t%s\n' % (roleId, loc.contigId, loc.begin, loc.end, loc.strand))


def loadSeedProteins(inFile):
    """Read a map of role IDs to seed-protein locations."""
    seedHits = defaultdict(list)
    for lineSplit in _readTable(inFile, SOUR_HEADER):
        try:
            loc = SeedLocation(lineSplit[1], int(lineSplit[2]), int(lineSplit[3]), lineSplit[4])
        except ValueError as e:
            raise InputError('Invalid location in %s: %s' % (inFile, e)) from e
        seedHits[lineSplit[0]].append(loc)

    return dict(seedHits)


def saveRefGenomes(refHits, outFile):
    """Write a map of contig IDs to reference-genome hits."""
    with open(outFile, 'w') as fout:
        fout.write('\t'.join(REF_HEADER) + '\n')
        for contigId in sorted(refHits):
            hit = refHits[contigId]
            fout.write('%s\t%s\t%d\t%s\t%s\n' % (hit.contigId, hit.roleId, hit.taxonId,
                                                 hit.refGenomeId, repr(hit.score)))


def loadRefGenomes(inFile):
    """Read a map of contig IDs to reference-genome hits."""
    refHits = {}
    for lineSplit in _readTable(inFile, REF_HEADER):
        try:
            hit = DnaHit(lineSplit[0], lineSplit[1], int(lineSplit[2]), lineSplit[3], float(lineSplit[4]))
        except ValueError as e:
            raise InputError('Invalid reference-genome hit in %s: %s' % (inFile, e)) from e
        refHits[hit.contigId] = hit

    return refHits


def _readTable(inFile, header):
    try:
        f = open(inFile)
    except OSError as e:
        raise InputError('Unable to read %s: %s' % (inFile, e)) from e

    with f:
        headerLine = f.readline().rstrip('\n').split('\t')
        if headerLine != header:
            raise InputError('Unexpected header in %s.' % inFile)

        for lineNum, line in enumerate(f, 2):
            if not line.strip():
                continue

            lineSplit = line.rstrip('\n').split('\t')
            if len(lineSplit) < len(header):
                raise InputError('Line %d of %s has too few columns.' % (lineNum, inFile))

            yield lineSplit


class SeedFinder():
    """Interface to the seed-protein search engine."""

    def findSeedProteins(self, fastaFile):
        """Map each seed-protein role to the contig locations where it was found."""
        raise NotImplementedError

    def findRefGenomes(self, seedHits, fastaFile):
        """Map each contig with a seed protein to its best reference-genome hit."""
        raise NotImplementedError


class TabularSeedFinder(SeedFinder):
    """Seed-protein search results precomputed into tables in a finder directory.

    The directory holds a seed-protein table and a reference-genome table in
    the formats written by saveSeedProteins() and saveRefGenomes(). Only hits
    on contigs present in the query FASTA file are returned.
    """

    def __init__(self, finderDir, logger=None):
        checkDirExists(finderDir)
        self.finderDir = finderDir
        self.logger = logger or logging.getLogger('timestamp')

    def _tableFile(self, name):
        path = os.path.join(self.finderDir, name)
        if not os.path.exists(path):
            raise CollaboratorError('Seed-search table %s is missing.' % path)

        return path

    def findSeedProteins(self, fastaFile):
        contigIds = set(readFastaSeqIds(fastaFile))
        try:
            allHits = loadSeedProteins(self._tableFile(DefaultValues.SOUR_MAP))
        except InputError as e:
            raise CollaboratorError('Seed-protein search failed: %s' % e) from e

        seedHits = {}
        for roleId, locs in allHits.items():
            found = [loc for loc in locs if loc.contigId in contigIds]
            if found:
                seedHits[roleId] = found

        self.logger.info('%d seed-protein roles found in %s.' % (len(seedHits), fastaFile))

        return seedHits

    def findRefGenomes(self, seedHits, fastaFile):
        seedContigs = {loc.contigId for locs in seedHits.values() for loc in locs}
        try:
            allHits = loadRefGenomes(self._tableFile(DefaultValues.REF_GENOME_MAP))
        except InputError as e:
            raise CollaboratorError('Reference-genome search failed: %s' % e) from e

        refHits = {contigId: hit for contigId, hit in allHits.items() if contigId in seedContigs}

        self.logger.info('%d contigs in %s assigned to reference genomes.' % (len(refHits), fastaFile))

        return refHits

    def copySubset(self, outDir, roleIds):
        """Write a finder directory restricted to a subset of the seed-protein roles.

        Every requested role must be present in this finder. Returns the number
        of seed-protein locations and reference-genome hits copied.
        """
        allSeeds = loadSeedProteins(self._tableFile(DefaultValues.SOUR_MAP))
        missing = sorted(set(roleIds) - set(allSeeds))
        if missing:
            raise InputError('Role %s is not in the finder at %s.' % (missing[0], self.finderDir))

        allRefs = loadRefGenomes(self._tableFile(DefaultValues.REF_GENOME_MAP))
        self.logger.info('%d of %d roles will be transferred to %s.' % (len(roleIds), len(allSeeds), outDir))

        seedHits = {roleId: allSeeds[roleId] for roleId in roleIds}
        refHits = {contigId: hit for contigId, hit in allRefs.items() if hit.roleId in roleIds}

        saveSeedProteins(seedHits, os.path.join(outDir, DefaultValues.SOUR_MAP))
        saveRefGenomes(refHits, os.path.join(outDir, DefaultValues.REF_GENOME_MAP))

        seedCount = sum(len(locs) for locs in seedHits.values())
        self.logger.info('%d seed-protein locations and %d reference-genome hits copied to %s.'
                         % (seedCount, len(refHits), outDir))

        return seedCount, len(refHits)
