###############################################################################
#
# speciesGrouper.py - build starter bins from reference-genome hits
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
from collections import defaultdict


def hitOrder(hit):
    """Sort key putting the best hit first; equal scores are ordered by contig ID."""
    return (-hit.score, hit.contigId)


class SpeciesGrouper():
    """Merge the seed-protein contigs of each species into a single starter bin."""

    def __init__(self, binGroup, genomeSource, nameSuffix, logger=None):
        self.logger = logger or logging.getLogger('timestamp')
        self.binGroup = binGroup
        self.genomeSource = genomeSource
        self.nameSuffix = nameSuffix

    def groupBySpecies(self, refHits):
        """Organize reference-genome hits by taxon ID, best hit first."""
        speciesMap = defaultdict(list)
        for hit in refHits.values():
            speciesMap[hit.taxonId].append(hit)
            self.binGroup.count('sour-hit-' + hit.roleId)

        for hitList in speciesMap.values():
            hitList.sort(key=hitOrder)

        return speciesMap

    def buildStarterBins(self, refHits):
        """Create one starter bin per species and return the starter bins.

        The best-scoring hit of a species picks the master bin and its
        canonical reference genome. The other hits are merged into the master
        from best to worst, and their reference genomes are recorded as
        alternates.
        """
        binGroup = self.binGroup
        speciesMap = self.groupBySpecies(refHits)

        starterBins = []
        for taxonId in sorted(speciesMap):
            hitList = []
            for hit in speciesMap[taxonId]:
                if binGroup.getContigBin(hit.contigId) is None:
                    self.logger.warning('Seed-protein contig %s is not in the bin group.' % hit.contigId)
                    binGroup.count('sour-contig-missing')
                else:
                    hitList.append(hit)

            if not hitList:
                continue

            bestHit = hitList[0]
            refGenome = self.genomeSource.getGenome(bestHit.refGenomeId)
            masterBin = binGroup.getContigBin(bestHit.contigId)
            masterBin.setTaxInfo(taxonId, refGenome.speciesName(), self.nameSuffix, bestHit.refGenomeId)
            binGroup.count('sour-species-found')

            for hit in hitList[1:]:
                hitBin = binGroup.getContigBin(hit.contigId)
                if hitBin is not masterBin:
                    binGroup.merge(masterBin, hitBin)
                    binGroup.count('sour-contig-merged')
                masterBin.addRefGenome(hit.refGenomeId)

            self.logger.info('%d contigs in starter bin %s using reference genome %s.'
                             % (len(hitList), masterBin.id, refGenome))
            starterBins.append(masterBin)

        return starterBins
