###############################################################################
#
# bin.py - a group of contigs believed to belong to a single organism
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

import numpy as np

from seedbin.errors import FormatError


class BinStatus():
    """Disposition of a bin."""
    BAD = 'BAD'
    SEED_USABLE = 'SEED_USABLE'
    USABLE = 'USABLE'
    VIRTUAL = 'VIRTUAL'

    ALL = (BAD, SEED_USABLE, USABLE, VIRTUAL)


class Bin():
    """A set of contigs believed to come from one organism.

    The bin ID is the label of its first contig and never changes. Contigs
    are referenced by label only; the owning BinGroup maps labels back to bins.
    """

    def __init__(self, contigId, length=0, coverage=0.0, status=BinStatus.USABLE):
        self.id = contigId
        self.name = contigId
        self.contigs = [contigId]
        self.length = length
        self.coverage = coverage
        self.status = status
        self.significant = False
        self.taxonId = None
        self.refGenomes = []
        self.suffix = ''

    def __repr__(self):
        return 'Bin(%s, %d contigs)' % (self.id, len(self.contigs))

    def isSignificant(self):
        return self.significant

    def merge(self, other):
        """Fold the contigs of another bin into this one."""
        totalLen = self.length + other.length
        if totalLen > 0:
            self.coverage = float(np.average([self.coverage, other.coverage],
                                             weights=[self.length, other.length]))
        else:
            self.coverage = 0.0
        self.length = totalLen
        self.contigs.extend(other.contigs)

        for refGenomeId in other.refGenomes:
            self.addRefGenome(refGenomeId)

    def setTaxInfo(self, taxonId, speciesName, suffix, refGenomeId):
        """Mark this bin as a starter bin for the specified species."""
        self.taxonId = taxonId
        self.suffix = suffix
        if suffix:
            self.name = '%s %s' % (speciesName, suffix)
        else:
            self.name = speciesName
        self.significant = True
        self.addRefGenome(refGenomeId)

    def addRefGenome(self, refGenomeId):
        if refGenomeId not in self.refGenomes:
            self.refGenomes.append(refGenomeId)

    def refGenome(self):
        """Canonical reference genome, or None."""
        if self.refGenomes:
            return self.refGenomes[0]

        return None

    def toJson(self):
        return {'id': self.id,
                'name': self.name,
                'contigs': list(self.contigs),
                'len': self.length,
                'coverage': self.coverage,
                'status': self.status,
                'significant': self.significant,
                'taxon_id': self.taxonId,
                'ref_genomes': list(self.refGenomes),
                'suffix': self.suffix}

    @classmethod
    def fromJson(cls, binDict):
        """Rebuild a bin from its checkpoint record."""
        if not isinstance(binDict, dict):
            raise FormatError('Bin record is not an object: %r' % (binDict,))

        try:
            contigs = [str(c) for c in binDict['contigs']]
            if not contigs:
                raise FormatError('Bin %s has no contigs.' % binDict.get('id'))

            newBin = cls(str(binDict.get('id', contigs[0])),
                         int(binDict['len']),
                         float(binDict['coverage']),
                         binDict.get('status', BinStatus.USABLE))
            newBin.name = str(binDict.get('name', newBin.id))
            newBin.contigs = contigs
            newBin.significant = bool(binDict.get('significant', False))
            newBin.taxonId = binDict.get('taxon_id')
            newBin.refGenomes = [str(r) for r in binDict.get('ref_genomes', [])]
            newBin.suffix = str(binDict.get('suffix', ''))
        except (KeyError, TypeError, ValueError) as e:
            raise FormatError('Invalid bin record: %s' % e) from e

        if newBin.status not in BinStatus.ALL:
            raise FormatError('Invalid status %s for bin %s.' % (newBin.status, newBin.id))
        if newBin.id not in newBin.contigs:
            raise FormatError('Bin %s does not contain its own contig.' % newBin.id)

        return newBin
