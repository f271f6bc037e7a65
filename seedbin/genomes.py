###############################################################################
#
# genomes.py - reference genome records and the sources they come from
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

from seedbin.common import checkDirExists
from seedbin.errors import CollaboratorError


class Genome():
    """A reference genome: DNA, protein translations, and taxonomy."""

    def __init__(self, genomeId, name, taxonId=None, lineage=None, contigs=None, proteins=None):
        self.id = genomeId
        self.name = name
        self.taxonId = taxonId
        self.lineage = lineage or []
        self.contigs = contigs or {}
        self.proteins = proteins or {}

    def __str__(self):
        return '%s (%s)' % (self.id, self.name)

    def speciesName(self):
        """Name of the species the genome belongs to."""
        for name, _taxonId, rank in self.lineage:
            if rank == 'species':
                return name

        words = self.name.split()
        return ' '.join(words[0:2])

    @classmethod
    def fromGto(cls, gto):
        """Build a genome from a GTO-style dictionary."""
        contigs = {c['id']: c['dna'] for c in gto.get('contigs', [])}
        proteins = {}
        for feature in gto.get('features', []):
            translation = feature.get('protein_translation')
            if translation:
                proteins[feature['id']] = translation

        lineage = [(str(name), int(taxonId), rank) for name, taxonId, rank in gto.get('ncbi_lineage', [])]
        taxonId = gto.get('ncbi_taxonomy_id')

        return cls(str(gto['id']),
                   gto.get('scientific_name', str(gto['id'])),
                   int(taxonId) if taxonId is not None else None,
                   lineage,
                   contigs,
                   proteins)


class GenomeSource():
    """Interface to a genome database."""

    def getGenome(self, genomeId):
        raise NotImplementedError


class GenomeDirectory(GenomeSource):
    """Genome database kept as a directory of GTO files named by genome ID."""

    EXTENSIONS = ('.gto', '.json')

    def __init__(self, genomeDir, logger=None):
        checkDirExists(genomeDir)
        self.genomeDir = genomeDir
        self.logger = logger or logging.getLogger('timestamp')

    def genomeFile(self, genomeId):
        for ext in self.EXTENSIONS:
            path = os.path.join(self.genomeDir, genomeId + ext)
            if os.path.exists(path):
                return path

        return None

    def getGenome(self, genomeId):
        gtoFile = self.genomeFile(genomeId)
        if gtoFile is None:
            raise CollaboratorError('Genome %s not found in %s.' % (genomeId, self.genomeDir))

        try:
            with open(gtoFile) as f:
                genome = Genome.fromGto(json.load(f))
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise CollaboratorError('Unable to read genome %s from %s: %s' % (genomeId, gtoFile, e)) from e

        self.logger.info('Loaded genome %s from %s.' % (genome, gtoFile))

        return genome
