###############################################################################
#
# kmerDb.py - discriminating kmer databases for scoring sequences against groups
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

import re
import logging
from collections import Counter

from seedbin.errors import DataIntegrityError
from seedbin.util.seqUtils import translateSixFrames

DNA_COMPLEMENT = str.maketrans('ACGT', 'TGCA')


def rankHits(counts):
    """Order (label, count) pairs by decreasing count, breaking ties by label."""
    return sorted(counts.items(), key=lambda x: (-x[1], x[0]))


class DiscriminatingKmerDb():
    """Index of kmers that occur in exactly one group.

    Kmers are accumulated under group labels. A kmer seen under two or more
    labels is not discriminating and is dropped when the database is
    finalized. A finalized database can be queried with DNA sequences.
    """

    # marks a kmer found in more than one group
    COMMON = None

    def __init__(self, kmerSize, logger=None):
        self.logger = logger or logging.getLogger('timestamp')
        self.kmerSize = kmerSize
        self.kmerMap = {}
        self.finalized = False

    def __len__(self):
        return len(self.kmerMap)

    def kmers(self, seq):
        """Kmers of a sequence in the alphabet of this database."""
        raise NotImplementedError

    def queryKmers(self, dna):
        """Kmers of a DNA query sequence."""
        raise NotImplementedError

    def addGenome(self, genome, label):
        """Add the kmers of a reference genome to a group."""
        raise NotImplementedError

    def addSequence(self, label, seq):
        """Add the kmers of a sequence to a group."""
        if self.finalized:
            raise DataIntegrityError('Cannot add kmers to a finalized kmer database.')

        kmerMap = self.kmerMap
        for kmer in self.kmers(seq):
            if kmer not in kmerMap:
                kmerMap[kmer] = label
            elif kmerMap[kmer] != label:
                kmerMap[kmer] = self.COMMON

    def finalize(self):
        """Remove common kmers and freeze the database."""
        self.kmerMap = {k: v for k, v in self.kmerMap.items() if v is not self.COMMON}
        self.finalized = True

        self.logger.info('%d discriminating kmers of length %d kept.' % (len(self.kmerMap), self.kmerSize))

    def countHits(self, dna):
        """Count the query kmers hitting each group."""
        if not self.finalized:
            raise DataIntegrityError('Kmer database must be finalized before it is queried.')

        counts = Counter()
        kmerMap = self.kmerMap
        for kmer in self.queryKmers(dna):
            label = kmerMap.get(kmer)
            if label is not None:
                counts[label] += 1

        return counts

    def clear(self):
        """Release the kmer index."""
        self.kmerMap = {}
        self.finalized = False


class ProteinKmerDb(DiscriminatingKmerDb):
    """Discriminating database of amino-acid kmers."""

    BREAKS = re.compile(r'[*X]+')

    def kmers(self, seq):
        k = self.kmerSize
        for segment in self.BREAKS.split(seq.upper()):
            for i in range(len(segment) - k + 1):
                yield segment[i:i + k]

    def queryKmers(self, dna):
        for protein in translateSixFrames(dna):
            yield from self.kmers(protein)

    def addGenome(self, genome, label):
        if genome.proteins:
            for protein in genome.proteins.values():
                self.addSequence(label, protein)
        else:
            # no called genes, so use every reading frame
            for dna in genome.contigs.values():
                for protein in translateSixFrames(dna):
                    self.addSequence(label, protein)


class DnaKmerDb(DiscriminatingKmerDb):
    """Discriminating database of canonical nucleotide kmers.

    A kmer and its reverse complement are the same key, so either strand of
    a contig matches.
    """

    BREAKS = re.compile(r'[^ACGT]+')

    def kmers(self, seq):
        k = self.kmerSize
        for segment in self.BREAKS.split(seq.upper()):
            for i in range(len(segment) - k + 1):
                kmer = segment[i:i + k]
                rev = kmer.translate(DNA_COMPLEMENT)[::-1]
                yield kmer if kmer <= rev else rev

    def queryKmers(self, dna):
        return self.kmers(dna)

    def addGenome(self, genome, label):
        for dna in genome.contigs.values():
            self.addSequence(label, dna)
