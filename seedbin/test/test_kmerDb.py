###############################################################################
#
# test_kmerDb.py - discriminating kmer database tests
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

from collections import Counter

import pytest
import numpy as np

from seedbin.errors import DataIntegrityError
from seedbin.genomes import Genome
from seedbin.kmerDb import ProteinKmerDb, DnaKmerDb, rankHits
from seedbin.util.seqUtils import reverseComplement


def test_rank_hits():
    ranked = rankHits(Counter({'B': 5, 'A': 5, 'C': 9}))
    assert ranked == [('C', 9), ('A', 5), ('B', 5)]
    assert rankHits(Counter()) == []


def test_protein_kmers_discriminate():
    kmerDb = ProteinKmerDb(4)
    kmerDb.addSequence('A', 'MKLVAAGHTR')
    kmerDb.addSequence('B', 'MKLVPPWQER')
    kmerDb.finalize()

    assert 'MKLV' not in kmerDb.kmerMap
    assert kmerDb.kmerMap['VAAG'] == 'A'
    assert kmerDb.kmerMap['PPWQ'] == 'B'

    # frame 0 translates to MKLVAAG
    counts = kmerDb.countHits('ATGAAACTGGTTGCGGCGGGC')
    assert counts['A'] >= 3
    assert 'B' not in counts


def test_protein_kmers_skip_stops():
    kmerDb = ProteinKmerDb(3)
    assert list(kmerDb.kmers('MK*LVA')) == ['LVA']
    assert list(kmerDb.kmers('MKXLV')) == []


def test_protein_genome_without_proteins_uses_contigs():
    kmerDb = ProteinKmerDb(4)
    genome = Genome('1.1', 'Test organism', contigs={'c1': 'ATGAAACTGGTTGCGGCGGGC'})
    kmerDb.addGenome(genome, 'A')
    kmerDb.finalize()

    assert kmerDb.kmerMap['KLVA'] == 'A'


def test_dna_kmers_match_either_strand():
    kmerDb = DnaKmerDb(8)
    seqA = 'ACGATCGATTGCAGGCTTAAGC'
    kmerDb.addGenome(Genome('1.1', 'A genome', contigs={'c1': seqA}), 'A')
    kmerDb.addGenome(Genome('2.1', 'B genome', contigs={'c1': 'C' * 30}), 'B')
    kmerDb.finalize()

    forward = kmerDb.countHits(seqA)
    reverse = kmerDb.countHits(reverseComplement(seqA))
    np.testing.assert_equal(forward['A'], len(seqA) - 8 + 1)
    assert forward == reverse
    np.testing.assert_equal(kmerDb.countHits('G' * 20)['B'], 13)


def test_common_kmers_dropped():
    kmerDb = DnaKmerDb(5)
    kmerDb.addSequence('A', 'AAAAACCCCC')
    kmerDb.addSequence('B', 'GGGGGTTTTTNAAAAAC')
    kmerDb.finalize()

    # AAAAA and GGGGG/CCCCC kmers occur in both groups
    assert 'AAAAA' not in kmerDb.kmerMap
    assert 'CCCCC' not in kmerDb.kmerMap
    assert not kmerDb.countHits('NNNNN')


def test_lifecycle():
    kmerDb = DnaKmerDb(5)
    with pytest.raises(DataIntegrityError):
        kmerDb.countHits('ACGTACGT')

    kmerDb.addSequence('A', 'ACGTACGTAC')
    kmerDb.finalize()
    with pytest.raises(DataIntegrityError):
        kmerDb.addSequence('B', 'ACGTACGTAC')

    kmerDb.clear()
    np.testing.assert_equal(len(kmerDb), 0)
    kmerDb.addSequence('B', 'ACGTACGTAC')
