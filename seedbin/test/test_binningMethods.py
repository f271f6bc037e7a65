###############################################################################
#
# test_binningMethods.py - kmer binning engine tests
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

from seedbin.bin import Bin
from seedbin.binGroup import BinGroup
from seedbin.binParms import BinParms
from seedbin.binningMethods import (chooseBin,
                                    createBinningMethod,
                                    BinningMethodType,
                                    KmerBinningMethod,
                                    NullBinningMethod)
from seedbin.errors import ConfigError
from seedbin.genomes import Genome, GenomeSource
from seedbin.kmerDb import ProteinKmerDb, DnaKmerDb
from seedbin.util.seqUtils import writeFasta

SEQ_A = 'ACGATCGATTGCAGGCTTAAGC'
SEQ_B = 'C' * 22


class FakeGenomes(GenomeSource):
    def __init__(self):
        self.requested = []

    def getGenome(self, genomeId):
        self.requested.append(genomeId)
        return Genome(genomeId, 'Genome ' + genomeId)


class FakeKmerDb():
    """Kmer database returning canned hit counts for each query sequence."""

    def __init__(self, hits):
        self.hits = hits
        self.labels = []
        self.finalized = False
        self.cleared = False

    def addGenome(self, genome, label):
        self.labels.append((genome.id, label))

    def finalize(self):
        self.finalized = True

    def countHits(self, dna):
        assert self.finalized
        return Counter(self.hits.get(dna, {}))

    def clear(self):
        self.cleared = True


def makeGroup(tmp_path, seqs):
    """Bin group with one bin per sequence and starter bins for seqA and seqB."""
    fastaFile = str(tmp_path / 'contigs.fasta')
    writeFasta(seqs, fastaFile)

    binGroup = BinGroup(fastaFile)
    for contigId, seq in seqs.items():
        binGroup.addBin(Bin(contigId, len(seq), 10.0))
    binGroup.getBin('seqA').setTaxInfo(100, 'Species alpha', '', '100.1')
    binGroup.getBin('seqB').setTaxInfo(200, 'Species beta', '', '200.1')

    return binGroup


@pytest.mark.parametrize('counts,targetId,outcome', [
    ({}, None, 'NoHits'),
    ({'A': 9}, None, 'UnambiguousWeak'),
    ({'A': 10}, 'A', 'UnambiguousStrong'),
    ({'A': 20, 'B': 12}, None, 'AmbiguousWeak'),
    ({'A': 20, 'B': 10}, 'A', 'AmbiguousStrong'),
    ({'A': 20, 'B': 9}, 'A', 'AmbiguousStrong'),
    ({'A': 3, 'B': 25, 'C': 1}, 'B', 'AmbiguousStrong'),
])
def test_choose_bin(counts, targetId, outcome):
    assert chooseBin(Counter(counts), 10) == (targetId, outcome)


def test_first_pass_placement(tmp_path):
    seqs = {'seqA': SEQ_A, 'seqB': SEQ_B,
            'c1': 'ACGTTTTTACGT', 'c2': 'ACGTAAAAACGT', 'c3': 'ACGTGGGGACGT',
            'c4': 'ACGTCACACACG', 'c5': 'ACGTATATATAC'}
    binGroup = makeGroup(tmp_path, seqs)
    seqA = binGroup.getBin('seqA')
    seqB = binGroup.getBin('seqB')
    hits = {'ACGTTTTTACGT': {'seqA': 20, 'seqB': 12},
            'ACGTAAAAACGT': {'seqA': 20, 'seqB': 9},
            'ACGTGGGGACGT': {'seqB': 9},
            'ACGTCACACACG': {'seqB': 10}}
    kmerDb = FakeKmerDb(hits)
    genomes = FakeGenomes()

    engine = KmerBinningMethod(BinParms(dangLen=0), genomes, kmerDb)
    engine.classify(binGroup)

    assert binGroup.getContigBin('c1') is binGroup.getBin('c1')
    assert binGroup.getContigBin('c2') is seqA
    assert binGroup.getContigBin('c3') is binGroup.getBin('c3')
    assert binGroup.getContigBin('c4') is seqB
    assert binGroup.getContigBin('c5') is binGroup.getBin('c5')

    np.testing.assert_equal(binGroup.getCount('kmer-contig-AmbiguousWeak'), 1)
    np.testing.assert_equal(binGroup.getCount('kmer-contig-AmbiguousStrong'), 1)
    np.testing.assert_equal(binGroup.getCount('kmer-contig-UnambiguousWeak'), 1)
    np.testing.assert_equal(binGroup.getCount('kmer-contig-UnambiguousStrong'), 1)
    np.testing.assert_equal(binGroup.getCount('kmer-contig-NoHits'), 1)
    np.testing.assert_equal(binGroup.getCount('kmer-contig-Placed'), 2)

    assert sorted(kmerDb.labels) == [('100.1', 'seqA'), ('200.1', 'seqB')]
    assert kmerDb.cleared
    np.testing.assert_equal(seqA.length, len(SEQ_A) + 12)


def test_filtered_contigs_skipped(tmp_path):
    seqs = {'seqA': SEQ_A, 'seqB': SEQ_B, 'c1': 'ACGTTTTTACGT'}
    binGroup = makeGroup(tmp_path, seqs)
    writeFasta(dict(seqs, bad='ACGT'), binGroup.getInputFile())

    engine = KmerBinningMethod(BinParms(dangLen=0), FakeGenomes(), FakeKmerDb({}))
    engine.classify(binGroup)

    np.testing.assert_equal(binGroup.getCount('kmer-contig-Skip'), 1)
    assert binGroup.getContigBin('bad') is None


def test_repeat_pass_places_best_hit(tmp_path):
    seqs = {'seqA': SEQ_A, 'seqB': SEQ_B,
            'c1': SEQ_A[0:14] + 'TTTT',
            'c2': 'GTGTGTGTGTGTGTGT'}
    binGroup = makeGroup(tmp_path, seqs)

    engine = KmerBinningMethod(BinParms(dangLen=12), FakeGenomes(), FakeKmerDb({}))
    engine.classify(binGroup)

    # a single shared kmer is enough in the repeat pass
    assert binGroup.getContigBin('c1') is binGroup.getBin('seqA')
    assert binGroup.getContigBin('c2') is binGroup.getBin('c2')
    np.testing.assert_equal(binGroup.getCount('repeat-contig-Placed'), 1)
    np.testing.assert_equal(binGroup.getCount('repeat-contig-NoHits'), 1)


def test_no_starters_is_noop(tmp_path):
    fastaFile = str(tmp_path / 'contigs.fasta')
    writeFasta({'c1': 'ACGTACGTACGT'}, fastaFile)
    binGroup = BinGroup(fastaFile)
    binGroup.addBin(Bin('c1', 12, 10.0))
    kmerDb = FakeKmerDb({})

    KmerBinningMethod(BinParms(), FakeGenomes(), kmerDb).classify(binGroup)

    np.testing.assert_equal(binGroup.getCount('kmer-starters-none'), 1)
    assert not kmerDb.finalized
    np.testing.assert_equal(binGroup.size(), 1)


def test_null_method_leaves_group(tmp_path):
    seqs = {'seqA': SEQ_A, 'seqB': SEQ_B, 'c1': SEQ_A}
    binGroup = makeGroup(tmp_path, seqs)

    NullBinningMethod(BinParms(), FakeGenomes()).classify(binGroup)

    np.testing.assert_equal(binGroup.size(), 3)


def test_create_binning_method():
    parms = BinParms(kProt=6, kDna=21)
    genomes = FakeGenomes()

    standard = createBinningMethod(BinningMethodType.STANDARD, parms, genomes)
    assert isinstance(standard.kmerDb, ProteinKmerDb)
    np.testing.assert_equal(standard.kmerDb.kmerSize, 6)

    strict = createBinningMethod(BinningMethodType.STRICT, parms, genomes)
    assert isinstance(strict.kmerDb, DnaKmerDb)
    np.testing.assert_equal(strict.kmerDb.kmerSize, 21)

    assert isinstance(createBinningMethod(BinningMethodType.REPORT, parms, genomes), NullBinningMethod)

    with pytest.raises(ConfigError):
        createBinningMethod('FANCY', parms, genomes)
