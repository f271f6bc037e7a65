###############################################################################
#
# seqUtils.py - Common functions for interacting with sequences
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
import gzip

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from seedbin.errors import InputError

SPADES_COVERAGE = re.compile(r'_cov_([0-9]+(?:\.[0-9]+)?)')
COMMENT_COVERAGE = re.compile(r'\b(?:covg|coverage|cov|multi)\s*[=:]\s*([0-9]+(?:\.[0-9]+)?)', re.IGNORECASE)
AMBIGUOUS_RUN = re.compile(r'[^ACGTacgt]+')
NOT_NUCLEOTIDE = re.compile(r'[^ACGTN]')


def _openFasta(fastaFile, mode='r'):
    if fastaFile.endswith('.gz'):
        return gzip.open(fastaFile, mode + 't')

    return open(fastaFile, mode)


def readSeqRecords(fastaFile):
    '''Stream the records of a FASTA file.'''
    try:
        with _openFasta(fastaFile) as f:
            for record in SeqIO.parse(f, 'fasta'):
                yield record
    except (OSError, ValueError) as e:
        raise InputError('Failed to process sequence file %s: %s' % (fastaFile, e)) from e


def readFasta(fastaFile):
    '''Read sequences from FASTA file.'''
    seqs = {}
    for record in readSeqRecords(fastaFile):
        seqs[record.id] = str(record.seq)

    return seqs


def readFastaSeqIds(fastaFile):
    '''Read sequence ids from FASTA file.'''
    return [record.id for record in readSeqRecords(fastaFile)]


def writeFasta(seqs, outputFile):
    '''Write a dictionary of sequences to FASTA file.'''
    records = (SeqRecord(Seq(seq), id=seqId, description='') for seqId, seq in seqs.items())
    with _openFasta(outputFile, 'w') as fout:
        SeqIO.write(records, fout, 'fasta')


def headerComment(record):
    '''Text of a FASTA header following the sequence id.'''
    description = record.description
    if description.startswith(record.id):
        description = description[len(record.id):]

    return description.strip()


def parseCoverage(label, comment=''):
    '''Determine coverage from an assembler-style header, or None if it has none.'''
    match = SPADES_COVERAGE.search(label)
    if match is None and comment:
        match = COMMENT_COVERAGE.search(comment)

    if match is None:
        return None

    return float(match.group(1))


def longestAmbiguousRun(seq):
    '''Length of the longest run of non-ACGT characters.'''
    longest = 0
    for match in AMBIGUOUS_RUN.finditer(seq):
        longest = max(longest, match.end() - match.start())

    return longest


def reverseComplement(seq):
    return str(Seq(seq).reverse_complement())


def translateSixFrames(seq, translationTable=11):
    '''Translate a DNA sequence in all six reading frames.'''
    dna = NOT_NUCLEOTIDE.sub('N', seq.upper())

    proteins = []
    for strand in (dna, reverseComplement(dna)):
        for frame in range(3):
            codingLen = (len(strand) - frame) // 3 * 3
            if codingLen <= 0:
                continue

            coding = Seq(strand[frame:frame + codingLen])
            proteins.append(str(coding.translate(table=translationTable)))

    return proteins

