###############################################################################
#
# defaultValues.py - store default values used in many places in seedbin
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


class DefaultValues():
    """Default values for filenames and common constants."""

    # contig filtering
    LEN_FILTER = 500
    COVG_FILTER = 5.0
    BIN_LEN_FILTER = 300
    BIN_COVG_FILTER = 5.0
    X_LIMIT = 30

    # seed-protein search
    MAX_E_VALUE = 1e-20
    REF_MAX_E_VALUE = 1e-10
    MIN_E_VALUE_LIMIT = 1e-100
    MIN_LEN = 0.5
    MAX_GAP = 600

    # kmer binning
    K_PROT = 8
    K_DNA = 15
    DANG_LEN = 50
    BIN_STRENGTH = 10

    NAME_SUFFIX = 'clonal population'

    # coverage assigned to a contig whose header carries no coverage annotation
    DEFAULT_COVERAGE = 50.0

    AMBIGUITY_CHARS = 'NRYKMSWBDHVX-'

    # phase checkpoints
    LOAD_CHECKPOINT = 'bin.contigs.json'
    STARTER_CHECKPOINT = 'bins.starter.json'
    KMER_CHECKPOINT = 'bins.kmers.json'
    REPORT_CHECKPOINT = 'bins.json'

    # intermediate files
    REDUCED_FASTA = 'reduced.fasta'
    SOUR_MAP = 'sours.found.tbl'
    REF_GENOME_MAP = 'ref.genomes.tbl'

    # final report
    BIN_REPORT = 'bins.report.tsv'
    STATS_REPORT = 'stats.tsv'
    UNPLACED_FASTA = 'unplaced.fasta'
    BIN_FASTA_PREFIX = 'bin'

    LOG_FILE = 'seedbin.log'
    FINDER_DIR = 'Finder'
    GENOME_DIR = 'RefGenomes'

    PROGRESS_INTERVAL = 1000
