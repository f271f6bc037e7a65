###############################################################################
#
# main.py - command-line dispatch for seedbin
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
import sys
import logging

from seedbin.defaultValues import DefaultValues
from seedbin.timeKeeper import TimeKeeper
from seedbin.binParms import BinParms
from seedbin.binGroup import BinGroup
from seedbin.binningMethods import createBinningMethod
from seedbin.binPhases import BinPipeline, PipelineContext
from seedbin.genomes import GenomeDirectory
from seedbin.seedFinder import TabularSeedFinder
from seedbin.reporter import binTable
from seedbin.roleSubset import readRoleSet, subsetRoles
from seedbin.errors import BinningError
from seedbin.common import (checkFileExists,
                            makeSurePathExists,
                            clearDir,
                            loggerSetup)


class OptionsParser():
    def __init__(self):
        self.logger = logging.getLogger('timestamp')
        self.timeKeeper = TimeKeeper()

    def binCommand(self, options):
        """Bin command"""

        checkFileExists(options.contig_file)

        outDir = options.output_dir
        if os.path.isdir(outDir) and options.clear:
            clearDir(outDir)
        makeSurePathExists(outDir)
        self.logger = loggerSetup(outDir, DefaultValues.LOG_FILE, options.silent)

        self.logger.info('[seedbin - bin] Binning contigs in %s.' % options.contig_file)

        parms = BinParms.fromOptions(options).validate()
        self.logger.info('Tuning parameters: %s' % parms)

        finder = TabularSeedFinder(options.finder, self.logger)
        genomeSource = GenomeDirectory(options.genomes, self.logger)
        engine = createBinningMethod(options.recipe, parms, genomeSource, self.logger)

        context = PipelineContext(outDir, options.contig_file, parms, finder, genomeSource, engine, self.logger)
        binGroup = BinPipeline(context).run()

        self.logger.info('%d species bins found in %s.' % (len(binGroup.getSignificantBins()), options.contig_file))
        self.logger.info('Results written to: ' + outDir)

        self.timeKeeper.printTimeStamp()

    def summary(self, options):
        """Summary command"""

        checkFileExists(options.checkpoint_file)

        binGroup = BinGroup.load(options.checkpoint_file, self.logger)
        print(binTable(binGroup).get_string())

        for statName, value in binGroup.counts():
            print('%s\t%d' % (statName, value))

    def sourFile(self, options):
        """Sour file command"""

        self.logger.info('[seedbin - sour_file] Selecting role definitions.')

        checkFileExists(options.role_set_file)
        self.logger.info('Reading role IDs from column "%s" of %s.' % (options.col, options.role_set_file))
        keepIds = readRoleSet(options.role_set_file, options.col)
        self.logger.info('%d roles will be kept.' % len(keepIds))

        makeSurePathExists(os.path.dirname(options.output_file))
        with open(options.output_file, 'w') as fout:
            if options.input:
                checkFileExists(options.input)
                with open(options.input) as fin:
                    subsetRoles(fin, keepIds, fout)
            else:
                subsetRoles(sys.stdin, keepIds, fout)

        self.logger.info('Role definitions written to: ' + options.output_file)

        self.timeKeeper.printTimeStamp()

    def copyFinder(self, options):
        """Copy finder command"""

        self.logger.info('[seedbin - copy_finder] Copying a role subset of a finder.')

        checkFileExists(options.role_set_file)
        sourceFinder = TabularSeedFinder(options.finder_dir, self.logger)

        outDir = options.output_dir
        if os.path.isdir(outDir) and options.clear:
            self.logger.info('Erasing output directory %s.' % outDir)
            clearDir(outDir)
        makeSurePathExists(outDir)

        roleIds = readRoleSet(options.role_set_file, options.col)
        sourceFinder.copySubset(outDir, roleIds)

        self.logger.info('New finder written to: ' + outDir)

        self.timeKeeper.printTimeStamp()

    def parseOptions(self, options):
        """Parse user options and call the correct pipeline(s)"""

        try:
            if options.subparser_name == 'bin':
                self.binCommand(options)
            elif options.subparser_name == 'summary':
                self.summary(options)
            elif options.subparser_name == 'sour_file':
                self.sourFile(options)
            elif options.subparser_name == 'copy_finder':
                self.copyFinder(options)
            else:
                self.logger.error('Unknown seedbin command: ' + str(options.subparser_name) + '\n')
                return 1
        except BinningError as e:
            self.logger.error(str(e))
            return 1

        return 0
