###############################################################################
#
# common.py - utility functions used in many places in seedbin
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
import errno
import shutil
import logging

from seedbin.errors import InputError


def loggerSetup(outputDir=None, logFile=None, silent=False):
    """Attach console and file handlers to the 'timestamp' logger."""
    logger = logging.getLogger('timestamp')
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # remove handlers from a previous call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter('[%(asctime)s] %(levelname)s: %(message)s',
                                  datefmt='%Y-%m-%d %H:%M:%S')

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console.setLevel(logging.WARNING if silent else logging.INFO)
    logger.addHandler(console)

    if outputDir and logFile:
        makeSurePathExists(outputDir)
        fileHandler = logging.FileHandler(os.path.join(outputDir, logFile), 'a')
        fileHandler.setFormatter(formatter)
        fileHandler.setLevel(logging.DEBUG)
        logger.addHandler(fileHandler)

    return logger


def checkFileExists(inputFile):
    """Check if file exists."""
    if not os.path.isfile(inputFile):
        raise InputError('Input file does not exist: %s' % inputFile)


def checkDirExists(inputDir):
    """Check if directory exists."""
    if not os.path.isdir(inputDir):
        raise InputError('Input directory does not exist: %s' % inputDir)


def makeSurePathExists(path):
    """Create directory if it does not exist."""
    if not path:
        return

    try:
        os.makedirs(path)
    except OSError as exception:
        if exception.errno != errno.EEXIST:
            raise InputError('Unable to create directory: %s' % path) from exception


def clearDir(outputDir):
    """Remove the contents of a directory, leaving the directory itself."""
    for f in os.listdir(outputDir):
        path = os.path.join(outputDir, f)
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
