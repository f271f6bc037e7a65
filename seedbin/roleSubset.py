###############################################################################
#
# roleSubset.py - select the role definitions used by the seed-protein search
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

from seedbin.errors import InputError


def columnIndex(header, col):
    """Resolve a 1-based column index or a column name against a header line."""
    if col.isdigit():
        colIdx = int(col) - 1
        if colIdx < 0 or colIdx >= len(header):
            raise InputError('Column %s is out of range.' % col)
        return colIdx

    try:
        return header.index(col)
    except ValueError as e:
        raise InputError('Column %s not found in header.' % col) from e


def readRoleSet(roleSetFile, col='1'):
    """Read the role IDs in one column of a tab-delimited file with a header."""
    roleIds = set()
    try:
        with open(roleSetFile) as f:
            header = f.readline().rstrip('\n').split('\t')
            colIdx = columnIndex(header, col)
            for line in f:
                lineSplit = line.rstrip('\n').split('\t')
                if len(lineSplit) > colIdx and lineSplit[colIdx]:
                    roleIds.add(lineSplit[colIdx])
    except OSError as e:
        raise InputError('Unable to read role set file %s: %s' % (roleSetFile, e)) from e

    return roleIds


def subsetRoles(roleLines, keepIds, fout):
    """Copy the role definitions whose ID is in keepIds. Returns (read, written) counts."""
    inCount = 0
    outCount = 0
    for line in roleLines:
        inCount += 1
        roleId = line.split('\t', 1)[0].rstrip('\n')
        if roleId in keepIds:
            fout.write(line if line.endswith('\n') else line + '\n')
            outCount += 1

    logging.getLogger('timestamp').info('%d lines read, %d lines written.' % (inCount, outCount))

    return inCount, outCount
