###############################################################################
#
# timeKeeper.py - report elapsed time of commands
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

import time
import logging


class TimeKeeper():
    def __init__(self):
        self.logger = logging.getLogger('timestamp')
        self.startTime = time.time()
        self.lastLogTime = self.startTime

    def printTimeStamp(self):
        curTime = time.time()
        timeStr = '{ Current stage: %s || Total: %s }' % (self.secondsToStr(curTime - self.lastLogTime),
                                                         self.secondsToStr(curTime - self.startTime))
        self.lastLogTime = curTime
        self.logger.info(timeStr)

    def secondsToStr(self, t):
        rediv = lambda ll, b: list(divmod(ll[0], b)) + ll[1:]
        return '%d:%02d:%02d.%03d' % tuple(rediv(rediv(rediv([t * 1000, ], 1000), 60), 60))
