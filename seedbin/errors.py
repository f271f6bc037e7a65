###############################################################################
#
# errors.py - exceptions raised by seedbin
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


class BinningError(Exception):
    pass


class InputError(BinningError):
    """Unreadable or malformed contig, table, or checkpoint file."""
    pass


class FormatError(InputError):
    """Malformed bin group checkpoint."""
    pass


class ConfigError(BinningError):
    """Tuning parameter out of range."""
    pass


class DataIntegrityError(BinningError):
    """Bin group invariant violated (duplicate contig, bad merge)."""
    pass


class CollaboratorError(BinningError):
    """Seed-protein search or genome fetch failed."""
    pass
