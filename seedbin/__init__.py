import os


def _readVersion():
    versionFile = os.path.join(os.path.dirname(os.path.realpath(__file__)), 'VERSION')
    with open(versionFile) as f:
        return f.readline().strip()


__version__ = _readVersion()
