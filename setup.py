#!/usr/bin/env python3

import os
from setuptools import setup


def version():
    setupDir = os.path.dirname(os.path.realpath(__file__))
    with open(os.path.join(setupDir, 'seedbin', 'VERSION')) as versionFile:
        return versionFile.readline().strip()


def readme():
    with open('README.md') as f:
        return f.read()


setup(
    name='seedbin',
    version=version(),
    packages=['seedbin', 'seedbin.test', 'seedbin.util'],
    scripts=['bin/seedbin'],
    package_data={'seedbin': ['VERSION']},
    include_package_data=True,
    license='GPL3',
    description='Bin metagenome contigs into species using seed proteins and discriminating kmers.',
    long_description=readme(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
    ],
    install_requires=[
        "numpy >= 1.21.3",
        "prettytable >= 3.0",
        "biopython >= 1.79",
        "setuptools"],
    extras_require={'test': ['pytest']},
    zip_safe=False
)
