#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Paravec Contributors
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Run with::

    python ./setup.py install
"""

from pathlib import Path

from setuptools import find_packages, setup

# packages included for build-testing everywhere
core_testenv = [
    'pytest',
    'pytest-cov',
    'testfixtures',
]

install_requires = [
    'numpy >= 1.18.5',
    'scipy >= 1.7.0',
    'smart_open >= 1.8.1',
]

setup(
    name='paravec',
    version='0.3.0.dev0',
    description='Joint training of word vectors and paragraph vectors',
    long_description=Path(__file__).with_name("README.md").read_text(),
    long_description_content_type='text/markdown',
    packages=find_packages(include=['paravec', 'paravec.*']),

    author='Paravec Contributors',

    license='LGPL-2.1-only',

    keywords='paragraph vectors, doc2vec, PV-DM, word embeddings, negative sampling',

    platforms='any',

    zip_safe=False,

    classifiers=[  # from https://pypi.org/classifiers/
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Science/Research',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Scientific/Engineering :: Artificial Intelligence',
        'Topic :: Text Processing :: Linguistic',
    ],

    python_requires='>=3.8',
    install_requires=install_requires,
    tests_require=core_testenv,
    extras_require={
        'test': core_testenv,
    },

    package_data={'paravec.test': ['test_data/*']},
)
