#!/usr/bin/env python3
import sys

from setuptools import setup

from gamesync import __version__ as VERSION

if sys.version_info < (3, 7):
    sys.exit('Python 3.7 is required to run gamesync')

setup(
    name='gamesync',
    version=VERSION,
    license='GPL-3',
    packages=[
        'gamesync',
        'gamesync.gui',
        'gamesync.util',
    ],
    scripts=['bin/gamesync'],
    zip_safe=False,
    install_requires=[
        'PyGObject',
    ],
    extras_require={
        'test': ['pytest'],
    },
    description='Sync a game save with a cloud folder around each play session',
    long_description="""gamesync pulls the newest save from a cloud mirrored
    folder before a game starts, backs it up, launches the game, shows a
    status window while it runs and flags the cloud save once it exits.""",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: End Users/Desktop',
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
        'Programming Language :: Python',
        'Operating System :: Linux',
        'Topic :: Games/Entertainment'
    ],
)
