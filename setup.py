#!/usr/bin/env python3
# Installs the python package and the OCF script; link bin/ZFS into
# /usr/lib/ocf/resource.d/<provider>/ to make it visible to pacemaker
from setuptools import setup
import contextlib
import re

VERSION = '0.0.1'

with contextlib.suppress(Exception):
    with open('version', 'r', encoding='ascii') as f:
        match = re.match('^\\d+\\.\\d+\\.\\d+', f.read().strip())
        if match:
            VERSION = match.group(0)

setup(name='zfsra',
      version=VERSION,
      description='OCF resource agent managing ZFS pools in a Pacemaker cluster',
      packages=['zfsra'],
      install_requires=['lxml'],
      extras_require={'test': ['pytest']},
      scripts=['bin/ZFS'],
      python_requires='>=3.6',
      include_package_data=True)
