# coding: utf-8
# Copyright 2026 The fontmanifest Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import os
from setuptools import setup


def fontmanifest_version():
    about = {}
    with open(os.path.join("Lib", "fontmanifest", "_version.py")) as f:
        exec(f.read(), about)
    return about["version"]


# Read the contents of the README file
with open('README.md') as f:
    long_description = f.read()

setup(
    name="fontmanifest",
    version=fontmanifest_version(),
    description='Build a versioned key/value manifest of a google/fonts'
                ' style checkout and publish it to git',
    long_description=long_description,
    long_description_content_type='text/markdown',
    package_dir={'': 'Lib'},
    packages=['fontmanifest',
              'fontmanifest.scripts'],
    scripts=[os.path.join('bin', 'fontmanifest')],
    zip_safe=False,
    classifiers=[
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Topic :: Text Processing :: Fonts',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3'
    ],
    python_requires=">=3.8",
    extras_require={"test": ['pytest']},
    install_requires=[
        'setuptools',
        'FontTools',
        'pygit2',
        'rich',
        'strictyaml',
        'tabulate',
    ]
    )
