# -*- mode: python; encoding: utf-8 -*-
#
# Copyright 2021 the highlightd contributors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License.  You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.  See the
# License for the specific language governing permissions and limitations under
# the License.

from setuptools import setup, find_packages

try:
    with open("README.rst", "r", encoding="utf-8") as file:
        README_rst = file.read().splitlines()
except OSError:
    README_rst = [""]


def read_requirements(filename):
    with open(filename, "r", encoding="utf-8") as file:
        return [line for line in file.read().splitlines() if line.strip()]


setup(
    name="highlightd",
    version="1.0.0",
    description=README_rst[0],
    long_description="\n".join(README_rst[2:]),
    author="The highlightd contributors",
    license="Apache License, Version 2.0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Text Processing :: Markup :: HTML",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3.9",
    ],
    packages=find_packages("src", include=["highlightd", "highlightd.*"]),
    package_dir={"": "src"},
    package_data={"highlightd.data": ["*.yaml"]},
    entry_points={
        "console_scripts": [
            "highlightctl = highlightd.highlightctl:main",
        ]
    },
    python_requires=">=3.9",
    install_requires=read_requirements("requirements.txt"),
    extras_require={"test": read_requirements("requirements-test.txt")},
    zip_safe=True,
)
