from setuptools import setup, find_packages
from os import path, environ
import sys
from pathlib import Path

# needed for isolated environment
sys.path.insert(0, str(Path(__file__).parent.resolve()))
from heapgen.heapgen_config import heapgen_version
sys.path.pop(0)


def read_file(name):
    """Returns a file's contents"""
    with open(path.join(path.dirname(__file__), name), encoding="utf-8") as f:
        return f.read()

# If we're testing packaging, build using a ".devN" suffix in the version number,
# so that we can upload new files (as testpypi/pypi don't allow re-uploading files with
# the same name as previously uploaded).
# Numbering scheme: https://www.python.org/dev/peps/pep-0440
dev_build = ('.dev' + environ['DEV_BUILD']) if 'DEV_BUILD' in environ else ''

setup(
    name="heapgen",
    version=heapgen_version + dev_build,
    description="Scheduled large-object allocator for memory load testing",
    long_description=read_file("README.md"),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.22",
        "pydantic>=2.6",
        "rich>=10.7.0",
    ],
    extras_require={
        "test": [
            "hypothesis>=6.0",
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "heapgen = heapgen.__main__:main",
        ],
    },
)
