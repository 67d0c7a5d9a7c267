import re
from setuptools import setup, find_packages

# Load version from the package without importing it
with open('devenv/version.py', 'r') as version_file:
    version = re.search(r'__version__ = "([^"]+)"', version_file.read()).group(1)

setup(
    name="devenv",
    version=version,
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[],
    entry_points={
        "console_scripts": [
            "devenv=devenv.cli:main",
        ],
    },
    description="devenv: Locate, load and cache a project's development environment config",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.9',
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
    },
    include_package_data=True,
)
