import os

from setuptools import find_packages, setup


# read the version from the VERSION file
def get_version():
    with open(os.path.join(os.path.dirname(__file__), "VERSION"), "r") as version_file:
        return version_file.read().strip()


# Set the version in the slimaws/version.py file
def set_version_constant(version: str):
    with open(
        os.path.join(os.path.dirname(__file__), "slimaws-core", "slimaws", "version.py"), "w"
    ) as version_file:
        version_file.write(f'__version__ = "{version}"\n')


version = get_version()
set_version_constant(version)

setup(
    name="slimaws",
    version=version,
    description="Thin typed clients for AWS service APIs",
    package_dir={"": "slimaws-core"},
    packages=find_packages(where="slimaws-core"),
    package_data={"slimaws": ["aws/*.json", "aws/data/*.json", "aws/data/*/*/*.json"]},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "botocore>=1.31",
        "jsonpatch>=1.32",
        "python-dotenv>=1.0",
        "requests>=2.28",
        "werkzeug>=2.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
)
