from configparser import ConfigParser

from setuptools import setup


with open("README.md", "r") as fd:
    long_description = fd.read()


def get_dependencies(section: str = "packages"):
    pipfile = ConfigParser()
    assert pipfile.read("Pipfile"), "Could not read Pipfile"
    return list(pipfile[section])


setup(
    name="secretvote",
    version="2026.10.19",
    author="Dorian Jaminais",
    author_email="sharedvault@jaminais.fr",
    description="Recover a Shamir secret from shares, some of which may be corrupted, "
    "by majority vote over exact interpolations.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/nanassito/secretvote",
    packages=["secretvote", "secretvote.arith"],
    entry_points={"console_scripts": ["secretvote=secretvote.cli:main"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: Public Domain",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=get_dependencies(),
    extras_require={"test": get_dependencies("dev-packages")},
)
