import os
from setuptools import setup, find_packages

# locate files relative to this setup.py
HERE = os.path.abspath(os.path.dirname(__file__))


def parse_requirements(rel_path):
    path = os.path.join(HERE, rel_path)
    with open(path, "r") as f:
        lines = f.read().splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


setup(
    name="abilityscout",
    version="1.0.0",
    description="Static analyzer that discovers WordPress hooks, REST routes and shortcodes and ranks them as ability candidates",
    long_description=open(os.path.join(HERE, "README.md"), encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["abilityscout", "abilityscout.*"]),
    package_data={"abilityscout.mcp": ["tool_descriptions.toml"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=parse_requirements("abilityscout/requirements.txt"),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "abilityscout=abilityscout.main:main",
            "abilityscout-mcp=abilityscout.mcp.server:main",
        ],
    },
    include_package_data=True,
)
