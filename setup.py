import os

from setuptools import find_packages, setup

setup(
    name="vetted",
    version="0.1.0",
    packages=find_packages(include=["vetted", "vetted.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.10.6,<3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    author="Vetted Contributors",
    description="Declarative value validation with ordered, named constraints",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
)
