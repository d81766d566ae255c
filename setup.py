# setup.py
from setuptools import setup, find_packages

setup(
    name="linear_lab",
    version="0.1.0",
    description="Interactive explorer, guessing game and quiz for linear functions y = ax + b",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"linear_lab": ["data/*.json"]},
    python_requires=">=3.10",
    install_requires=[
        "sympy",
        "matplotlib",
        "pillow",
        "numpy",
        "openai>=1.40.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "linear-lab = linear_lab.cli:main",
        ],
    },
)
