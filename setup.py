from setuptools import setup, find_packages

setup(
    name="lintkit",
    version="0.1.0",
    packages=find_packages(include=["lintkit", "lintkit.*"]),
    install_requires=[
        "click",
        "pyyaml",
        "structlog",
        "gitignore-parser",
        "pydantic>=2",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "lintkit = lintkit.cli.main:main",
        ],
    },
)
