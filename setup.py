from setuptools import setup, find_packages

setup(
    name="secretgate",
    version="1.0.0",
    description="SECRETGATE: a shared-flag login gate in front of a secret message",
    packages=find_packages(include=["secretgate", "secretgate.*"]),
    install_requires=[
        "flask",
        "requests",
        "pyyaml",
        "colorama",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "secretgate=secretgate.cli:main",
        ],
    },
    python_requires=">=3.8",
)
