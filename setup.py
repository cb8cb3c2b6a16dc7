from setuptools import setup, find_packages


setup(
    name="kprng",
    version="0.1",
    packages=find_packages(include=["kprng", "kprng.*"]),
    description="Deterministic expandable-output PRNG built on Keccak (SHA3-256) in counter mode.",
    author="vercingetorx",
    install_requires=[
        "pycryptodomex>=3.23.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "kprng=kprng.cli:main",
        ]
    },
)
