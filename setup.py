from setuptools import setup, find_packages

setup(
    name="hotspot-beacon-analyzer",
    version="0.1.0",
    description="Hotspot 2.0 / Passpoint decoding of 802.11 beacon information elements",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "scapy>=2.5.0",
        "click>=8.0.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black",
            "flake8",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "hotspot-analyzer=hotspot_analyzer.cli.main:main",
        ],
    },
    python_requires=">=3.8",
)
