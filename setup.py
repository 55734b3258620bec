#!/usr/bin/env python3
"""
PortSniff Setup Script
Installs the portsniff package and its command line entry point
"""

from pathlib import Path

from setuptools import setup, find_packages


def read_version(root: Path) -> str:
    """Read PORTSNIFF_VERSION from portsniff/env.py without importing it"""
    env_file = root / 'portsniff' / 'env.py'
    for line in env_file.read_text(encoding='utf-8').splitlines():
        if line.startswith('PORTSNIFF_VERSION'):
            return line.split('=', 1)[1].strip().strip('\'"')
    raise RuntimeError(f"PORTSNIFF_VERSION not found in {env_file}")


portsniff_root = Path(__file__).parent.resolve()

setup(
    name='portsniff',
    version=read_version(portsniff_root),
    description='Concurrent TCP connect port scanner',
    python_requires='>=3.8',
    packages=find_packages(include=['portsniff', 'portsniff.*']),
    install_requires=[
        'click>=8.0',
        'colorama>=0.4.6',
        'python-dotenv>=0.19',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-cov>=3.0',
            'pytest-mock>=3.6',
            'pytest-timeout>=2.1',
        ],
    },
    entry_points={
        'console_scripts': [
            'portsniff=portsniff.cli:main',
        ],
    },
)
